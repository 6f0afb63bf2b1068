"""Persisted identity cache: external identifier -> filler database key.

The mapping lives in a flat JSON file and is re-read on every lookup, so
several processes can share one file. Entries never expire. Writes replace the
whole file through a uniquely named temporary sibling and ``os.replace`` so a
reader only ever sees a complete mapping.
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path

from fillerinfo.errors import CacheUnavailable

logger = logging.getLogger(__name__)


class IdentityCache:
    """Memoizes identifier -> filler database key resolutions on disk.

    Within one instance, ``record`` calls are serialized by an asyncio lock so
    two concurrent first-time resolutions cannot drop each other's entry.
    """

    def __init__(self, path: Path) -> None:
        """Create a cache backed by the JSON file at *path*."""
        self.path = Path(path)
        self._write_lock = asyncio.Lock()

    def _read(self) -> dict[str, str]:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as exc:
            raise CacheUnavailable(f"{self.path} does not exist") from exc
        except (OSError, ValueError) as exc:
            raise CacheUnavailable(f"{self.path} is unreadable: {exc}") from exc
        if not isinstance(data, dict):
            raise CacheUnavailable(f"{self.path} does not hold a JSON object")
        mapping: dict[str, str] = {}
        for identifier, key in data.items():
            if isinstance(key, str) and key:
                mapping[identifier] = key
            else:
                logger.debug(f"Ignoring identity cache entry {identifier!r}: {key!r}")
        return mapping

    def _load(self) -> dict[str, str]:
        try:
            return self._read()
        except CacheUnavailable as exc:
            logger.debug(f"Treating identity cache as empty: {exc}")
            return {}

    def _write(self, mapping: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            json.dump(mapping, f, indent=2)
        try:
            os.replace(f.name, self.path)
        except OSError:
            Path(f.name).unlink(missing_ok=True)
            raise

    async def entries(self) -> dict[str, str]:
        """Return the whole persisted mapping (empty if missing or corrupt)."""
        return await asyncio.to_thread(self._load)

    async def lookup(self, identifier: str) -> str | None:
        """Return the cached database key for *identifier*, or None."""
        mapping = await self.entries()
        return mapping.get(identifier)

    async def record(self, identifier: str, key: str) -> None:
        """Persist ``identifier -> key``, keeping every other entry."""

        def merge_and_write() -> None:
            mapping = self._load()
            mapping[identifier] = key
            self._write(mapping)

        async with self._write_lock:
            await asyncio.to_thread(merge_and_write)
        logger.debug(f"Cached {identifier} -> {key}")
