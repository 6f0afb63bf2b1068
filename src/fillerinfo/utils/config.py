"""Config utility for persistent fillerinfo settings.

Settings live in ``$XDG_CONFIG_HOME/fillerinfo/config.toml`` (default
``~/.config/fillerinfo/config.toml``) and can be overridden through
``FILLERINFO_*`` environment variables or CLI options. Uses tomli/tomli-w for
TOML parsing and writing.

Known keys:
- ``data.filler_db``: path of the filler database JSON file.
- ``data.id_cache``: path of the identity cache JSON file.
- ``match.threshold``: minimum fuzzy score for a title match.
- ``metadata.cache_ttl``: seconds metadata lookups stay cached (0 = forever).
- ``metadata.cache_size``: maximum number of cached metadata lookups.
"""

from pathlib import Path
from typing import TypeVar, Any, cast
import os
import contextlib

import tomli
import tomli_w

# Determine config directory respecting XDG_CONFIG_HOME if set.
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
CONFIG_DIR = _xdg_config_home / "fillerinfo"
CONFIG_FILE = CONFIG_DIR / "config.toml"

DEFAULT_FILLER_DB = "filler-data.json"
DEFAULT_ID_CACHE = "id-cache.json"

T = TypeVar("T")


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""

    if not CONFIG_FILE.exists():
        return {}
    with CONFIG_FILE.open("rb") as f:
        return tomli.load(f)


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: dotted_key="data.filler_db" will attempt
    ``data["data"]["filler_db"]`` returning None if any level is missing.
    """

    current: Any = data
    for part in dotted_key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str, prefix: str = "FILLERINFO_") -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "match.threshold" -> "FILLERINFO_MATCH_THRESHOLD".
    """

    return prefix + dotted_key.replace(".", "_").upper()


def _coerce(raw: Any, default: T) -> T:
    """Best-effort conversion of *raw* to the type of *default*."""
    if isinstance(default, bool):
        if isinstance(raw, bool):
            return cast(T, raw)
        return cast(T, str(raw).lower() in {"1", "true", "yes", "on"})
    if isinstance(default, int):
        with contextlib.suppress(TypeError, ValueError):
            return cast(T, int(raw))
        return default
    if isinstance(default, float):
        with contextlib.suppress(TypeError, ValueError):
            return cast(T, float(raw))
        return default
    if isinstance(default, str):
        return cast(T, str(raw))
    return cast(T, raw)


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: T | None = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"match.threshold"``.
        default: Value to fall back to when no overrides found. Its type drives
            coercion of env and config values; unparseable values fall back to
            *default*.
        cli_value: Value passed from CLI option (``None`` when not provided).

    Returns:
        The resolved value with type matching *default* (or *cli_value*).
    """

    if cli_value is not None:
        return cli_value

    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return _coerce(os.environ[env_var], default)

    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return _coerce(file_val, default)

    return default


def set_setting(key: str, value: Any) -> None:
    """Persist *value* under dotted *key* in config.toml.

    Intermediate tables are created as needed; other keys are preserved.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    data = _read_config_file()
    *tables, leaf = key.split(".")
    current = data
    for part in tables:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]
    current[leaf] = value
    with CONFIG_FILE.open("wb") as f:
        tomli_w.dump(data, f)


def filler_db_path(cli_value: Path | None = None) -> Path:
    """Return the configured filler database path."""
    return Path(resolve_setting("data.filler_db", default=DEFAULT_FILLER_DB, cli_value=cli_value))


def id_cache_path(cli_value: Path | None = None) -> Path:
    """Return the configured identity cache path."""
    return Path(resolve_setting("data.id_cache", default=DEFAULT_ID_CACHE, cli_value=cli_value))
