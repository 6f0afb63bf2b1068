"""Title normalization and similarity scoring.

Used by the best-match resolver to compare metadata display names against the
names stored in the filler database.
"""

import re

from rapidfuzz.distance import Levenshtein

_DISALLOWED = re.compile(r"[^a-z0-9\s]", re.ASCII)
_WHITESPACE = re.compile(r"\s+", re.ASCII)


def normalize(name: str) -> str:
    """Canonicalize a title for comparison.

    Lower-cases, drops everything outside ``[a-z0-9]`` and whitespace, then
    collapses whitespace runs to a single space and trims the ends.

    Args:
        name: Free-text title.

    Returns:
        The normalized title. ``normalize(normalize(x)) == normalize(x)``.

    Example:
        >>> normalize("  Naruto:  Shippuden!! ")
        'naruto shippuden'
    """
    lowered = _DISALLOWED.sub("", name.lower())
    return _WHITESPACE.sub(" ", lowered).strip()


def distance(a: str, b: str) -> int:
    """Return the Levenshtein edit distance between *a* and *b*.

    Insertions, deletions and substitutions each cost 1.
    """
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Score how alike two titles are after normalization.

    Returns exactly ``1.0`` when the normalized forms are equal (this includes
    two titles that both normalize to the empty string). Otherwise returns
    ``1 - distance / max_length``. The value is not clamped; callers that need
    a strict ``[0, 1]`` range for display must clamp it themselves.

    Args:
        a: First title.
        b: Second title.

    Returns:
        Similarity score, higher is better.
    """
    norm_a = normalize(a)
    norm_b = normalize(b)

    if norm_a == norm_b:
        return 1.0

    max_len = max(len(norm_a), len(norm_b))
    return 1 - distance(norm_a, norm_b) / max_len
