"""MPN normalization."""

from __future__ import annotations

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_mpn(raw: str | None) -> str:
    """Return the comparable key for a manufacturer part number.

    The value is lower-cased and everything outside ``[a-z0-9]`` is then
    dropped, so ``"WED-15P2"``, ``"wed15p2"`` and ``"WED 15P2"`` all map to
    ``"wed15p2"``. Non-ASCII characters that survive lower-casing are removed
    rather than transliterated. ``None`` maps to ``""``.
    """
    if not raw:
        return ""
    return _NON_ALNUM.sub("", raw.lower())
