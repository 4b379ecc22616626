"""Blank-value and field-list normalization utilities."""

from __future__ import annotations

import re
from typing import Iterable, Optional


# ── Blank detection ────────────────────────────────────────────────────────

# Whitespace as understood by the crawler that produced stored checksums:
# ASCII controls, the Unicode space/line/paragraph separators, minus the
# non-breaking spaces (U+00A0, U+2007, U+202F).  U+0085 is not whitespace.
_BLANK = re.compile(
    r"[\t\n\x0b\x0c\r\x1c-\x1f \u1680\u2000-\u2006\u2008-\u200a\u2028\u2029\u205f\u3000]*"
)


def is_blank(value: Optional[str]) -> bool:
    """Return ``True`` if *value* is ``None``, empty, or whitespace only.

    Non-breaking spaces are not whitespace, so ``"\\u00a0"`` is not blank.
    """
    return value is None or _BLANK.fullmatch(value) is not None


def is_not_blank(value: Optional[str]) -> bool:
    return not is_blank(value)


# ── Field lists ────────────────────────────────────────────────────────────

def split_csv(raw: Optional[str]) -> list[str]:
    """Split a comma-separated field list.

    Entries are stripped and empty entries dropped, so ``"title, ,author"``
    becomes ``["title", "author"]``.  Order and duplicates are preserved.
    """
    if raw is None:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def join_csv(names: Optional[Iterable[str]]) -> str:
    """Inverse of :func:`split_csv` (``None`` renders as ``""``)."""
    if not names:
        return ""
    return ",".join(names)
