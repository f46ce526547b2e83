"""Small string and environment helpers used by the .desktop scanner."""

from __future__ import annotations

import os

_BLANKS = " \t"


def xdg_var_or_default(name: str, default: str) -> str:
    """Return the value of an XDG variable, or ``default`` when it is unset or empty."""
    value = os.environ.get(name)
    if not value:
        return default
    return value


def has_suffix(s: str, suffix: str) -> bool:
    """True if ``s`` ends with ``suffix`` and has at least one character before it."""
    return len(s) > len(suffix) and s.endswith(suffix)


def strip_leading(s: str) -> str:
    return s.lstrip(_BLANKS)


def strip_trailing(s: str) -> str:
    return s.rstrip(_BLANKS)
