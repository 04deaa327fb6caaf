"""Document name validation.

Names are joined directly into storage paths, so only ASCII letters, digits,
underscore and space are allowed. That rules out `/`, `\\`, `.` and `..`.
"""

from __future__ import annotations

import re

from ..errors import InvalidName

_NAME_RE = re.compile(r"[A-Za-z0-9_ ]+")


def is_valid_name(name: object) -> bool:
    """Return True if `name` is safe to use as a storage key."""
    if not isinstance(name, str) or not name:
        return False
    return _NAME_RE.fullmatch(name) is not None


def ensure_valid_name(name: str) -> str:
    if not is_valid_name(name):
        raise InvalidName(f"Invalid document name: {name!r}")
    return name
