"""Text interpretation for processed records."""

import re
from typing import Optional

# Signed decimal in any script's decimal digits. No whitespace, separators or radix prefixes.
_INTEGER_RE = re.compile(r"[+-]?\d+")

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def parse_identifier(text: Optional[str]) -> Optional[int]:
    """
    Parse identifier text as a 64-bit signed integer.

    Returns None for absent, empty, malformed or out-of-range text.
    """
    if not text or not isinstance(text, str):
        return None
    if _INTEGER_RE.fullmatch(text) is None:
        return None

    value = int(text)
    if value < INT64_MIN or value > INT64_MAX:
        return None
    return value


def is_completed_status(status: Optional[str], completed: str) -> bool:
    """Case-insensitive check of a status against the completed literal."""
    if not isinstance(status, str):
        return False
    return status.upper() == completed.upper()
