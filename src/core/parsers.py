from __future__ import annotations

import re

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
_INT64_DIGITS = len(str(INT64_MAX))

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}


def parse_bool(value: str | bool) -> bool:
    """Boolean-like text to bool. Anything unrecognized is False."""
    if isinstance(value, bool):
        return value
    return str(value) in _TRUE_VALUES


def parse_int(value: str | int) -> int:
    """
    Strict base-10 integer parsing: optional sign followed by digits.
    Unparsable text yields 0; values outside the signed 64-bit range saturate.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        number = value
    else:
        text = str(value)
        if not _INTEGER_PATTERN.fullmatch(text):
            return 0
        # int() refuses very long digit strings; anything over 19 digits saturates anyway.
        if len(text.lstrip("+-").lstrip("0")) > _INT64_DIGITS:
            return INT64_MIN if text.startswith("-") else INT64_MAX
        number = int(text)
    return max(INT64_MIN, min(INT64_MAX, number))
