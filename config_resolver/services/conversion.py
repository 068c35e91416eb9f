"""
String -> typed conversion used by the resolver's typed getters.

Each function returns None when the text is not a valid literal for the target
type, leaving the choice of fallback to the caller.
"""

from __future__ import annotations

import math
import re
from typing import Optional

_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(
    r"[+-]?(?:NaN|Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?[fFdD]?)"
)

INT32_RANGE = (-(2**31), 2**31 - 1)
INT64_RANGE = (-(2**63), 2**63 - 1)
FLOAT32_MAX = 3.4028234663852886e38


def to_integer(text: str, bits: int = 32) -> Optional[int]:
    """Base-10 ASCII integer within the signed range of `bits` (32 or 64)."""
    if not _INTEGER.fullmatch(text):
        return None
    value = int(text)
    lo, hi = INT64_RANGE if bits == 64 else INT32_RANGE
    if value < lo or value > hi:
        return None
    return value


def to_decimal(text: str, single: bool = False) -> Optional[float]:
    """
    Float literal: sign, digits, fraction, exponent, optional f/F/d/D suffix,
    or NaN / Infinity. Finite literals that overflow the precision give None.
    """
    if not _DECIMAL.fullmatch(text):
        return None
    body = text[:-1] if text[-1] in "fFdD" else text
    if body.lstrip("+-") == "NaN":
        return math.nan
    if body.lstrip("+-") == "Infinity":
        return -math.inf if body.startswith("-") else math.inf

    value = float(body)
    if math.isinf(value):
        return None
    if single and abs(value) > FLOAT32_MAX:
        return None
    return value


def to_boolean(text: str) -> Optional[bool]:
    """"true" / "false", any case."""
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def to_char(text: str) -> Optional[str]:
    """First character; None only for an empty string."""
    return text[0] if text else None
