"""
Canonical string form.

Every check and every terminal coercion sees the source value through
to_text(), so numbers and strings are validated as text.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any, Optional

INT_SYNTAX = re.compile(r"[+-]?[0-9]+")
FLOAT_SYNTAX = re.compile(
    r"[+-]?(?:"
    r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|inf|infinity|nan"
    r")",
    re.IGNORECASE,
)

_INT_CHUNK_DIGITS = 1000
_INT_CHUNK = 10 ** _INT_CHUNK_DIGITS


def to_text(value: Any) -> str:
    """
    Format a value as its canonical text.

    Args:
        value: Any source value.

    Returns:
        Text form shared by all checks and coercions.
    """
    if isinstance(value, str):
        return value
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return _int_text(value)
    if isinstance(value, float):
        return _float_text(value)
    if value is None:
        return "<nil>"
    return str(value)


def _int_text(value: int) -> str:
    try:
        return str(value)
    except ValueError:
        pass
    # Past the interpreter's digit limit: convert in fixed-size chunks
    sign = "-" if value < 0 else ""
    value = abs(value)
    chunks = []
    while value:
        value, chunk = divmod(value, _INT_CHUNK)
        chunks.append(chunk)
    head = str(chunks.pop())
    tail = "".join(str(c).zfill(_INT_CHUNK_DIGITS) for c in reversed(chunks))
    return sign + head + tail


def _float_text(value: float) -> str:
    """
    Shortest round-trip digits, positional unless the decimal exponent
    is below -4 or at least 21 (1e21 -> "1e+21", 1e20 -> "100000000000000000000").
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    prefix = "-" if sign else ""
    point = len(digits) + exponent
    sci = point - 1

    if sci < -4 or sci >= 21:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        return f"{prefix}{mantissa}e{'-' if sci < 0 else '+'}{abs(sci):02d}"
    if point <= 0:
        return f"{prefix}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return prefix + digits + "0" * (point - len(digits))
    return f"{prefix}{digits[:point]}.{digits[point:]}"


def parse_int(text: str) -> Optional[int]:
    """Parse a strict base-10 integer; None if the text is not one."""
    if not INT_SYNTAX.fullmatch(text):
        return None
    try:
        return int(text)
    except ValueError:
        # Exceeds the interpreter's integer string conversion limit
        return None


def parse_float(text: str) -> Optional[float]:
    """Parse a strict decimal float; None if the text is not one."""
    if not FLOAT_SYNTAX.fullmatch(text):
        return None
    return float(text)
