# src/hederafmt/utils/bignumber.py
from __future__ import annotations

import math
from typing import Any

from eth_utils import big_endian_to_int, to_int

from hederafmt.errors import FormatError
from hederafmt.utils.hexstr import is_hex_string

# Largest integer a double can hold exactly; JSON numbers from RPC peers are
# only trusted inside this range.
MAX_SAFE_INTEGER = 2**53 - 1
MIN_SAFE_INTEGER = -MAX_SAFE_INTEGER


def _parse_int_string(value: str) -> int:
    negative = value.startswith("-")
    body = value[1:] if negative else value

    if is_hex_string(body) and len(body) > 2:
        n = to_int(hexstr=body)
    elif body.isascii() and body.isdigit():
        n = int(body, 10)
    else:
        raise FormatError.argument("invalid_number", "invalid BigNumber string", value=value)
    return -n if negative else n


def to_big_int(value: Any) -> int:
    """Coerce an integer-like value to an arbitrary-precision int.

    Accepts:
      - int (bool is rejected)
      - integral float inside the safe range
      - "0x"-prefixed hex string, optionally negative ("-0x1f")
      - decimal string, optionally negative
      - bytes / bytearray (big-endian, unsigned)
    """
    if isinstance(value, bool):
        raise FormatError.argument("invalid_number", "invalid BigNumber value", value=value)

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value) or value != math.floor(value):
            raise FormatError.argument("invalid_number", "invalid BigNumber value", value=value)
        if value > MAX_SAFE_INTEGER or value < MIN_SAFE_INTEGER:
            raise FormatError.argument("numeric_overflow", "overflow", value=value)
        return int(value)

    if isinstance(value, str):
        return _parse_int_string(value)

    if isinstance(value, (bytes, bytearray)):
        return big_endian_to_int(bytes(value)) if value else 0

    raise FormatError.argument("invalid_number", "invalid BigNumber value", value=value)


def to_safe_number(value: Any) -> int:
    """Like to_big_int, but the result must fit the safe-integer range."""
    n = to_big_int(value)
    if n > MAX_SAFE_INTEGER or n < MIN_SAFE_INTEGER:
        raise FormatError.argument("numeric_overflow", "overflow", value=value)
    return n


def is_zero(value: Any) -> bool:
    return to_big_int(value) == 0
