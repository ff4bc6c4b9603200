# src/hederafmt/utils/hexstr.py
from __future__ import annotations

"""Hex-string helpers.

A "hex string" here is always a lowercase-`0x`-prefixed str of hex digits
(any case) with nothing after the last digit. The empty payload "0x" is a
valid hex string of zero bytes. Prefix and digit checks, plus byte encoding,
go through eth-utils.
"""

from typing import Any, Optional

from eth_utils import encode_hex, is_0x_prefixed, is_hexstr

from hederafmt.errors import FormatError


def is_hex_string(value: Any, length: Optional[int] = None) -> bool:
    if not isinstance(value, str) or not is_0x_prefixed(value) or value[1] != "x":
        return False
    if not is_hexstr(value):
        return False
    if length is not None and len(value) != 2 + 2 * int(length):
        return False
    return True


def hex_data_length(value: Any) -> Optional[int]:
    """Byte length of a hex string, or None if it is not whole-byte hex data."""
    if not is_hex_string(value) or len(value) % 2:
        return None
    return (len(value) - 2) // 2


def hex_data_slice(value: str, offset: int, end_offset: Optional[int] = None) -> str:
    if hex_data_length(value) is None:
        raise FormatError.argument("invalid_hex", "invalid hexData", value=value)
    start = 2 + 2 * int(offset)
    if end_offset is None:
        return "0x" + value[start:]
    return "0x" + value[start : 2 + 2 * int(end_offset)]


def hex_zero_pad(value: str, length: int) -> str:
    """Left-pad a hex string with zeros to `length` bytes."""
    if not is_hex_string(value):
        raise FormatError.argument("invalid_hex", "invalid hex string", value=value)
    if len(value) > 2 * int(length) + 2:
        raise FormatError.argument("invalid_hex", "value out of range", value=value)
    return "0x" + value[2:].rjust(2 * int(length), "0")


def hexlify(data: bytes) -> str:
    return encode_hex(bytes(data))
