# src/hederafmt/address.py
from __future__ import annotations

"""Address checksumming and Hedera account-id resolution.

Hedera account ids ("shard.realm.num") map onto 20-byte EVM addresses as
4-byte shard || 8-byte realm || 8-byte num, big-endian.
"""

import re
from dataclasses import dataclass
from typing import Any, Mapping, Union

from eth_utils import is_checksum_address, is_hex_address, to_checksum_address

from hederafmt.errors import FormatError

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

_ACCOUNT_RE = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)")
_HEX40_RE = re.compile(r"(0x)?[0-9a-fA-F]{40}")


@dataclass(frozen=True)
class AccountId:
    shard: int
    realm: int
    num: int

    def __str__(self) -> str:
        return f"{self.shard}.{self.realm}.{self.num}"


AccountLike = Union[str, AccountId, Mapping[str, Any]]


def parse_account(account: AccountLike) -> AccountId:
    if isinstance(account, AccountId):
        acc = account
    elif isinstance(account, str):
        m = _ACCOUNT_RE.fullmatch(account.strip())
        if not m:
            raise FormatError.argument("invalid_account", "invalid account id", argument="account", value=account)
        acc = AccountId(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    elif isinstance(account, Mapping):
        try:
            acc = AccountId(int(account["shard"]), int(account["realm"]), int(account["num"]))
        except (KeyError, TypeError, ValueError) as e:
            raise FormatError.argument(
                "invalid_account", "invalid account id", argument="account", value=dict(account)
            ) from e
    else:
        raise FormatError.argument("invalid_account", "invalid account id", argument="account", value=account)

    if not (0 <= acc.shard < 2**32 and 0 <= acc.realm < 2**64 and 0 <= acc.num < 2**64):
        raise FormatError.argument("invalid_account", "account id out of range", argument="account", value=str(acc))
    return acc


def get_address(value: str) -> str:
    """Return the EIP-55 checksummed form of a 20-byte hex address.

    Mixed-case input must already carry a valid checksum.
    """
    if not isinstance(value, str) or not _HEX40_RE.fullmatch(value):
        raise FormatError.argument("invalid_address", "invalid address", argument="address", value=value)

    addr = value if value.startswith("0x") else "0x" + value
    if not is_hex_address(addr):
        raise FormatError.argument("invalid_address", "invalid address", argument="address", value=value)

    body = addr[2:]
    if body != body.lower() and body != body.upper() and not is_checksum_address(addr):
        raise FormatError.argument("bad_address_checksum", "bad address checksum", argument="address", value=value)

    return to_checksum_address(addr)


def get_address_from_account(account: AccountLike) -> str:
    acc = parse_account(account)
    raw = acc.shard.to_bytes(4, "big") + acc.realm.to_bytes(8, "big") + acc.num.to_bytes(8, "big")
    return get_address("0x" + raw.hex())


def get_account_from_address(address: str) -> AccountId:
    body = get_address(address)[2:]
    return AccountId(int(body[0:8], 16), int(body[8:24], 16), int(body[24:40], 16))
