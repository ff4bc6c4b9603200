# src/hederafmt/transactions/access_list.py
from __future__ import annotations

from typing import Any, List, Mapping, Sequence, Tuple, TypedDict

from hederafmt.address import get_address
from hederafmt.errors import FormatError
from hederafmt.utils.hexstr import hex_data_length


class AccessListEntry(TypedDict):
    address: str
    storageKeys: List[str]


AccessList = List[AccessListEntry]


def _access_set(addr: Any, storage_keys: Any) -> AccessListEntry:
    if storage_keys is None:
        storage_keys = []
    if not isinstance(storage_keys, (list, tuple)):
        raise FormatError.argument(
            "invalid_access_list", "storageKeys must be an array", argument=f"accessList[{addr}]", value=storage_keys
        )

    keys: List[str] = []
    for i, key in enumerate(storage_keys):
        if hex_data_length(key) != 32:
            raise FormatError.argument(
                "invalid_access_list", "invalid access list storageKey", argument=f"accessList[{addr}:{i}]", value=key
            )
        keys.append(key.lower())
    return {"address": get_address(addr), "storageKeys": keys}


def access_listify(value: Any) -> AccessList:
    """Normalize any accepted access-list shape.

    Accepted shapes:
      - [{"address": ..., "storageKeys": [...]}, ...]
      - [[address, [storageKey, ...]], ...]
      - {address: [storageKey, ...], ...}  (keys de-duplicated and sorted,
        entries sorted by address)
    """
    if isinstance(value, (list, tuple)):
        out: AccessList = []
        for i, entry in enumerate(value):
            if isinstance(entry, (list, tuple)):
                if len(entry) > 2:
                    raise FormatError.argument(
                        "invalid_access_list",
                        "access list expected to be [ address, storageKeys[] ]",
                        argument=f"value[{i}]",
                        value=list(entry),
                    )
                addr = entry[0] if len(entry) > 0 else None
                keys = entry[1] if len(entry) > 1 else None
                out.append(_access_set(addr, keys))
            elif isinstance(entry, Mapping):
                out.append(_access_set(entry.get("address"), entry.get("storageKeys")))
            else:
                raise FormatError.argument(
                    "invalid_access_list", "invalid access list entry", argument=f"value[{i}]", value=entry
                )
        return out

    if isinstance(value, Mapping):
        result = [_access_set(addr, sorted(set(keys or []))) for addr, keys in value.items()]
        result.sort(key=lambda e: e["address"].lower())
        return result

    raise FormatError.argument("invalid_access_list", "invalid access list", value=value)


def access_list_to_tuples(value: Any) -> List[Tuple[str, List[str]]]:
    """Encode an access list as (address, storageKeys) pairs for serialization."""
    return [(e["address"], list(e["storageKeys"])) for e in access_listify(value)]


def access_list_from_tuples(pairs: Sequence[Sequence[Any]]) -> AccessList:
    return access_listify([list(p) for p in pairs])


__all__ = [
    "AccessList",
    "AccessListEntry",
    "access_listify",
    "access_list_to_tuples",
    "access_list_from_tuples",
]
