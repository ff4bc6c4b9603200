# src/hederafmt/providers/records.py
from __future__ import annotations

"""Canonical record shapes and raw mirror-node record schemas.

Canonical records are plain dicts; the TypedDicts below document their keys.
All are total=False because coercers may omit optional keys.

ContractResultRecord is the one raw input validated with pydantic: it only
checks that a mirror-node contract result is a JSON object and gives the
adapter typed access to its fields. Extra keys are allowed (the mirror API
grows fields over time) and values are carried through untouched.
"""

from typing import Any, Dict, List, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field

from hederafmt.transactions.access_list import AccessList

Json = Dict[str, Any]


class Log(TypedDict, total=False):
    timestamp: str
    address: str
    data: str
    topics: List[str]
    transactionHash: Optional[str]
    logIndex: int
    transactionIndex: int


TransactionResponse = TypedDict(
    "TransactionResponse",
    {
        "hash": str,
        "accessList": Optional[AccessList],
        "from": str,
        "gasLimit": int,
        "to": Optional[str],
        "value": int,
        "data": str,
        "r": str,
        "s": str,
        "v": int,
        "chainId": int,
        "timestamp": str,
        "transactionId": Optional[str],
        "customData": Json,
    },
    total=False,
)

TransactionRequest = TypedDict(
    "TransactionRequest",
    {
        "from": str,
        "nonce": int,
        "gasLimit": int,
        "gasPrice": int,
        "maxPriorityFeePerGas": int,
        "maxFeePerGas": int,
        "to": str,
        "value": int,
        "data": str,
        "type": int,
        "accessList": Optional[AccessList],
    },
    total=False,
)

Receipt = TypedDict(
    "Receipt",
    {
        "to": Optional[str],
        "from": Optional[str],
        "contractAddress": Optional[str],
        "timestamp": str,
        "gasUsed": int,
        "logsBloom": Optional[str],
        "transactionId": Optional[str],
        "transactionHash": str,
        "logs": List[Log],
        "cumulativeGasUsed": int,
        "type": int,
        "status": int,
        "byzantium": bool,
        "accountAddress": Optional[str],
    },
    total=False,
)


class Filter(TypedDict, total=False):
    fromTimestamp: str
    toTimestamp: str
    address: str
    topics: List[Any]


class _ObjectOnlyModel(BaseModel):
    """Object-only model: payload must be a JSON object; keys may evolve."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ContractResultRecord(_ObjectOnlyModel):
    chainId: Any = None
    hash: Any = None
    timestamp: Any = None
    transactionId: Any = None
    from_: Any = Field(default=None, alias="from")
    to: Any = None
    call_result: Any = None
    gas_limit: Any = None
    gas_used: Any = None
    amount: Any = None
    logs: Any = None
    result: Any = None
    accountAddress: Any = None
    transfersList: Any = None
