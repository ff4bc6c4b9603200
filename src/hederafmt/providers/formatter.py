# src/hederafmt/providers/formatter.py
from __future__ import annotations

"""Field-coercion engine for provider responses.

A format is an ordered mapping of field name -> coercer. `Formatter.check`
applies a format to a raw JSON object: each coercer receives the raw value of
its field (None when missing) and either returns the canonical value, returns
ABSENT to leave the key out, or raises FormatError. The first failure aborts
the whole record; the error is annotated with the failing key and raw value.
"""

import enum
import logging
import math
import re
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional

from pydantic import ValidationError

from hederafmt.address import ZERO_ADDRESS, get_address, get_address_from_account
from hederafmt.config import FormatterConfig, load_formatter_config, log_level_value
from hederafmt.errors import FormatError, FormatTypeError
from hederafmt.providers.records import (
    ContractResultRecord,
    Filter,
    Log,
    Receipt,
    TransactionRequest,
    TransactionResponse,
)
from hederafmt.transactions.access_list import AccessList, access_listify
from hederafmt.utils.bignumber import MAX_SAFE_INTEGER, MIN_SAFE_INTEGER, is_zero, to_big_int, to_safe_number
from hederafmt.utils.hexstr import hex_data_length, hex_data_slice, hex_zero_pad, is_hex_string
from hederafmt.utils.structured_logging import log_event

Json = Dict[str, Any]
Coercer = Callable[[Any], Any]
Format = Mapping[str, Coercer]


class _Absent(enum.Enum):
    ABSENT = "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


# Returned by a coercer to leave its key out of the record (distinct from None).
ABSENT = _Absent.ABSENT

_TIMESTAMP_RE = re.compile(r"[0-9]{10}\.[0-9]{9}")


def is_falsish(value: Any) -> bool:
    """JSON-value falsiness: None, ABSENT, False, 0, NaN and "".

    Empty arrays and objects are truthy, as they are for JSON peers.
    """
    if value is None or value is ABSENT or value is False:
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value == ""
    return False


def _or_none(value: Any) -> Any:
    return None if is_falsish(value) else value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _tx_type_of(value: Any) -> Optional[int]:
    if _is_number(value):
        return int(value)
    if is_hex_string(value) and len(value) > 2:
        return int(value[2:], 16)
    return None


def apply_coercer(key: str, coercer: Coercer, value: Any) -> Any:
    """Run one coercer, annotating any failure with key/value."""
    try:
        return coercer(value)
    except FormatError as e:
        e.details.setdefault("path", []).insert(0, key)
        raise e.annotate(key, value)
    except (TypeError, ValueError, AttributeError, KeyError, IndexError) as e:
        raise FormatError("unexpected_error", str(e), {"path": [key]}).annotate(key, value) from e


def check_format(fmt: Format, raw: Any) -> Json:
    if not isinstance(raw, Mapping):
        raise FormatTypeError.not_an_object(raw)

    result: Json = {}
    for key, coercer in fmt.items():
        value = apply_coercer(key, coercer, raw.get(key))
        if value is not ABSENT:
            result[key] = value
    return result


class Formatter:
    """Normalizes provider payloads into canonical records.

    Formats are built once in __init__ and exposed read-only via `formats`.
    """

    def __init__(self, config: Optional[FormatterConfig] = None) -> None:
        self.config = config or load_formatter_config()
        self._logger = logging.getLogger(self.config.logger_name)
        self.formats: Mapping[str, Format] = MappingProxyType(
            {name: MappingProxyType(dict(fmt)) for name, fmt in self.get_default_formats().items()}
        )

    def get_default_formats(self) -> Dict[str, Dict[str, Coercer]]:
        address = self.address
        big_number = self.big_number
        data = self.data
        hash48 = self.hash48
        hash32 = self.hash32
        number = self.number
        type_ = self.type
        timestamp = self.timestamp
        access_list = self.access_list

        def strict_data(v: Any) -> str:
            return self.data(v, True)

        # failures surface (and are logged) through the enclosing receipt check
        def receipt_log(v: Any) -> Json:
            return check_format(self.formats["receiptLog"], v)

        formats: Dict[str, Dict[str, Coercer]] = {}

        formats["transaction"] = {
            "hash": hash48,
            "accessList": Formatter.allow_null(access_list, None),
            "from": address,
            "gasLimit": big_number,
            "to": Formatter.allow_null(address, None),
            "value": big_number,
            "data": data,
            "r": Formatter.allow_null(self.uint256),
            "s": Formatter.allow_null(self.uint256),
            "v": Formatter.allow_null(number),
        }

        formats["transactionRequest"] = {
            "from": Formatter.allow_null(address),
            "nonce": Formatter.allow_null(number),
            "gasLimit": Formatter.allow_null(big_number),
            "gasPrice": Formatter.allow_null(big_number),
            "maxPriorityFeePerGas": Formatter.allow_null(big_number),
            "maxFeePerGas": Formatter.allow_null(big_number),
            "to": Formatter.allow_null(address),
            "value": Formatter.allow_null(big_number),
            "data": Formatter.allow_null(strict_data),
            "type": Formatter.allow_null(number),
            "accessList": Formatter.allow_null(access_list, None),
        }

        formats["receiptLog"] = {
            "transactionIndex": number,
            "transactionHash": hash48,
            "address": address,
            "topics": Formatter.array_of(hash32),
            "data": data,
            "logIndex": number,
        }

        formats["receipt"] = {
            "to": Formatter.allow_null(address, None),
            "from": Formatter.allow_null(address, None),
            "contractAddress": Formatter.allow_null(address, None),
            "timestamp": timestamp,
            "gasUsed": big_number,
            "logsBloom": Formatter.allow_null(data),
            "transactionHash": hash48,
            "logs": Formatter.array_of(receipt_log),
            "cumulativeGasUsed": big_number,
            "status": Formatter.allow_null(number),
            "type": type_,
        }

        formats["filter"] = {
            "fromTimestamp": Formatter.allow_null(timestamp),
            "toTimestamp": Formatter.allow_null(timestamp),
            "address": Formatter.allow_null(address),
            "topics": Formatter.allow_null(self.topics),
        }

        formats["filterLog"] = {
            "timestamp": timestamp,
            "address": address,
            "data": Formatter.allow_falsish(data, "0x"),
            "topics": Formatter.array_of(hash32),
            "transactionHash": Formatter.allow_null(hash48),
            "logIndex": number,
            "transactionIndex": number,
        }

        return formats

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def timestamp(self, value: Any) -> str:
        """Mirror-node consensus timestamp: 10-digit seconds, dot, 9-digit nanos."""
        if not isinstance(value, str) or not _TIMESTAMP_RE.fullmatch(value):
            raise FormatError.argument("invalid_timestamp", "bad timestamp format", value=value)
        return value

    def access_list(self, value: Any) -> AccessList:
        return access_listify([] if is_falsish(value) else value)

    def number(self, value: Any) -> int:
        """Integer within the IEEE754 safe range. Strict; used on input."""
        if value == "0x":
            return 0
        return to_safe_number(value)

    def type(self, value: Any) -> int:
        if value == "0x" or value is None:
            return 0
        return to_safe_number(value)

    def big_number(self, value: Any) -> int:
        return to_big_int(value)

    def boolean(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            v = value.lower()
            if v == "true":
                return True
            if v == "false":
                return False
        raise FormatError.argument("invalid_boolean", "invalid boolean", value=value)

    def hex(self, value: Any, strict: bool = False) -> str:
        if isinstance(value, str):
            if not strict and value[:2] != "0x":
                value = "0x" + value
            if is_hex_string(value):
                return value.lower()
        raise FormatError.argument("invalid_hex", "invalid hash", value=value)

    def data(self, value: Any, strict: bool = False) -> str:
        result = self.hex(value, strict)
        if len(result) % 2:
            raise FormatError.argument("invalid_data", "invalid data; odd-length", value=value)
        return result

    def address(self, value: Any) -> str:
        if not isinstance(value, str):
            raise FormatError.argument("invalid_address", "invalid address", value=value)
        if "." in value:
            value = get_address_from_account(value)
        return get_address(value)

    def call_address(self, value: Any) -> Optional[str]:
        if not is_hex_string(value, 32):
            return None
        address = get_address(hex_data_slice(value, 12))
        return None if address == ZERO_ADDRESS else address

    def contract_address(self, value: Any) -> Any:
        """Hook for deriving `creates` of a deploy transaction; identity here."""
        return value

    def hash48(self, value: Any, strict: bool = False) -> str:
        result = self.hex(value, strict)
        if hex_data_length(result) != 48:
            raise FormatError.argument("invalid_hash", "invalid hash", value=value)
        return result

    def hash32(self, value: Any, strict: bool = False) -> str:
        # topic hashes are 32 bytes, transaction hashes 48
        result = self.hex(value, strict)
        if hex_data_length(result) != 32:
            raise FormatError.argument("invalid_hash", "invalid topics hash", value=value)
        return result

    def difficulty(self, value: Any) -> Optional[int]:
        """Difficulty as an int, or None when missing or too large (PoA networks)."""
        if value is None:
            return None
        v = to_big_int(value)
        if v > MAX_SAFE_INTEGER or v < MIN_SAFE_INTEGER:
            return None
        return v

    def uint256(self, value: Any) -> str:
        if not is_hex_string(value):
            raise FormatError.argument("invalid_hex", "invalid uint256", value=value)
        return hex_zero_pad(value, 32).lower()

    def topics(self, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [self.topics(v) for v in value]
        if value is not None:
            return self.hash32(value, True)
        return None

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    def transaction_request(self, value: Any) -> TransactionRequest:
        return self.check(self.formats["transactionRequest"], value)  # type: ignore[return-value]

    def transaction_response(self, transaction: Any) -> TransactionResponse:
        if not isinstance(transaction, Mapping):
            raise FormatTypeError.not_an_object(transaction)
        tx: Json = dict(transaction)

        if tx.get("gas") is not None and tx.get("gasLimit") is None:
            tx["gasLimit"] = tx["gas"]

        # Some clients return 0x0 for the zero address.
        to = tx.get("to")
        if is_hex_string(to) and len(to) > 2 and is_zero(to):
            tx["to"] = ZERO_ADDRESS

        if tx.get("input") is not None and tx.get("data") is None:
            tx["data"] = tx["input"]

        if tx.get("to") is None and tx.get("creates") is None:
            tx["creates"] = self.contract_address(dict(tx))

        if _tx_type_of(tx.get("type")) in (1, 2) and tx.get("accessList") is None:
            tx["accessList"] = []

        result: Json = self.check(self.formats["transaction"], tx)

        if tx.get("chainId") is not None:
            chain_id = tx["chainId"]
            if not _is_int(chain_id):
                chain_id = apply_coercer("chainId", self.number, chain_id)
            result["chainId"] = int(chain_id)
            return result  # type: ignore[return-value]

        chain_id = tx.get("networkId")
        if is_hex_string(chain_id) or isinstance(chain_id, float):
            chain_id = apply_coercer("networkId", self.number, chain_id)

        if not _is_number(chain_id) and result.get("v") is not None:
            chain_id = max(0, (int(result["v"]) - 35) // 2)

        if not _is_number(chain_id):
            chain_id = 0

        result["chainId"] = int(chain_id)
        return result  # type: ignore[return-value]

    def receipt_log(self, value: Any) -> Log:
        return self.check(self.formats["receiptLog"], value)  # type: ignore[return-value]

    def receipt(self, value: Any) -> Receipt:
        result: Json = self.check(self.formats["receipt"], value)
        if result.get("status") is not None:
            result["byzantium"] = True
        return result  # type: ignore[return-value]

    def filter(self, value: Any) -> Filter:
        return self.check(self.formats["filter"], value)  # type: ignore[return-value]

    def filter_log(self, value: Any) -> Log:
        return self.check(self.formats["filterLog"], value)  # type: ignore[return-value]

    def logs_mapper(self, values: Any) -> List[Log]:
        """Reshape mirror-node logs; transactionHash is filled in later by the caller.

        Mirror logs carry a single `index`, used for both logIndex and
        transactionIndex.
        """
        if not isinstance(values, (list, tuple)):
            raise FormatTypeError.not_an_array(values)

        logs: List[Log] = []
        for log in values:
            if not isinstance(log, Mapping):
                raise FormatTypeError.not_an_object(log)
            logs.append(
                {
                    "timestamp": log.get("timestamp"),
                    "address": log.get("address"),
                    "data": log.get("data"),
                    "topics": log.get("topics"),
                    "transactionHash": None,
                    "logIndex": log.get("index"),
                    "transactionIndex": log.get("index"),
                }
            )
        return logs

    def response_from_record(self, record: Any) -> TransactionResponse:
        """Mirror-node contract result -> transaction response.

        Fields with no canonical counterpart travel in `customData`.
        """
        try:
            rec = ContractResultRecord.model_validate(dict(record) if isinstance(record, Mapping) else record)
        except ValidationError as ve:
            raise FormatError("invalid_record", "contract result record must be an object", {"errors": ve.errors()}) from ve

        gas_limit = None
        if "gas_limit" in rec.model_fields_set:
            gas_limit = apply_coercer("gas_limit", self.big_number, rec.gas_limit)

        amount = rec.amount if not is_falsish(rec.amount) else 0

        custom: Json = dict(rec.model_extra or {})
        custom.update(
            {
                "gas_used": _or_none(rec.gas_used),
                "logs": _or_none(rec.logs),
                "result": _or_none(rec.result),
                "accountAddress": _or_none(rec.accountAddress),
                "transfersList": rec.transfersList if not is_falsish(rec.transfersList) else [],
            }
        )

        return {
            "chainId": _or_none(rec.chainId),
            "hash": rec.hash,
            "timestamp": rec.timestamp,
            "transactionId": _or_none(rec.transactionId),
            "from": rec.from_,
            "to": _or_none(rec.to),
            "data": _or_none(rec.call_result),
            "gasLimit": gas_limit,
            "value": apply_coercer("amount", self.big_number, amount),
            "customData": custom,
        }  # type: ignore[typeddict-item]

    def receipt_from_response(self, response: Any) -> Receipt:
        """Transaction response (see response_from_record) -> receipt.

        A response carrying call data describes a contract call or deploy, so
        its `to` is reported as contractAddress; otherwise as `to`.
        """
        if not isinstance(response, Mapping):
            raise FormatTypeError.not_an_object(response)

        custom = response.get("customData")
        if not isinstance(custom, Mapping):
            custom = {}

        to = None
        contract_address = None
        if response.get("data") != "0x":
            contract_address = response.get("to")
        else:
            to = response.get("to")

        logs: List[Log] = []
        for log in custom.get("logs") or []:
            if not isinstance(log, Mapping):
                raise FormatTypeError.not_an_object(log)
            logs.append(
                {
                    "timestamp": response.get("timestamp"),
                    "address": log.get("address"),
                    "data": log.get("data"),
                    "topics": log.get("topics"),
                    "transactionHash": response.get("hash"),
                    "logIndex": log.get("index"),
                    "transactionIndex": log.get("index"),
                }
            )

        return {
            "to": to,
            "from": response.get("from"),
            "timestamp": response.get("timestamp"),
            "contractAddress": contract_address,
            "gasUsed": custom.get("gas_used"),
            "logsBloom": None,
            "transactionId": response.get("transactionId"),
            "transactionHash": response.get("hash"),
            "logs": logs,
            "cumulativeGasUsed": custom.get("gas_used"),
            "type": 0,
            "byzantium": True,
            "status": 1 if custom.get("result") == "SUCCESS" else 0,
            "accountAddress": _or_none(custom.get("accountAddress")),
        }  # type: ignore[typeddict-item]

    # ------------------------------------------------------------------
    # Engine
    # ------------------------------------------------------------------

    def check(self, fmt: Format, value: Any) -> Json:
        try:
            return check_format(fmt, value)
        except FormatError as e:
            if self.config.log_check_failures and log_level_value(self.config) <= logging.INFO:
                log_event(
                    self._logger,
                    "format_check_failed",
                    code=e.code,
                    key=e.check_key,
                    value=e.check_value,
                    path=e.details.get("path"),
                    message=e.message,
                )
            raise

    @staticmethod
    def allow_null(coercer: Coercer, null_value: Any = ABSENT) -> Coercer:
        """If value is None (or ABSENT), null_value is returned."""

        def _allow_null(value: Any) -> Any:
            if value is None or value is ABSENT:
                return null_value
            return coercer(value)

        return _allow_null

    @staticmethod
    def allow_falsish(coercer: Coercer, replace_value: Any) -> Coercer:
        """If value is falsish (see is_falsish), replace_value is returned."""

        def _allow_falsish(value: Any) -> Any:
            if is_falsish(value):
                return replace_value
            return coercer(value)

        return _allow_falsish

    @staticmethod
    def array_of(coercer: Coercer) -> Coercer:
        """Requires a list/tuple; applies coercer to every element."""

        def _array_of(array: Any) -> List[Any]:
            if not isinstance(array, (list, tuple)):
                raise FormatTypeError.not_an_array(array)
            return [coercer(v) for v in array]

        return _array_of


allow_null = Formatter.allow_null
allow_falsish = Formatter.allow_falsish
array_of = Formatter.array_of
