from __future__ import annotations

import pytest

from hederafmt.errors import FormatError
from hederafmt.providers.formatter import Formatter

ALICE = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
BOB = "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"
H48 = "0x" + "ab" * 48
T32 = "0x" + "cd" * 32
TS = "1650000000.123456789"


def _record(**extra: object) -> dict:
    rec = {
        "chainId": "0x12a",
        "hash": H48,
        "timestamp": TS,
        "from": ALICE,
        "to": BOB,
        "call_result": "0x1234",
        "gas_limit": 400000,
        "gas_used": 80000,
        "amount": 0,
        "logs": [{"address": BOB, "data": "0x", "topics": [T32], "index": 0}],
        "result": "SUCCESS",
        "transfersList": [{"account": "0.0.1001", "amount": -5}],
    }
    rec.update(extra)
    return rec


def test_response_from_record_maps_canonical_fields(fmt: Formatter) -> None:
    resp = fmt.response_from_record(_record(block_number=17))

    assert resp["chainId"] == "0x12a"
    assert resp["hash"] == H48
    assert resp["timestamp"] == TS
    assert resp["transactionId"] is None
    assert resp["from"] == ALICE
    assert resp["to"] == BOB
    assert resp["data"] == "0x1234"
    assert resp["gasLimit"] == 400000
    assert resp["value"] == 0

    custom = resp["customData"]
    assert custom["gas_used"] == 80000
    assert custom["result"] == "SUCCESS"
    assert custom["accountAddress"] is None
    assert custom["transfersList"] == [{"account": "0.0.1001", "amount": -5}]
    assert custom["logs"][0]["index"] == 0
    # unrecognized source fields are carried, not dropped
    assert custom["block_number"] == 17


def test_response_from_record_defaults(fmt: Formatter) -> None:
    rec = _record(amount=None, transfersList=None, logs=[], to="", call_result=None, transactionId="0.0.2@1650000000.1")
    del rec["gas_limit"]
    resp = fmt.response_from_record(rec)

    assert resp["gasLimit"] is None
    assert resp["value"] == 0
    assert resp["to"] is None
    assert resp["data"] is None
    assert resp["transactionId"] == "0.0.2@1650000000.1"
    assert resp["customData"]["transfersList"] == []
    # an empty list is a present value
    assert resp["customData"]["logs"] == []


def test_response_from_record_rejects_bad_input(fmt: Formatter) -> None:
    with pytest.raises(FormatError) as e:
        fmt.response_from_record(_record(gas_limit=None))
    assert e.value.check_key == "gas_limit"

    with pytest.raises(FormatError) as e2:
        fmt.response_from_record("not a record")
    assert e2.value.code == "invalid_record"


def test_receipt_from_response_for_contract_call(fmt: Formatter) -> None:
    rcpt = fmt.receipt_from_response(fmt.response_from_record(_record(accountAddress=ALICE)))

    assert rcpt["to"] is None
    assert rcpt["contractAddress"] == BOB
    assert rcpt["from"] == ALICE
    assert rcpt["gasUsed"] == rcpt["cumulativeGasUsed"] == 80000
    assert rcpt["logsBloom"] is None
    assert rcpt["transactionHash"] == H48
    assert rcpt["type"] == 0
    assert rcpt["byzantium"] is True
    assert rcpt["status"] == 1
    assert rcpt["accountAddress"] == ALICE
    assert rcpt["logs"] == [
        {
            "timestamp": TS,
            "address": BOB,
            "data": "0x",
            "topics": [T32],
            "transactionHash": H48,
            "logIndex": 0,
            "transactionIndex": 0,
        }
    ]


def test_receipt_from_response_for_plain_transfer(fmt: Formatter) -> None:
    resp = {"to": BOB, "from": ALICE, "data": "0x", "hash": H48, "timestamp": TS, "customData": {"result": "REVERTED"}}
    rcpt = fmt.receipt_from_response(resp)

    assert rcpt["to"] == BOB
    assert rcpt["contractAddress"] is None
    assert rcpt["status"] == 0
    assert rcpt["logs"] == []
    assert rcpt["gasUsed"] is None
    assert rcpt["accountAddress"] is None
