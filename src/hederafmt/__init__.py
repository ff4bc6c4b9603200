# src/hederafmt/__init__.py
"""
hederafmt: provider payload formatting for Hedera/EVM clients.

  - providers.formatter: field-coercion engine (Formatter, ABSENT, combinators)
  - providers.records: canonical record shapes + mirror-node record schema
  - address: checksummed addresses and shard.realm.num account ids
  - transactions.access_list: access-list normalization
  - testing.seeded_random: seed-deterministic bytes/hex/ints for fixtures
  - config / env: FormatterConfig loading (.env, JSON/YAML, environment)
"""

from __future__ import annotations

from hederafmt.errors import FormatError, FormatTypeError
from hederafmt.providers.formatter import ABSENT, Formatter, allow_falsish, allow_null, array_of

__all__ = [
    "ABSENT",
    "FormatError",
    "FormatTypeError",
    "Formatter",
    "allow_falsish",
    "allow_null",
    "array_of",
]
