from __future__ import annotations

from eth_utils import keccak

from hederafmt.testing.seeded_random import random_bytes, random_hex_string, random_number


def test_random_bytes_is_deterministic() -> None:
    a = random_bytes("seed", 10, 20)
    b = random_bytes("seed", 10, 20)
    assert a == b
    assert isinstance(a, bytes)
    assert 10 <= len(a) < 20


def test_random_bytes_empty() -> None:
    assert random_bytes("seed", 0, 0) == b""
    assert random_bytes("seed", 0) == b""


def test_random_bytes_is_a_prefix_of_the_hash_chain() -> None:
    h = keccak(text="seed")
    assert random_bytes("seed", 32) == h
    assert random_bytes("seed", 10) == h[:10]

    chained = h + keccak(h)
    assert random_bytes("seed", 40) == chained[:40]

    out = random_bytes("seed", 0, 64)
    assert out == chained[: len(out)]


def test_random_bytes_differs_by_seed() -> None:
    assert random_bytes("alpha", 32) != random_bytes("beta", 32)


def test_random_hex_string_matches_bytes() -> None:
    hx = random_hex_string("seed", 10, 20)
    assert hx == "0x" + random_bytes("seed", 10, 20).hex()
    assert random_hex_string("seed", 0) == "0x"


def test_random_number_is_in_half_open_range() -> None:
    for i in range(200):
        n = random_number(f"seed-{i}", 5, 10)
        assert isinstance(n, int)
        assert n in {5, 6, 7, 8, 9}

    assert random_number("seed", 5, 10) == random_number("seed", 5, 10)
    assert random_number("seed", 7, 7) == 7
