import dataclasses

import pytest

from shacrypt._utils.const import SHA512_CRYPT_POLICY
from shacrypt._utils.validation import (
    validate_rounds,
    validate_salt,
    validate_salt_size,
)


def test_policy_values() -> None:
    assert SHA512_CRYPT_POLICY.magic_prefix == "$6$"
    assert SHA512_CRYPT_POLICY.salt_len_min == 1
    assert SHA512_CRYPT_POLICY.salt_len_max == 16
    assert SHA512_CRYPT_POLICY.rounds_min == 1000
    assert SHA512_CRYPT_POLICY.rounds_max == 999_999_999
    assert SHA512_CRYPT_POLICY.rounds_default == 5000


def test_policy_is_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        SHA512_CRYPT_POLICY.rounds_default = 1000  # type: ignore[misc]


@pytest.mark.parametrize(
    ("rounds", "expected"),
    [(-1, 1000), (1, 1000), (1000, 1000), (5000, 5000), (10**10, 999_999_999)],
)
def test_clamp_rounds(rounds: int, expected: int) -> None:
    assert SHA512_CRYPT_POLICY.clamp_rounds(rounds) == expected


@pytest.mark.parametrize(("length", "expected"), [(0, 1), (8, 8), (25, 16)])
def test_clamp_salt_len(length: int, expected: int) -> None:
    assert SHA512_CRYPT_POLICY.clamp_salt_len(length) == expected


def test_validate_rounds() -> None:
    validate_rounds(1000, SHA512_CRYPT_POLICY)
    with pytest.raises(ValueError, match="rounds must be between 1000 - 999999999"):
        validate_rounds(999, SHA512_CRYPT_POLICY)


def test_validate_salt_size() -> None:
    validate_salt_size(16, SHA512_CRYPT_POLICY)
    with pytest.raises(ValueError, match="salt_size must be between 1 - 16"):
        validate_salt_size(17, SHA512_CRYPT_POLICY)


@pytest.mark.parametrize(
    ("salt", "message"),
    [
        ("", "salt must be between 1 - 16 bytes"),
        ("a" * 17, "salt must be between 1 - 16 bytes"),
        ("é" * 9, "salt must be between 1 - 16 bytes"),
        ("ab$cd", "salt must not contain"),
    ],
)
def test_validate_salt(salt: str, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        validate_salt(salt, SHA512_CRYPT_POLICY)


@pytest.mark.parametrize("salt", ["a", "a" * 16, "é" * 8])
def test_validate_salt_accepts(salt: str) -> None:
    validate_salt(salt, SHA512_CRYPT_POLICY)
