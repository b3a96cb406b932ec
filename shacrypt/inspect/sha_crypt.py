from __future__ import annotations

import dataclasses
import logging
import re
from typing import ClassVar

from shacrypt._utils.bytes import StrOrBytes, as_bytes
from shacrypt._utils.const import SHA512_CRYPT_POLICY, SaltPolicy
from shacrypt.errors import InvalidFormatError, InvalidPrefixError, InvalidRoundsError

__all__ = [
    "ParsedSalt",
    "SHA512CryptInfo",
    "inspect_sha_crypt",
    "parse_salt_spec",
]

log = logging.getLogger(__name__)

_ROUNDS_PREFIX = b"rounds="
_ROUNDS_REGEX = re.compile(rb"[+-]?[0-9]+")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


@dataclasses.dataclass(frozen=True)
class ParsedSalt:
    rounds: int
    rounds_explicit: bool
    salt: bytes


@dataclasses.dataclass
class SHA512CryptInfo:
    rounds: int
    salt: str
    hash: str
    rounds_explicit: bool = False

    _prefix: ClassVar[str] = SHA512_CRYPT_POLICY.magic_prefix
    REGEX: ClassVar[re.Pattern[str]] = re.compile(
        r"^\$6\$(rounds=(?P<rounds>[0-9]+)\$)?(?P<salt>[^$]{1,16})\$(?P<hash>[./0-9A-Za-z]{86})$"
    )

    def as_str(self) -> str:
        if self.rounds_explicit or self.rounds != SHA512_CRYPT_POLICY.rounds_default:
            return f"{self._prefix}rounds={self.rounds}${self.salt}${self.hash}"

        return f"{self._prefix}{self.salt}${self.hash}"


def _parse_rounds(value: bytes) -> int:
    if not _ROUNDS_REGEX.fullmatch(value):
        raise InvalidRoundsError(f"invalid rounds value: {value!r}")

    rounds = int(value)
    if not _INT32_MIN <= rounds <= _INT32_MAX:
        raise InvalidRoundsError(f"rounds value out of range: {value!r}")
    return rounds


def parse_salt_spec(
    spec: StrOrBytes,
    policy: SaltPolicy = SHA512_CRYPT_POLICY,
) -> ParsedSalt:
    """
    Parses a salt specification (``$6$[rounds=N$]SALT[$...]``).

    Anything following the salt token, such as the digest of a complete hash
    string, is ignored. Explicit rounds outside of the policy bounds are
    clamped rather than rejected, and salts are truncated to
    ``policy.salt_len_max`` bytes.
    """
    spec = as_bytes(spec)
    if not spec.startswith(policy.magic_prefix.encode("ascii")):
        raise InvalidPrefixError(f"salt must start with {policy.magic_prefix!r}")

    tokens = spec.split(b"$")
    if len(tokens) < 3:
        raise InvalidFormatError("salt must contain at least 3 '$' separated fields")

    if tokens[2].startswith(_ROUNDS_PREFIX):
        requested = _parse_rounds(tokens[2][len(_ROUNDS_PREFIX) :])
        rounds = policy.clamp_rounds(requested)
        if rounds != requested:
            log.debug("clamped rounds from %d to %d", requested, rounds)

        if len(tokens) < 4:
            raise InvalidFormatError("missing salt after rounds field")
        salt = tokens[3]
        rounds_explicit = True
    else:
        rounds = policy.rounds_default
        salt = tokens[2]
        rounds_explicit = False

    if len(salt) > policy.salt_len_max:
        log.debug("truncated salt from %d to %d bytes", len(salt), policy.salt_len_max)
        salt = salt[: policy.salt_len_max]
    if len(salt) < policy.salt_len_min:
        raise InvalidFormatError(
            f"salt must be at least {policy.salt_len_min} characters long"
        )

    return ParsedSalt(rounds=rounds, rounds_explicit=rounds_explicit, salt=salt)


def inspect_sha_crypt(hash: str) -> SHA512CryptInfo | None:
    match = SHA512CryptInfo.REGEX.fullmatch(hash)
    if match is None:
        return None

    rounds = match.group("rounds")
    return SHA512CryptInfo(
        rounds=int(rounds) if rounds is not None else SHA512_CRYPT_POLICY.rounds_default,
        salt=match.group("salt"),
        hash=match.group("hash"),
        rounds_explicit=rounds is not None,
    )
