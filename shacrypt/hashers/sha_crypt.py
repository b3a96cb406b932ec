from __future__ import annotations

import hashlib
import hmac
import logging
from typing import TYPE_CHECKING

from shacrypt._salt import format_salt_spec, generate_salt, generate_salt_spec
from shacrypt._utils.binary import h64_engine
from shacrypt._utils.bytes import StrOrBytes, as_bytes, as_str, repeat_bytes, wipe
from shacrypt._utils.const import SHA512_CRYPT_POLICY
from shacrypt._utils.validation import (
    validate_rounds,
    validate_salt,
    validate_salt_size,
)
from shacrypt.errors import ShaCryptError
from shacrypt.hashers.abc import PasswordHasher
from shacrypt.inspect.sha_crypt import (
    SHA512CryptInfo,
    inspect_sha_crypt,
    parse_salt_spec,
)

if TYPE_CHECKING:
    from shacrypt._utils.protocols import SHAFunc

__all__ = ["SHA512Hasher", "generate", "verify"]

log = logging.getLogger(__name__)

# map used to transpose bytes when encoding final sha512_crypt digest,
# one line per 3 byte group, the last byte is encoded on its own
# fmt: off
_512_transpose_map = (
    42, 21, 0,
    1, 43, 22,
    23, 2, 44,
    45, 24, 3,
    4, 46, 25,
    26, 5, 47,
    48, 27, 6,
    7, 49, 28,
    29, 8, 50,
    51, 30, 9,
    10, 52, 31,
    32, 11, 53,
    54, 33, 12,
    13, 55, 34,
    35, 14, 56,
    57, 36, 15,
    16, 58, 37,
    38, 17, 59,
    60, 39, 18,
    19, 61, 40,
    41, 20, 62,
    63,
)
# fmt: on

# (even, odd) indexes into the ``perms`` list built by _mix_rounds(),
# one pair for each two rounds of the 42 round cycle
_c_digest_offsets = (
    (0, 3),
    (5, 1),
    (5, 3),
    (1, 2),
    (5, 1),
    (5, 3),
    (1, 3),
    (4, 1),
    (5, 3),
    (1, 3),
    (5, 0),
    (5, 3),
    (1, 3),
    (5, 1),
    (4, 3),
    (1, 3),
    (5, 1),
    (5, 2),
    (1, 3),
    (5, 1),
    (5, 3),
)


def _build_sequences(
    secret: bytes,
    salt: bytes,
    hash_method: SHAFunc,
) -> tuple[bytearray, bytearray, bytearray]:
    """build digest A and the P / S byte sequences.

    returns ``(asum, p_seq, s_seq)``; the caller owns the buffers
    and must wipe them.
    """

    # NOTE: the setup portion of this algorithm scales ~linearly in time
    #       with the size of the password; building digest P the fast way
    #       takes O(secret_len**2) memory, so large passwords are fed to the
    #       digest incrementally instead.

    secret_len = len(secret)

    alt = hash_method(secret)
    alt.update(salt)
    alt.update(secret)
    alt_sum = bytearray(alt.digest())
    del alt

    try:
        # start out with secret + salt
        sha = hash_method(secret)
        sha.update(salt)

        # one byte of the alternate sum for every byte of the secret
        buf = repeat_bytes(alt_sum, secret_len)
        sha.update(buf)
        wipe(buf)

        # for every bit of secret_len, alternate sum if it's set, else secret
        i = secret_len
        while i:
            sha.update(alt_sum if i & 1 else secret)
            i >>= 1

        asum = bytearray(sha.digest())
        del sha
    finally:
        wipe(alt_sum)

    if secret_len < 96:
        buf = bytearray(secret) * secret_len
        p_sum = bytearray(hash_method(buf).digest())
        wipe(buf)
    else:
        tmp_ctx = hash_method(secret)
        i = secret_len - 1
        while i:
            tmp_ctx.update(secret)
            i -= 1
        p_sum = bytearray(tmp_ctx.digest())
        del tmp_ctx
    p_seq = repeat_bytes(p_sum, secret_len)
    wipe(p_sum)

    # asum[0] makes the salt repeat count data dependent: 16 - 271
    buf = bytearray(salt) * (16 + asum[0])
    s_sum = bytearray(hash_method(buf).digest())
    wipe(buf)
    s_seq = repeat_bytes(s_sum, len(salt))
    wipe(s_sum)

    return asum, p_seq, s_seq


def _mix_rounds(
    asum: bytearray,
    p_seq: bytearray,
    s_seq: bytearray,
    rounds: int,
    hash_method: SHAFunc,
) -> bytearray:
    """run the rounds loop, returning the final digest C.

    each round ``i`` digests

    * ``p_seq`` if ``i`` is odd, else C
    * ``s_seq`` if ``i % 3``
    * ``p_seq`` if ``i % 7``
    * C if ``i`` is odd, else ``p_seq``

    since lcm(2, 3, 7) == 42 the combinations of ``p_seq`` and ``s_seq``
    repeat every 42 rounds. even rounds are ``H(C + const)`` and odd rounds
    are ``H(const + C)``, so the 21 (even, odd) constant pairs are built
    once and the rounds are run in pairs.
    """
    dp, ds = p_seq, s_seq

    # order of 'perms' must match how _c_digest_offsets was generated
    perms = [dp, dp + dp, dp + ds, dp + ds + dp, ds + dp, ds + dp + dp]
    data = [(perms[even], perms[odd]) for even, odd in _c_digest_offsets]

    dc = bytearray(asum)

    def _even(const: bytearray) -> None:
        ctx = hash_method(dc)
        ctx.update(const)
        dc[:] = ctx.digest()

    def _odd(const: bytearray) -> None:
        ctx = hash_method(const)
        ctx.update(dc)
        dc[:] = ctx.digest()

    try:
        # as many full 42 round blocks as possible
        blocks, tail = divmod(rounds, 42)
        while blocks:
            for even, odd in data:
                _even(even)
                _odd(odd)
            blocks -= 1

        # leftover pairs of rounds
        pairs = tail >> 1
        for even, odd in data[:pairs]:
            _even(even)
            _odd(odd)

        # rounds start at 0, so a trailing odd count ends on an even round
        if tail & 1:
            _even(data[pairs][0])
    finally:
        # perms[0] is p_seq itself, which belongs to the caller
        wipe(*perms[1:])

    return dc


def _sha512_crypt(
    secret: bytes,
    salt: bytes,
    rounds: int,
    hash_method: SHAFunc = hashlib.sha512,
    transpose_map: tuple[int, ...] = _512_transpose_map,
) -> bytes:
    """perform raw sha512-crypt, returning the encoded 86 character digest.

    this doesn't handle any parsing of salt specifications or hash strings;
    every intermediate buffer is wiped before returning.
    """
    asum, p_seq, s_seq = _build_sequences(secret, salt, hash_method)
    dc = bytearray()
    try:
        dc = _mix_rounds(asum, p_seq, s_seq, rounds, hash_method)
        return h64_engine.encode_transposed_bytes(dc, transpose_map)
    finally:
        wipe(asum, p_seq, s_seq, dc)


def generate(key: StrOrBytes, salt_spec: StrOrBytes = b"") -> str:
    """
    Hash ``key`` with sha512-crypt.

    :param key: Password to hash
    :param salt_spec: ``$6$[rounds=N$]SALT``, optionally followed by
        ``$DIGEST``, so complete hash strings are accepted. If empty, a random
        16 character salt with the default rounds is generated.
    :return: Hash string ``$6$[rounds=N$]SALT$DIGEST``
    :raises InvalidPrefixError, InvalidFormatError, InvalidRoundsError:
        if ``salt_spec`` can't be parsed
    """
    policy = SHA512_CRYPT_POLICY
    if not salt_spec:
        salt_spec = generate_salt_spec(policy.salt_len_max, policy.rounds_default)

    parsed = parse_salt_spec(salt_spec, policy)
    checksum = _sha512_crypt(
        secret=as_bytes(key),
        salt=parsed.salt,
        rounds=parsed.rounds,
    )
    return SHA512CryptInfo(
        rounds=parsed.rounds,
        salt=as_str(parsed.salt),
        hash=checksum.decode("ascii"),
        rounds_explicit=parsed.rounds_explicit,
    ).as_str()


def verify(key: StrOrBytes, hash: StrOrBytes) -> bool:
    """Re-derive ``hash`` from ``key`` using its own salt and rounds.

    Malformed hashes are reported as a mismatch, never as an error.
    """
    if not hash:
        return False

    try:
        new_hash = generate(key, hash)
    except ShaCryptError as exc:
        log.debug("can't verify malformed sha512-crypt hash: %s", exc)
        return False
    except UnicodeError:
        # the exception text would quote part of the secret
        log.debug("can't encode sha512-crypt secret or hash")
        return False
    return hmac.compare_digest(as_bytes(hash), as_bytes(new_hash))


class SHA512Hasher(PasswordHasher):
    def __init__(self, rounds: int = 535_000, salt_size: int = 16) -> None:
        self._rounds = rounds
        self._salt_size = salt_size
        validate_rounds(self._rounds, SHA512_CRYPT_POLICY)
        validate_salt_size(self._salt_size, SHA512_CRYPT_POLICY)

    def hash(
        self,
        secret: StrOrBytes,
        *,
        salt: StrOrBytes | None = None,
        rounds: int | None = None,
    ) -> str:
        if salt is not None:
            salt = as_str(salt)
            validate_salt(salt, SHA512_CRYPT_POLICY)
        else:
            salt = generate_salt(self._salt_size)
        rounds = rounds or self._rounds
        return generate(secret, format_salt_spec(salt=salt, rounds=rounds))

    def verify(self, hash: StrOrBytes, secret: StrOrBytes) -> bool:
        return verify(key=secret, hash=hash)

    def identify(self, hash: StrOrBytes) -> bool:
        return inspect_sha_crypt(as_str(hash)) is not None

    def needs_update(self, hash: StrOrBytes) -> bool:
        info = inspect_sha_crypt(as_str(hash))
        if info is None:
            return True
        return info.rounds != self._rounds
