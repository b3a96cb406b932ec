import logging
import secrets

from shacrypt._utils.binary import B64_CHARS
from shacrypt._utils.const import SHA512_CRYPT_POLICY, SaltPolicy

log = logging.getLogger(__name__)


def generate_salt(length: int, chars: str = B64_CHARS) -> str:
    return "".join(secrets.choice(chars) for _ in range(length))


def format_salt_spec(
    salt: str,
    rounds: int,
    policy: SaltPolicy = SHA512_CRYPT_POLICY,
) -> str:
    if rounds == policy.rounds_default:
        return f"{policy.magic_prefix}{salt}"
    return f"{policy.magic_prefix}rounds={rounds}${salt}"


def generate_salt_spec(
    length: int,
    rounds: int,
    policy: SaltPolicy = SHA512_CRYPT_POLICY,
) -> str:
    """Build a random salt specification such as ``$6$rounds=N$SALT``.

    ``length`` and ``rounds`` are clamped to the policy bounds; the
    ``rounds=`` field is left out when ``rounds`` is the policy default.
    """
    length = policy.clamp_salt_len(length)
    rounds = policy.clamp_rounds(rounds)
    log.debug("generating %d character salt, rounds=%d", length, rounds)
    return format_salt_spec(generate_salt(length), rounds, policy)
