from shacrypt._utils.const import SaltPolicy


def validate_rounds(rounds: int, policy: SaltPolicy) -> None:
    if rounds < policy.rounds_min or rounds > policy.rounds_max:
        msg = f"rounds must be between {policy.rounds_min} - {policy.rounds_max}"
        raise ValueError(msg)


def validate_salt_size(salt_size: int, policy: SaltPolicy) -> None:
    if salt_size < policy.salt_len_min or salt_size > policy.salt_len_max:
        msg = f"salt_size must be between {policy.salt_len_min} - {policy.salt_len_max}"
        raise ValueError(msg)


def validate_salt(salt: str, policy: SaltPolicy) -> None:
    if "$" in salt:
        raise ValueError("salt must not contain '$'")
    size = len(salt.encode("utf8", "surrogateescape"))
    if size < policy.salt_len_min or size > policy.salt_len_max:
        msg = f"salt must be between {policy.salt_len_min} - {policy.salt_len_max} bytes"
        raise ValueError(msg)
