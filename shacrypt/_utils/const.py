import dataclasses


@dataclasses.dataclass(frozen=True)
class SaltPolicy:
    magic_prefix: str
    salt_len_min: int
    salt_len_max: int
    rounds_min: int
    rounds_max: int
    rounds_default: int

    def clamp_rounds(self, rounds: int) -> int:
        return min(max(rounds, self.rounds_min), self.rounds_max)

    def clamp_salt_len(self, length: int) -> int:
        return min(max(length, self.salt_len_min), self.salt_len_max)


SHA512_CRYPT_POLICY = SaltPolicy(
    magic_prefix="$6$",
    salt_len_min=1,
    salt_len_max=16,
    rounds_min=1000,
    rounds_max=999_999_999,
    rounds_default=5000,
)
