__all__ = [
    "ShaCryptError",
    "MalformedHashError",
    "InvalidPrefixError",
    "InvalidFormatError",
    "InvalidRoundsError",
]


class ShaCryptError(ValueError):
    pass


class MalformedHashError(ShaCryptError):
    """Salt specification or hash string could not be parsed."""


class InvalidPrefixError(MalformedHashError):
    pass


class InvalidFormatError(MalformedHashError):
    pass


class InvalidRoundsError(MalformedHashError):
    pass
