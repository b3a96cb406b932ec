from __future__ import annotations

from typing import Union

StrOrBytes = Union[str, bytes]

# surrogateescape lets arbitrary salt bytes survive a bytes -> str -> bytes trip
_ERRORS = "surrogateescape"


def as_bytes(value: StrOrBytes) -> bytes:
    return value.encode("utf8", _ERRORS) if isinstance(value, str) else value


def as_str(value: StrOrBytes) -> str:
    return value.decode("utf8", _ERRORS) if isinstance(value, bytes) else value


def repeat_bytes(source: bytes | bytearray, size: int) -> bytearray:
    """
    repeat or truncate <source> so it has length <size>
    """
    result = bytearray(size)
    step = len(source)
    with memoryview(source) as view:
        for offset in range(0, size, step):
            chunk = view[: size - offset]
            result[offset : offset + len(chunk)] = chunk
    return result


def wipe(*buffers: bytearray) -> None:
    """Overwrite mutable buffers with zeros in place."""
    for buf in buffers:
        buf[:] = bytes(len(buf))
