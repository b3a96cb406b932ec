from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from shacrypt._utils.bytes import wipe

if TYPE_CHECKING:
    from collections.abc import Iterator

B64_CHARS = "./0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"


def _encode_bytes_little(
    next_value: Callable[[], int], chunks: int, tail: int
) -> Iterator[int]:
    """yield 6-bit values for crypt(3)'s little-endian packing"""
    #
    # each group is read as the 24-bit integer v1 | v2 << 8 | v3 << 16
    # and emitted least significant sextet first:
    #
    # first char:   v1 543210
    #
    # second char:  v1 ....76
    #              +v2 3210..
    #
    # third char:   v2 ..7654
    #              +v3 10....
    #
    # fourth char:  v3 765432
    #
    for _ in range(chunks):
        v1 = next_value()
        v2 = next_value()
        v3 = next_value()
        yield v1 & 0x3F
        yield ((v2 & 0x0F) << 2) | (v1 >> 6)
        yield ((v3 & 0x03) << 4) | (v2 >> 4)
        yield v3 >> 2
    if tail == 1:
        # upper 4 bits of the second char are padding
        v1 = next_value()
        yield v1 & 0x3F
        yield v1 >> 6
    elif tail == 2:
        # upper 2 bits of the third char are padding
        v1 = next_value()
        v2 = next_value()
        yield v1 & 0x3F
        yield ((v2 & 0x0F) << 2) | (v1 >> 6)
        yield v2 >> 4


class Base64Engine:
    """Radix-64 encoder with a custom alphabet and crypt(3) bit order.

    Unlike standard base64 there is no padding, and bits are taken from the
    least significant end of each 24-bit group.
    """

    def __init__(self, charmap: str) -> None:
        if len(charmap) != 64:
            raise ValueError("charmap must be 64 characters long")

        self._charmap = charmap.encode("latin-1")

    @property
    def charmap(self) -> str:
        return self._charmap.decode("latin-1")

    def _encode64(self, i: int) -> int:
        return self._charmap[i]

    def encode_bytes(self, source: bytes | bytearray) -> bytes:
        """encode bytes to a radix-64 string.

        :arg source: byte string to encode.
        :returns: byte string containing encoded data.
        """
        chunks, tail = divmod(len(source), 3)
        next_value = iter(source).__next__
        gen = _encode_bytes_little(next_value, chunks, tail)
        return bytes(map(self._encode64, gen))

    def encode_transposed_bytes(
        self, source: bytes | bytearray, offsets: tuple[int, ...]
    ) -> bytes:
        """encode byte string, first transposing source using offset list"""
        tmp = bytearray(source[off] for off in offsets)
        try:
            return self.encode_bytes(tmp)
        finally:
            wipe(tmp)


h64_engine = Base64Engine(B64_CHARS)
