import pytest

from shacrypt._utils.binary import B64_CHARS, Base64Engine, h64_engine
from shacrypt.hashers.sha_crypt import _512_transpose_map


def test_salt_alphabet():
    assert len(B64_CHARS) == len(set(B64_CHARS))
    assert h64_engine.charmap == B64_CHARS


def test_invalid_charmap():
    with pytest.raises(ValueError):
        Base64Engine(B64_CHARS[:-1])


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        (b"", b""),
        (b"\x00\x00\x00", b"...."),
        (b"\xff\xff\xff", b"zzzz"),
        # least significant sextet of the first byte comes first
        (b"\x01\x00\x00", b"/..."),
        (b"\x00\x00\x01", b"..E."),
        (b"\x3f", b"z."),
        (b"\xc0", b".1"),
        (b"\x00\x01", b".2."),
    ],
)
def test_encode_bytes(source: bytes, expected: bytes) -> None:
    assert h64_engine.encode_bytes(source) == expected


def test_encode_transposed_bytes() -> None:
    source = bytes(range(64))
    expected = h64_engine.encode_bytes(bytes(_512_transpose_map))
    assert h64_engine.encode_transposed_bytes(source, _512_transpose_map) == expected


def test_transpose_map_is_permutation() -> None:
    assert sorted(_512_transpose_map) == list(range(64))
    assert _512_transpose_map[:3] == (42, 21, 0)
    assert _512_transpose_map[3:6] == (1, 43, 22)
    assert _512_transpose_map[-1] == 63


def test_encoded_digest_length() -> None:
    assert len(h64_engine.encode_transposed_bytes(bytes(64), _512_transpose_map)) == 86
