import pytest

from thresig.encode import VarInt, encode_int, encode_with_size


@pytest.mark.parametrize(
    "value, expected",
    [
        (34, "22"),
        (253, "fdfd00"),
        (254, "fdfe00"),
        (255, "fdff00"),
        (55555, "fd03d9"),
        (666666, "fe2a2c0a00"),
        (999999999, "feffc99a3b"),
        (10000000000000, "ff00a0724e18090000"),
    ],
)
def test_ser_compact_size(value, expected):
    assert VarInt(value).encode().hex() == expected


@pytest.mark.parametrize(
    "value", [0, 34, 0xFC, 0xFD, 0xFFFF, 0x10000, 0xFFFFFFFF, 0x100000000, (1 << 64) - 1]
)
def test_encoded_length_matches_encoding(value):
    assert VarInt(value).encoded_length() == len(VarInt(value).encode())


def test_varint_out_of_range():
    with pytest.raises(ValueError):
        VarInt(-1)
    with pytest.raises(ValueError):
        VarInt(1 << 64)


@pytest.mark.parametrize("size", [1, 2, 4, 8])
def test_encode_int_round_trip(size):
    value = (1 << (8 * size)) - 3
    encoded = encode_int(value, size)
    assert len(encoded) == size
    assert int.from_bytes(encoded, "little") == value


def test_encode_int_signed_twos_complement():
    assert encode_int(-1, 2, True) == b"\xff\xff"
    assert int.from_bytes(encode_int(-12345, 4, True), "little", signed=True) == -12345


def test_encode_int_rejects_overflow():
    with pytest.raises(ValueError):
        encode_int(256, 1)
    with pytest.raises(ValueError):
        encode_int(-1, 4)


def test_encode_int_rejects_bad_size():
    with pytest.raises(ValueError):
        encode_int(1, 3)


def test_encode_with_size():
    assert encode_with_size(b"abc") == b"\x03abc"
    long = bytes(300)
    encoded = encode_with_size(long)
    assert encoded[:3] == VarInt(300).encode()
    assert encoded[3:] == long