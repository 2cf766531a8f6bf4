"""Bitcoin consensus encoding of integers and length-prefixed data."""

from __future__ import annotations

from dataclasses import dataclass

_U64_LIMIT = 1 << 64
_INT_SIZES = (1, 2, 4, 8)


def encode_int(value: int, size: int, signed: bool = False) -> bytes:
    """Encode an integer of ``size`` bytes little-endian."""
    if size not in _INT_SIZES:
        raise ValueError(f"unsupported integer size: {size}")
    try:
        return value.to_bytes(size, "little", signed=signed)
    except OverflowError as exc:
        raise ValueError(f"{value} does not fit in {size} bytes") from exc


@dataclass(frozen=True, order=True)
class VarInt:
    """A variable-length unsigned integer (compact size)."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value < _U64_LIMIT:
            raise ValueError(f"VarInt out of range: {self.value}")

    def encoded_length(self) -> int:
        """Number of bytes the encoded form takes."""
        if self.value <= 0xFC:
            return 1
        if self.value <= 0xFFFF:
            return 3
        if self.value <= 0xFFFFFFFF:
            return 5
        return 9

    def encode(self) -> bytes:
        """The consensus encoding of this integer."""
        v = self.value
        if v <= 0xFC:
            return encode_int(v, 1)
        if v <= 0xFFFF:
            return b"\xfd" + encode_int(v, 2)
        if v <= 0xFFFFFFFF:
            return b"\xfe" + encode_int(v, 4)
        return b"\xff" + encode_int(v, 8)


def encode_with_size(data: bytes) -> bytes:
    """Prefix ``data`` with its length as a VarInt."""
    data = bytes(data)
    return VarInt(len(data)).encode() + data