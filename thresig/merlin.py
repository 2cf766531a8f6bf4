"""Merlin transcripts built on a STROBE-128 duplex over Keccak-f[1600]."""

from __future__ import annotations

import struct

_MASK64 = (1 << 64) - 1


def _rc_bit(t: int) -> int:
    t %= 255
    if t == 0:
        return 1
    r = 1
    for _ in range(t):
        r <<= 1
        if r & 0x100:
            r ^= 0x171
    return r & 1


_ROUND_CONSTANTS = tuple(
    sum(_rc_bit(j + 7 * i) << ((1 << j) - 1) for j in range(7)) for i in range(24)
)


def _rotation_offsets() -> tuple[int, ...]:
    offsets = [0] * 25
    x, y = 1, 0
    for t in range(24):
        offsets[x + 5 * y] = ((t + 1) * (t + 2) // 2) % 64
        x, y = y, (2 * x + 3 * y) % 5
    return tuple(offsets)


_OFFSETS = _rotation_offsets()
# (source lane, destination lane, rotation) for the combined rho and pi steps
_RHO_PI = tuple(
    (x + 5 * y, y + 5 * ((2 * x + 3 * y) % 5), _OFFSETS[x + 5 * y])
    for x in range(5)
    for y in range(5)
)


def _rotl(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (64 - shift))) & _MASK64 if shift else value


def keccak_f1600(state) -> list[int]:
    """Apply Keccak-f[1600] to 25 little-endian 64-bit lanes."""
    lanes = [int(lane) for lane in state]
    if len(lanes) != 25:
        raise ValueError("Keccak-f[1600] state has 25 lanes")
    if any(not 0 <= lane <= _MASK64 for lane in lanes):
        raise ValueError("lanes are 64-bit unsigned integers")

    for rc in _ROUND_CONSTANTS:
        columns = [
            lanes[x] ^ lanes[x + 5] ^ lanes[x + 10] ^ lanes[x + 15] ^ lanes[x + 20]
            for x in range(5)
        ]
        theta = [columns[(x - 1) % 5] ^ _rotl(columns[(x + 1) % 5], 1) for x in range(5)]
        lanes = [lane ^ theta[i % 5] for i, lane in enumerate(lanes)]

        moved = [0] * 25
        for src, dst, rot in _RHO_PI:
            moved[dst] = _rotl(lanes[src], rot)

        lanes = [
            moved[i]
            ^ ((~moved[5 * (i // 5) + (i + 1) % 5]) & moved[5 * (i // 5) + (i + 2) % 5])
            for i in range(25)
        ]
        lanes[0] ^= rc
    return lanes


_STROBE_R = 166
_FLAG_I = 1
_FLAG_A = 1 << 1
_FLAG_C = 1 << 2
_FLAG_T = 1 << 3
_FLAG_M = 1 << 4
_FLAG_K = 1 << 5


def _permute(state: bytearray) -> None:
    lanes = keccak_f1600(struct.unpack("<25Q", state))
    state[:] = struct.pack("<25Q", *lanes)


class _Strobe128:
    """The subset of STROBE-128 that Merlin needs."""

    def __init__(self, protocol_label: bytes) -> None:
        state = bytearray(200)
        state[0:6] = bytes([1, _STROBE_R + 2, 1, 0, 1, 96])
        state[6:18] = b"STROBEv1.0.2"
        _permute(state)
        self.state = state
        self.pos = 0
        self.pos_begin = 0
        self.cur_flags = 0
        self.meta_ad(protocol_label, False)

    def copy(self) -> _Strobe128:
        clone = object.__new__(_Strobe128)
        clone.state = bytearray(self.state)
        clone.pos = self.pos
        clone.pos_begin = self.pos_begin
        clone.cur_flags = self.cur_flags
        return clone

    def meta_ad(self, data: bytes, more: bool) -> None:
        self._begin_op(_FLAG_M | _FLAG_A, more)
        self._absorb(data)

    def ad(self, data: bytes, more: bool) -> None:
        self._begin_op(_FLAG_A, more)
        self._absorb(data)

    def prf(self, length: int, more: bool) -> bytes:
        self._begin_op(_FLAG_I | _FLAG_A | _FLAG_C, more)
        return self._squeeze(length)

    def _run_f(self) -> None:
        self.state[self.pos] ^= self.pos_begin
        self.state[self.pos + 1] ^= 0x04
        self.state[_STROBE_R + 1] ^= 0x80
        _permute(self.state)
        self.pos = 0
        self.pos_begin = 0

    def _absorb(self, data: bytes) -> None:
        for byte in data:
            self.state[self.pos] ^= byte
            self.pos += 1
            if self.pos == _STROBE_R:
                self._run_f()

    def _squeeze(self, length: int) -> bytes:
        out = bytearray()
        for _ in range(length):
            out.append(self.state[self.pos])
            self.state[self.pos] = 0
            self.pos += 1
            if self.pos == _STROBE_R:
                self._run_f()
        return bytes(out)

    def _begin_op(self, flags: int, more: bool) -> None:
        if more:
            if self.cur_flags != flags:
                raise RuntimeError("continued STROBE operation changed its flags")
            return
        if flags & _FLAG_T:
            raise ValueError("transport operations are not supported")
        old_begin = self.pos_begin
        self.pos_begin = self.pos + 1
        self.cur_flags = flags
        self._absorb(bytes([old_begin, flags]))
        if flags & (_FLAG_C | _FLAG_K) and self.pos != 0:
            self._run_f()


def _as_bytes(value) -> bytes:
    if isinstance(value, str):
        return value.encode()
    return bytes(value)


def _length_prefix(length: int) -> bytes:
    if not 0 <= length <= 0xFFFFFFFF:
        raise ValueError("length does not fit in 32 bits")
    return length.to_bytes(4, "little")


class Transcript:
    """A Merlin transcript for Fiat-Shamir transforms."""

    def __init__(self, label) -> None:
        self._strobe = _Strobe128(b"Merlin v1.0")
        self.append_message(b"dom-sep", label)

    def copy(self) -> Transcript:
        """An independent transcript in the same state."""
        clone = object.__new__(Transcript)
        clone._strobe = self._strobe.copy()
        return clone

    def append_message(self, label, message) -> None:
        """Absorb a labelled message."""
        message = _as_bytes(message)
        self._strobe.meta_ad(_as_bytes(label), False)
        self._strobe.meta_ad(_length_prefix(len(message)), True)
        self._strobe.ad(message, False)

    def challenge_bytes(self, label, length: int) -> bytes:
        """Squeeze ``length`` challenge bytes under ``label``."""
        prefix = _length_prefix(length)
        self._strobe.meta_ad(_as_bytes(label), False)
        self._strobe.meta_ad(prefix, True)
        return self._strobe.prf(length, False)