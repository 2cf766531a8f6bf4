"""Tagged hashes, MAST node helpers and x-only public keys."""

from __future__ import annotations

import hashlib
import string
import struct
from enum import Enum

from .encode import VarInt
from .errors import FromHexError, KeyPairError

_MASK = 0xFFFFFFFF

MIDSTATE_TAPLEAF = bytes.fromhex(
    "9ce0e4e67c116c3938b3caf2c30f5089d3f3936c47636e607db33eeaddc6f0c9"
)
MIDSTATE_TAPBRANCH = bytes.fromhex(
    "23a865a9b8a40da7977c1e04c49e246fb5be13769d24c9b7b583b5d4a8d226d2"
)
MIDSTATE_TAPTWEAK = bytes.fromhex(
    "d129a2f3701c655d6583b6c3b941972795f4e23294fd54f4a2ae8d8547ca590b"
)
MIDSTATE_TAPSIGHASH = bytes.fromhex(
    "f504a425d7f8783b1363868ae3e556586eee945dbc7888dd02a6e2c31873fe9f"
)

LEAF_VERSION = 0xC0


class TapTag(Enum):
    """Tags of the taproot tagged hashes."""

    LEAF = "TapLeaf"
    BRANCH = "TapBranch"
    TWEAK = "TapTweak"
    SIGHASH = "TapSighash"


def _first_primes(count: int) -> list[int]:
    primes: list[int] = []
    candidate = 2
    while len(primes) < count:
        if all(candidate % p for p in primes if p * p <= candidate):
            primes.append(candidate)
        candidate += 1
    return primes


def _icbrt(n: int) -> int:
    x = 1 << ((n.bit_length() + 2) // 3)
    while True:
        y = (2 * x + n // (x * x)) // 3
        if y >= x:
            return x
        x = y


def _isqrt(n: int) -> int:
    x = 1 << ((n.bit_length() + 1) // 2)
    while True:
        y = (x + n // x) // 2
        if y >= x:
            return x
        x = y


_PRIMES = _first_primes(64)
_K = tuple(_icbrt(p << 96) & _MASK for p in _PRIMES)
_IV = tuple(_isqrt(p << 64) & _MASK for p in _PRIMES[:8])


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & _MASK


def _compress(state: tuple[int, ...], block: bytes) -> tuple[int, ...]:
    w = list(struct.unpack(">16I", block))
    for i in range(16, 64):
        s0 = _rotr(w[i - 15], 7) ^ _rotr(w[i - 15], 18) ^ (w[i - 15] >> 3)
        s1 = _rotr(w[i - 2], 17) ^ _rotr(w[i - 2], 19) ^ (w[i - 2] >> 10)
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & _MASK)

    a, b, c, d, e, f, g, h = state
    for k, wi in zip(_K, w):
        big_s1 = _rotr(e, 6) ^ _rotr(e, 11) ^ _rotr(e, 25)
        ch = (e & f) ^ (~e & g)
        t1 = (h + big_s1 + ch + k + wi) & _MASK
        big_s0 = _rotr(a, 2) ^ _rotr(a, 13) ^ _rotr(a, 22)
        maj = (a & b) ^ (a & c) ^ (b & c)
        t2 = (big_s0 + maj) & _MASK
        h, g, f, e, d, c, b, a = g, f, e, (d + t1) & _MASK, c, b, a, (t1 + t2) & _MASK

    return tuple((x + y) & _MASK for x, y in zip(state, (a, b, c, d, e, f, g, h)))


def sha256_midstate(data: bytes) -> bytes:
    """SHA-256 internal state after compressing ``data`` (whole 64-byte blocks)."""
    data = bytes(data)
    if len(data) % 64:
        raise ValueError("midstate input must be a multiple of 64 bytes")
    state = _IV
    for offset in range(0, len(data), 64):
        state = _compress(state, data[offset : offset + 64])
    return struct.pack(">8I", *state)


def _tag_prefix(tag) -> bytes:
    digest = hashlib.sha256(TapTag(tag).value.encode()).digest()
    return digest + digest


def tag_midstate(tag) -> bytes:
    """The SHA-256 midstate of a tagged-hash engine for ``tag``."""
    return sha256_midstate(_tag_prefix(tag))


def tagged_hash(tag, data: bytes) -> bytes:
    """``sha256(sha256(tag) || sha256(tag) || data)``."""
    return hashlib.sha256(_tag_prefix(tag) + bytes(data)).digest()


def node_hex(node: bytes) -> str:
    """Hex display of a hash node; byte order is reversed, as for Bitcoin hashes."""
    return bytes(node)[::-1].hex()


def node_from_hex(text: str) -> bytes:
    """Parse the hex display of a 32-byte hash node."""
    if len(text) % 2:
        raise FromHexError(f"OddLengthString {len(text)}")
    if len(text) != 64:
        raise FromHexError(f"InvalidLength 64,{len(text)}")
    bad = next((c for c in text if c not in string.hexdigits), None)
    if bad is not None:
        raise FromHexError(f"InvalidChar {ord(bad)}")
    return bytes.fromhex(text)[::-1]


class XOnly:
    """A 32-byte public key holding only the x coordinate."""

    __slots__ = ("_data",)

    def __init__(self, data) -> None:
        data = bytes(data)
        if len(data) != 32:
            raise KeyPairError("Invalid XOnly Length")
        self._data = data

    def __bytes__(self) -> bytes:
        return self._data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, XOnly):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"XOnly({self._data.hex()})"


def tagged_leaf(pubkey: XOnly) -> bytes:
    """Leaf node of a public key: TapLeaf(leaf_version || ser_size(pubkey))."""
    payload = bytes([LEAF_VERSION]) + VarInt(32).encode() + bytes(pubkey)
    return tagged_hash(TapTag.LEAF, payload)


def tagged_branch(left: bytes, right: bytes) -> bytes:
    """Parent of two nodes, hashed in lexicographic order.

    Identical children (an odd number of leaves) yield the child unchanged.
    """
    left, right = bytes(left), bytes(right)
    if left == right:
        return left
    low, high = sorted((left, right))
    return tagged_hash(TapTag.BRANCH, low + high)