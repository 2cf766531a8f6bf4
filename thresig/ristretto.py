"""The ristretto255 prime-order group over Curve25519."""

from __future__ import annotations

P = 2**255 - 19
L = 2**252 + 27742317777372353535851937790883648493
D = (-121665 * pow(121666, P - 2, P)) % P
SQRT_M1 = pow(2, (P - 1) // 4, P)


def _is_negative(x: int) -> bool:
    return (x % P) & 1 == 1


def _abs(x: int) -> int:
    x %= P
    return P - x if x & 1 else x


def _sqrt_ratio_m1(u: int, v: int) -> tuple[bool, int]:
    """Return (was_square, nonnegative sqrt(u/v) or sqrt(i*u/v))."""
    u %= P
    v %= P
    v3 = v * v % P * v % P
    v7 = v3 * v3 % P * v % P
    r = u * v3 % P * pow(u * v7 % P, (P - 5) // 8, P) % P
    check = v * r % P * r % P
    correct_sign = check == u
    flipped_sign = check == (-u) % P
    flipped_sign_i = check == (-u * SQRT_M1) % P
    if flipped_sign or flipped_sign_i:
        r = r * SQRT_M1 % P
    return correct_sign or flipped_sign, _abs(r)


INVSQRT_A_MINUS_D = _sqrt_ratio_m1(1, (-1 - D) % P)[1]


def scalar_from_bytes_mod_order(data) -> int:
    """Read 32 little-endian bytes as a scalar reduced modulo the group order."""
    data = bytes(data)
    if len(data) != 32:
        raise ValueError("a scalar is 32 bytes")
    return int.from_bytes(data, "little") % L


class RistrettoPoint:
    """An element of ristretto255, held in extended Edwards coordinates."""

    __slots__ = ("_x", "_y", "_z", "_t")

    def __init__(self, x: int, y: int, z: int, t: int) -> None:
        self._x = x % P
        self._y = y % P
        self._z = z % P
        self._t = t % P

    @classmethod
    def from_bytes(cls, data) -> RistrettoPoint:
        """Decode a canonical 32-byte encoding; raise ValueError if invalid."""
        data = bytes(data)
        if len(data) != 32:
            raise ValueError("a ristretto encoding is 32 bytes")
        s = int.from_bytes(data, "little")
        if s >= P or s & 1:
            raise ValueError("non-canonical ristretto encoding")

        ss = s * s % P
        u1 = (1 - ss) % P
        u2 = (1 + ss) % P
        u2_sqr = u2 * u2 % P
        v = (-(D * u1 % P * u1) - u2_sqr) % P
        was_square, invsqrt = _sqrt_ratio_m1(1, v * u2_sqr % P)
        den_x = invsqrt * u2 % P
        den_y = invsqrt * den_x % P * v % P
        x = _abs(2 * s * den_x)
        y = u1 * den_y % P
        t = x * y % P
        if not was_square or _is_negative(t) or y == 0:
            raise ValueError("invalid ristretto encoding")
        return cls(x, y, 1, t)

    def to_bytes(self) -> bytes:
        """The canonical 32-byte encoding of this point."""
        x0, y0, z0, t0 = self._x, self._y, self._z, self._t
        u1 = (z0 + y0) * (z0 - y0) % P
        u2 = x0 * y0 % P
        _, invsqrt = _sqrt_ratio_m1(1, u1 * u2 % P * u2 % P)
        den1 = invsqrt * u1 % P
        den2 = invsqrt * u2 % P
        z_inv = den1 * den2 % P * t0 % P
        if _is_negative(t0 * z_inv):
            x = y0 * SQRT_M1 % P
            y = x0 * SQRT_M1 % P
            den_inv = den1 * INVSQRT_A_MINUS_D % P
        else:
            x, y, den_inv = x0, y0, den2
        if _is_negative(x * z_inv):
            y = (-y) % P
        s = _abs(den_inv * (z0 - y))
        return s.to_bytes(32, "little")

    def __add__(self, other: object) -> RistrettoPoint:
        if not isinstance(other, RistrettoPoint):
            return NotImplemented
        a = (self._y - self._x) * (other._y - other._x) % P
        b = (self._y + self._x) * (other._y + other._x) % P
        c = self._t * 2 * D % P * other._t % P
        d = self._z * 2 * other._z % P
        e, f, g, h = b - a, d - c, d + c, b + a
        return RistrettoPoint(e * f, g * h, f * g, e * h)

    def __neg__(self) -> RistrettoPoint:
        return RistrettoPoint(-self._x, self._y, self._z, -self._t)

    def __sub__(self, other: object) -> RistrettoPoint:
        if not isinstance(other, RistrettoPoint):
            return NotImplemented
        return self + (-other)

    def __mul__(self, scalar: object) -> RistrettoPoint:
        if not isinstance(scalar, int) or isinstance(scalar, bool):
            return NotImplemented
        k = scalar % L
        result = IDENTITY
        addend = self
        while k:
            if k & 1:
                result = result + addend
            addend = addend + addend
            k >>= 1
        return result

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RistrettoPoint):
            return NotImplemented
        return (self._x * other._y - self._y * other._x) % P == 0 or (
            self._y * other._y - self._x * other._x
        ) % P == 0

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __repr__(self) -> str:
        return f"RistrettoPoint({self.to_bytes().hex()})"


IDENTITY = RistrettoPoint(0, 1, 1, 0)
BASEPOINT = RistrettoPoint.from_bytes(
    bytes.fromhex("e2f2ae0a6abc4e71a884a961c500515f58e30b6aa582dd8db6a65945e08d2d76")
)