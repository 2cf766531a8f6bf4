import pytest

from thresig.ristretto import (
    BASEPOINT,
    IDENTITY,
    L,
    P,
    RistrettoPoint,
    scalar_from_bytes_mod_order,
)

BASE_HEX = "e2f2ae0a6abc4e71a884a961c500515f58e30b6aa582dd8db6a65945e08d2d76"
TWO_BASE_HEX = "6a493210f7499cd17fecb510ae0cea23a110e8d5b901f8acadd3095c73a3b919"


def test_basepoint_round_trip():
    encoded = bytes.fromhex(BASE_HEX)
    assert RistrettoPoint.from_bytes(encoded).to_bytes() == encoded


def test_double_basepoint_encoding():
    base = RistrettoPoint.from_bytes(bytes.fromhex(BASE_HEX))
    assert (base + base).to_bytes().hex() == TWO_BASE_HEX
    assert (BASEPOINT + BASEPOINT).to_bytes().hex() == TWO_BASE_HEX


def test_identity_encodes_to_zero_bytes():
    zero = bytes(32)
    assert IDENTITY.to_bytes() == zero
    assert RistrettoPoint.from_bytes(zero) == IDENTITY


def test_point_plus_negation_is_identity():
    point = BASEPOINT * 12345
    assert point + (-point) == IDENTITY
    assert (point - point).to_bytes() == IDENTITY.to_bytes()


def test_order_times_base_is_identity():
    base = RistrettoPoint.from_bytes(bytes.fromhex(BASE_HEX))
    assert (base * L).to_bytes() == bytes(32)


def test_scalar_multiplication_distributes():
    base = RistrettoPoint.from_bytes(bytes.fromhex(BASE_HEX))
    a, b = 987654321, 123456789
    assert (base * (a + b)).to_bytes() == (base * a + base * b).to_bytes()


def test_rmul_matches_mul():
    base = RistrettoPoint.from_bytes(bytes.fromhex(BASE_HEX))
    assert (7 * base).to_bytes() == (base * 7).to_bytes()


def test_equality_ignores_projective_representation():
    base = RistrettoPoint.from_bytes(bytes.fromhex(BASE_HEX))
    doubled = base + base
    assert doubled == base * 2
    assert hash(doubled) == hash(base * 2)
    assert doubled.to_bytes().hex() == TWO_BASE_HEX


def test_multiples_round_trip():
    for k in (1, 2, 3, 1000, L - 1):
        point = BASEPOINT * k
        assert RistrettoPoint.from_bytes(point.to_bytes()) == point


def test_odd_encoding_rejected():
    with pytest.raises(ValueError):
        RistrettoPoint.from_bytes(bytes([1]) + bytes(31))


def test_encoding_at_or_above_field_prime_rejected():
    with pytest.raises(ValueError):
        RistrettoPoint.from_bytes(P.to_bytes(32, "little"))


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        RistrettoPoint.from_bytes(bytes(31))


def test_scalar_reduces_modulo_order():
    assert scalar_from_bytes_mod_order(L.to_bytes(32, "little")) == 0
    assert scalar_from_bytes_mod_order((L + 5).to_bytes(32, "little")) == 5


def test_scalar_wrong_length_rejected():
    with pytest.raises(ValueError):
        scalar_from_bytes_mod_order(bytes(16))


def test_comparison_with_other_types():
    base = RistrettoPoint.from_bytes(bytes.fromhex(BASE_HEX))
    assert (base == b"not a point") is False