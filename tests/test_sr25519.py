import pytest

from thresig.errors import ErrorKind, pallet_error_from
from thresig.ristretto import L
from thresig.sr25519 import SignatureError, signing_transcript, verify

PUBKEY = bytes.fromhex(
    "744ffca9bc5f2fa2373823c5510cf757fbbcda8e257eb0c7142edfda693b2f7b"
)
SIGNATURE = bytes.fromhex(
    "98d683074a37ac9bf3d08d81899071109d099ad4a006bb84662db241e507806f"
    "253c515d5f02216ec88ef91f322b583c49ea4c0e88eebc3bab32663df8019f88"
)
MESSAGE = (666666).to_bytes(4, "big")


def test_valid_signature_verifies():
    assert verify(SIGNATURE, PUBKEY, MESSAGE, b"multi-sig") is True


def test_default_context_is_multi_sig():
    assert verify(SIGNATURE, PUBKEY, MESSAGE) is True


def test_other_message_fails():
    assert verify(SIGNATURE, PUBKEY, (666667).to_bytes(4, "big")) is False


def test_other_context_fails():
    assert verify(SIGNATURE, PUBKEY, MESSAGE, b"substrate") is False


def test_tampered_r_fails():
    tampered = bytearray(SIGNATURE)
    tampered[0] ^= 0x02
    assert verify(bytes(tampered), PUBKEY, MESSAGE) is False


def test_unmarked_signature_raises():
    with pytest.raises(SignatureError) as info:
        verify(bytes([1] * 64), PUBKEY, MESSAGE)
    assert info.value.reason == "NotMarkedSchnorrkel"


def test_wrong_signature_length_raises():
    with pytest.raises(SignatureError):
        verify(SIGNATURE[:63], PUBKEY, MESSAGE)


def test_non_canonical_scalar_raises():
    s_bytes = bytearray(L.to_bytes(32, "little"))
    s_bytes[31] |= 0x80
    with pytest.raises(SignatureError):
        verify(SIGNATURE[:32] + bytes(s_bytes), PUBKEY, MESSAGE)


def test_invalid_public_key_raises():
    bad_key = b"\x01" + bytes(31)
    with pytest.raises(SignatureError) as info:
        verify(SIGNATURE, bad_key, MESSAGE)
    assert info.value.reason == "PointDecompressionError"


def test_wrong_public_key_length_raises():
    with pytest.raises(SignatureError):
        verify(SIGNATURE, PUBKEY[:31], MESSAGE)


def test_signature_error_maps_to_invalid_signature():
    with pytest.raises(SignatureError) as info:
        verify(bytes(64), PUBKEY, MESSAGE)
    assert pallet_error_from(info.value).kind is ErrorKind.INVALID_SIGNATURE


def test_signing_transcript_depends_on_message_and_context():
    base = signing_transcript(b"multi-sig", MESSAGE).challenge_bytes(b"c", 32)
    same = signing_transcript(b"multi-sig", MESSAGE).challenge_bytes(b"c", 32)
    other_msg = signing_transcript(b"multi-sig", b"x").challenge_bytes(b"c", 32)
    other_ctx = signing_transcript(b"other", MESSAGE).challenge_bytes(b"c", 32)
    assert base == same
    assert base != other_msg
    assert base != other_ctx