"""Verification of schnorrkel (sr25519) signatures."""

from __future__ import annotations

from .errors import ErrorKind
from .merlin import Transcript
from .ristretto import BASEPOINT, L, RistrettoPoint

SIGNATURE_LENGTH = 64
PUBLIC_KEY_LENGTH = 32
DEFAULT_CONTEXT = b"multi-sig"


class SignatureError(ValueError):
    """A signature or public key could not be processed."""

    pallet_error_kind = ErrorKind.INVALID_SIGNATURE

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


def signing_transcript(context, message) -> Transcript:
    """The transcript that signing ``message`` under ``context`` starts from."""
    transcript = Transcript(b"SigningContext")
    transcript.append_message(b"", context)
    transcript.append_message(b"sign-bytes", message)
    return transcript


def _parse_signature(signature: bytes) -> tuple[bytes, int]:
    if len(signature) != SIGNATURE_LENGTH:
        raise SignatureError("BytesLengthError")
    if not signature[63] & 0x80:
        raise SignatureError("NotMarkedSchnorrkel")
    s = int.from_bytes(signature[32:], "little") & ~(1 << 255)
    if s >= L:
        raise SignatureError("ScalarFormatError")
    return signature[:32], s


def _parse_public_key(public_key: bytes) -> RistrettoPoint:
    if len(public_key) != PUBLIC_KEY_LENGTH:
        raise SignatureError("BytesLengthError")
    try:
        return RistrettoPoint.from_bytes(public_key)
    except ValueError as exc:
        raise SignatureError("PointDecompressionError") from exc


def verify(signature, public_key, message, context=DEFAULT_CONTEXT) -> bool:
    """Check an sr25519 signature of ``message`` under ``context``.

    Returns whether the verification equation holds; raises
    :class:`SignatureError` if the signature or the key is malformed.
    """
    signature = bytes(signature)
    public_key = bytes(public_key)
    r_bytes, s = _parse_signature(signature)
    point_a = _parse_public_key(public_key)

    transcript = signing_transcript(context, message)
    transcript.append_message(b"proto-name", b"Schnorr-sig")
    transcript.append_message(b"sign:pk", public_key)
    transcript.append_message(b"sign:R", r_bytes)
    k = int.from_bytes(transcript.challenge_bytes(b"sign:c", 64), "little") % L

    r_point = BASEPOINT * s + (-point_a) * k
    return r_point.to_bytes() == r_bytes