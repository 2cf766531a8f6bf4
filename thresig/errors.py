"""Error types for MAST construction and the threshold-signature pallet."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Errors reported by the threshold-signature pallet."""

    NO_ADDRESS_IN_STORAGE = "NoAddressInStorage"
    MAST_BUILD_ERROR = "MastBuildError"
    INVALID_MAST = "InvalidMast"
    MAST_GEN_PROOF_ERROR = "MastGenProofError"
    MAST_GEN_ADDR_ERROR = "MastGenAddrError"
    INVALID_ENCODING = "InvalidEncoding"
    INVALID_SIGNATURE = "InvalidSignature"
    INVALID_PROOF = "InvalidProof"
    MISMATCH_TIME_LOCK = "MisMatchTimeLock"
    NO_PASS_SCRIPT = "NoPassScript"
    EXISTED_SIGNATURE = "ExistedSignature"
    EXPIRED_SIGNATURE = "ExpiredSignature"


class MastError(Exception):
    """Base class of errors raised while building or using a MAST."""

    pallet_error_kind: ErrorKind | None = None

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class MastBuildError(MastError):
    """The MAST could not be built."""

    pallet_error_kind = ErrorKind.MAST_BUILD_ERROR


class MastGenProofError(MastError):
    """A Merkle proof could not be generated or did not check out."""

    pallet_error_kind = ErrorKind.MAST_GEN_PROOF_ERROR


class MastGenAddrError(MastError):
    """An address could not be generated."""

    pallet_error_kind = ErrorKind.MAST_GEN_ADDR_ERROR


class InvalidMastError(MastError):
    """The constructed MAST is inconsistent."""

    pallet_error_kind = ErrorKind.INVALID_MAST


class FromHexError(MastError):
    """Malformed hexadecimal text."""

    pallet_error_kind = ErrorKind.INVALID_ENCODING


class MastIoError(MastError):
    """An encoding step failed to write its output."""

    pallet_error_kind = ErrorKind.INVALID_ENCODING


class KeyPairError(MastError):
    """A key or signature could not be processed."""

    pallet_error_kind = ErrorKind.INVALID_ENCODING


class ThresholdSignatureError(Exception):
    """An error reported by the threshold-signature pallet."""

    def __init__(self, kind) -> None:
        kind = ErrorKind(kind)
        super().__init__(kind.value)
        self.kind = kind

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ThresholdSignatureError):
            return NotImplemented
        return self.kind is other.kind

    def __hash__(self) -> int:
        return hash(self.kind)


def pallet_error_from(err: BaseException) -> ThresholdSignatureError:
    """Map a lower-level error onto the pallet error it stands for.

    Errors carrying a ``pallet_error_kind`` attribute map to that kind;
    any other ``ValueError`` (a malformed hash) maps to ``InvalidProof``.
    """
    if isinstance(err, ThresholdSignatureError):
        return err
    kind = getattr(err, "pallet_error_kind", None)
    if isinstance(kind, ErrorKind):
        return ThresholdSignatureError(kind)
    if isinstance(err, MastError):
        return ThresholdSignatureError(ErrorKind.INVALID_MAST)
    if isinstance(err, ValueError):
        return ThresholdSignatureError(ErrorKind.INVALID_PROOF)
    raise TypeError(f"no pallet error corresponds to {type(err).__name__}")