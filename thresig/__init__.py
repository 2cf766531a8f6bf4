"""Threshold signature scripts over MAST with sr25519 verification."""

__version__ = "0.1.0"
__all__ = [
    "encode",
    "errors",
    "hash_types",
    "mast",
    "merlin",
    "pallet",
    "pmt",
    "primitive",
    "ristretto",
    "rpc",
    "sr25519",
    "weights",
]