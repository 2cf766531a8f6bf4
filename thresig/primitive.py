"""Primitive types shared by the threshold-signature pallet and its RPC."""

from __future__ import annotations

from enum import IntEnum

Pubkey = bytes
"""A leaf of the MAST: usually an (aggregate) public key."""

Signature = bytes
"""A signature made with the key of a ``Pubkey``."""

Message = bytes
"""The signed message."""

ScriptHash = bytes
"""The hash of a custom script."""


class OpCode(IntEnum):
    """Opcodes of custom scripts; the value is the encoded byte."""

    TRANSFER = 0

    @property
    def label(self) -> str:
        """The name used in serialized form, e.g. ``"Transfer"``."""
        return self.name.title()

    @classmethod
    def parse(cls, text: str) -> OpCode:
        """Look an opcode up by its serialized name."""
        for opcode in cls:
            if opcode.label == text:
                return opcode
        raise ValueError(f"unknown opcode: {text!r}")

    @classmethod
    def decode(cls, data) -> OpCode:
        """Decode an opcode from its one-byte encoding."""
        data = bytes(data)
        if len(data) != 1:
            raise ValueError("an opcode is encoded as a single byte")
        return cls(data[0])

    def __bytes__(self) -> bytes:
        return bytes([int(self)])