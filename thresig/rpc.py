"""RPC helpers exposing the threshold-signature script hash."""

from __future__ import annotations

from .pallet import Balances, ThresholdSignaturePallet
from .primitive import OpCode

RUNTIME_ERROR = 1
"""The call to the runtime failed."""

METHOD_COMPUTE_SCRIPT_HASH = "ts_computeScriptHash"

_RUNTIME = ThresholdSignaturePallet(
    Balances(), block_number=0, account_size=32, balance_size=16, block_number_size=4
)


class RpcError(Exception):
    """A JSON-RPC error object."""

    def __init__(self, code: int, message: str, data=None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def to_dict(self) -> dict:
        """The JSON-RPC error object as a dictionary."""
        error = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error


def runtime_error_into_rpc_err(err) -> RpcError:
    """Convert a runtime failure into an RPC error."""
    return RpcError(RUNTIME_ERROR, "Runtime trapped", repr(err))


def compute_script_hash_hex(account, call, amount, time_lock) -> str:
    """Hex of the script hash for a 32-byte account, a u128 amount and a u32 time lock."""
    try:
        account = bytes(account)
        if len(account) != 32:
            raise ValueError("an account id is 32 bytes")
        opcode = OpCode.parse(call) if isinstance(call, str) else OpCode(call)
        digest = _RUNTIME.compute_script_hash(
            int.from_bytes(account, "little"), opcode, amount, tuple(time_lock)
        )
    except (TypeError, ValueError) as exc:
        raise runtime_error_into_rpc_err(exc) from exc
    return digest.hex()