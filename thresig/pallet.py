"""The threshold-signature pallet: authorize scripts by MAST proofs and run them."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import Enum

from .errors import ErrorKind, MastError, ThresholdSignatureError, pallet_error_from
from .hash_types import XOnly, tagged_branch, tagged_leaf
from .mast import tweak_pubkey
from .primitive import OpCode
from .sr25519 import SignatureError, verify
from .weights import RUNTIME_DB_WEIGHT, exec_script_weight

SIGNING_CONTEXT = b"multi-sig"
SIGNATURE_SURVIVAL_HEIGHT = 10_000
_CHUNK = 32


class Balances:
    """Free balances of accounts, with an existential deposit."""

    def __init__(self, balances=None, existential_deposit: int = 1) -> None:
        if existential_deposit < 0:
            raise ValueError("existential deposit must not be negative")
        self.existential_deposit = existential_deposit
        self._free: dict[int, int] = {}
        for who, amount in dict(balances or {}).items():
            if amount < 0:
                raise ValueError("balances must not be negative")
            if amount >= existential_deposit and amount > 0:
                self._free[who] = amount

    def free_balance(self, who) -> int:
        """The free balance of ``who``; zero for unknown accounts."""
        return self._free.get(who, 0)

    def transfer(self, source, dest, amount: int) -> None:
        """Move ``amount`` from ``source`` to ``dest``, reaping dust on the source."""
        if amount < 0:
            raise ValueError("amount must not be negative")
        if amount == 0 or source == dest:
            return
        from_balance = self.free_balance(source)
        if from_balance < amount:
            raise ValueError("InsufficientBalance")
        new_to = self.free_balance(dest) + amount
        if new_to < self.existential_deposit:
            raise ValueError("ExistentialDeposit")
        new_from = from_balance - amount
        if new_from < self.existential_deposit or new_from == 0:
            self._free.pop(source, None)
        else:
            self._free[source] = new_from
        self._free[dest] = new_to


class EventKind(Enum):
    """Events deposited by the pallet."""

    GENERATE_ADDRESS = "GenerateAddress"
    PASS_SCRIPT = "PassScript"
    EXECUTE_SCRIPT = "ExecuteScript"
    USE_SIGNATURE = "UseSignature"


@dataclass(frozen=True)
class Event:
    """A deposited event and its arguments."""

    kind: EventKind
    args: tuple


def _ensure_signed(origin):
    if origin is None:
        raise PermissionError("BadOrigin")
    return origin


def _encode_uint(value: int, size: int, what: str) -> bytes:
    try:
        return int(value).to_bytes(size, "little")
    except OverflowError as exc:
        raise ValueError(f"{what} does not fit in {size} bytes: {value}") from exc


class ThresholdSignaturePallet:
    """State and dispatchable calls of the threshold-signature pallet.

    Accounts are integers encoded little-endian in ``account_size`` bytes;
    balances and block numbers likewise use ``balance_size`` and
    ``block_number_size`` bytes.
    """

    def __init__(
        self,
        balances=None,
        block_number: int = 0,
        account_size: int = 32,
        balance_size: int = 16,
        block_number_size: int = 4,
    ) -> None:
        self.balances = balances if balances is not None else Balances()
        self.block_number = block_number
        self.account_size = account_size
        self.balance_size = balance_size
        self.block_number_size = block_number_size
        self.events: list[Event] = []
        self._script_hash_to_addr: dict[bytes, int] = {}
        self._signature_survival_height: dict[bytes, int] = {}

    # storage --------------------------------------------------------------

    def script_hash_to_addr(self, script_hash) -> int:
        """The address that authorized ``script_hash``; zero if none."""
        return self._script_hash_to_addr.get(bytes(script_hash), 0)

    def signature_survival_height(self, signature) -> int:
        """The survival height stored for ``signature``; zero if unused."""
        return self._signature_survival_height.get(bytes(signature), 0)

    def _deposit_event(self, kind: EventKind, *args) -> None:
        self.events.append(Event(kind, args))

    # encoding -------------------------------------------------------------

    def decode_account(self, data) -> int:
        """Decode an account from the start of ``data``."""
        data = bytes(data)
        if len(data) < self.account_size:
            raise ValueError("not enough bytes to decode an account")
        return int.from_bytes(data[: self.account_size], "little")

    def compute_script_hash(self, account, call, amount, time_lock) -> bytes:
        """SHA-256 of the encoded account, opcode, amount and time lock."""
        opcode = OpCode(call)
        low, high = time_lock
        payload = b"".join(
            (
                _encode_uint(account, self.account_size, "account"),
                bytes(opcode),
                _encode_uint(amount, self.balance_size, "amount"),
                _encode_uint(low, self.block_number_size, "block number"),
                _encode_uint(high, self.block_number_size, "block number"),
            )
        )
        return hashlib.sha256(payload).digest()

    # calls ----------------------------------------------------------------

    def pass_script(
        self, origin, addr, signature, pubkey, control_block, message, script_hash
    ) -> None:
        """Verify a threshold signature and authorize ``script_hash`` for ``addr``."""
        _ensure_signed(origin)
        if bytes(signature) in self._signature_survival_height:
            raise ThresholdSignatureError(ErrorKind.EXISTED_SIGNATURE)
        self.apply_pass_script(addr, signature, pubkey, control_block, message, script_hash)

    def apply_pass_script(
        self, addr, signature, pubkey, control_block, message, script_hash
    ) -> None:
        """Check the proof and signature, then store the authorization."""
        signature = bytes(signature)
        script_hash = bytes(script_hash)
        control_block = bytes(control_block)
        if len(control_block) % _CHUNK:
            raise ThresholdSignatureError(ErrorKind.MAST_GEN_PROOF_ERROR)
        chunks = [
            control_block[offset : offset + _CHUNK]
            for offset in range(0, len(control_block), _CHUNK)
        ]

        if self.apply_verify_threshold_signature(addr, signature, pubkey, chunks, message):
            height = SIGNATURE_SURVIVAL_HEIGHT
            self._script_hash_to_addr[script_hash] = addr
            self._signature_survival_height[signature] = height
            self._deposit_event(EventKind.USE_SIGNATURE, signature, height)
            self._deposit_event(EventKind.PASS_SCRIPT, script_hash, addr)

    def apply_verify_threshold_signature(
        self, addr, signature, pubkey, control_block, message
    ) -> bool:
        """Verify the MAST proof in ``control_block`` and the Schnorr signature.

        ``control_block`` is a list of 32-byte chunks: the inner public key
        followed by the Merkle proof.
        """
        if not control_block:
            raise ThresholdSignatureError(ErrorKind.MAST_GEN_PROOF_ERROR)
        try:
            inner_pubkey = XOnly(control_block[0])
        except MastError as exc:
            raise pallet_error_from(exc) from exc

        proofs = [bytes(chunk) for chunk in control_block[1:]]
        if any(len(node) != _CHUNK for node in proofs):
            raise ThresholdSignatureError(ErrorKind.INVALID_PROOF)

        self._verify_proof(addr, pubkey, inner_pubkey, proofs)
        self._verify_signature(signature, pubkey, message)
        return True

    def _verify_proof(self, addr, pubkey, inner_pubkey: XOnly, proofs) -> None:
        try:
            node = tagged_leaf(XOnly(pubkey))
            for proof in proofs:
                node = tagged_branch(node, proof)
            tweaked = tweak_pubkey(inner_pubkey, node)
        except MastError as exc:
            raise pallet_error_from(exc) from exc
        try:
            output_address = self.decode_account(tweaked)
        except ValueError:
            output_address = 0
        if addr != output_address:
            raise ThresholdSignatureError(ErrorKind.MAST_GEN_PROOF_ERROR)

    @staticmethod
    def _verify_signature(signature, pubkey, message) -> None:
        try:
            valid = verify(signature, pubkey, message, SIGNING_CONTEXT)
        except SignatureError as exc:
            raise ThresholdSignatureError(ErrorKind.INVALID_SIGNATURE) from exc
        if not valid:
            raise ThresholdSignatureError(ErrorKind.INVALID_SIGNATURE)

    def exec_script(self, origin, target, call, amount, time_lock) -> int:
        """Execute an authorized script; returns the weight actually used."""
        _ensure_signed(origin)
        call = OpCode(call)
        time_lock = tuple(time_lock)
        script_hash = self.compute_script_hash(target, call, amount, time_lock)
        self._apply_exec_script(target, call, amount, time_lock, script_hash)
        return exec_script_weight(RUNTIME_DB_WEIGHT)

    def _apply_exec_script(self, account, call, amount, time_lock, script_hash) -> None:
        if script_hash not in self._script_hash_to_addr:
            raise ThresholdSignatureError(ErrorKind.NO_PASS_SCRIPT)
        low, high = time_lock
        if self.block_number < low or self.block_number > high:
            raise ThresholdSignatureError(ErrorKind.MISMATCH_TIME_LOCK)

        addr = self._script_hash_to_addr[script_hash]
        if call is OpCode.TRANSFER:
            self.balances.transfer(addr, account, amount)
            del self._script_hash_to_addr[script_hash]
            self._deposit_event(
                EventKind.EXECUTE_SCRIPT, account, addr, call, amount, time_lock
            )