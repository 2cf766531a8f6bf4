# thresig

Threshold-signature scripts built on a MAST (a Merkle tree of aggregated
public keys). A script may only run after a Merkle proof for its key and
a Schnorr signature over Ristretto (sr25519) made with that key have both
been checked.

Pure Python, no third-party dependencies, Python 3.10 or newer.

## Modules

- `thresig.hash_types`: the x-only public key `XOnly` (exactly 32 bytes),
  the taproot tags `TapTag`, `tagged_hash`, `tag_midstate`,
  `sha256_midstate`, the MAST node helpers `tagged_leaf` and
  `tagged_branch`, and `node_hex` / `node_from_hex`, which display and
  parse 32-byte nodes in reversed byte order.
- `thresig.mast`: `Mast` builds the tree from `XOnly` keys. It gives
  the Merkle root (`calc_root`, which needs at least two keys), the proof
  for one key (`generate_merkle_proof`) and the tweaked threshold address
  (`generate_tweak_pubkey`). `tweak_pubkey` computes
  `P + TapTweak(P || root) * G` directly.
- `thresig.pmt`: `PartialMerkleTree`, the partial Merkle tree that roots
  and proofs come from (`from_leaf_nodes`, `extract_matches`,
  `collected_hashes`).
- `thresig.ristretto`: `RistrettoPoint`, ristretto255 points with
  encoding, decoding, addition, negation and scalar multiplication, and
  `scalar_from_bytes_mod_order`.
- `thresig.merlin`: Merlin `Transcript` on STROBE-128, and the
  `keccak_f1600` permutation.
- `thresig.sr25519`: `verify` checks an sr25519 signature under a signing
  context (by default `b"multi-sig"`). `signing_transcript` builds the
  transcript. Malformed signatures or keys raise `SignatureError`.
- `thresig.encode`: Bitcoin compact-size integers (`VarInt`), `encode_int`
  and `encode_with_size`.
- `thresig.primitive`: `OpCode` (only `TRANSFER`, encoded as byte 0).
- `thresig.weights`: `DbWeight`, `pass_script_weight`,
  `exec_script_weight` and `RUNTIME_DB_WEIGHT`.
- `thresig.pallet`: `ThresholdSignaturePallet` and `Balances`, the state
  of authorised script hashes, used signatures, balances and events.
- `thresig.rpc`: `compute_script_hash_hex` returns a script hash as hex
  for a 32-byte account, a u128 amount and a u32 time lock. Failures are
  raised as `RpcError`; `runtime_error_into_rpc_err` builds one.
- `thresig.errors`: the exception types and `pallet_error_from`.

## Building a MAST

```python
from thresig.hash_types import XOnly, node_hex
from thresig.mast import Mast

keys = [
    XOnly(bytes.fromhex("D69C3509BB99E412E68B0FE8544E72837DFA30746D8BE2AA65975F29D22DC7B9")),
    XOnly(bytes.fromhex("EEFDEA4CDB677750A420FEE807EACF21EB9898AE79B9768766E4FAA04A2D4A34")),
    XOnly(bytes.fromhex("DFF1D77F2A671C5F36183726DB2341BE58FEAE1DA2DECED843240F7B502BA659")),
]
mast = Mast(keys)
print(node_hex(mast.calc_root()))
proof = mast.generate_merkle_proof(keys[0])
```

## Authorising and running a script

Accounts are integers. They are encoded little-endian in `account_size`
bytes (32 by default). Amounts use `balance_size` bytes and block numbers
use `block_number_size` bytes.

- `pass_script(origin, addr, signature, pubkey, control_block, message, script_hash)`:
  - `control_block` is the inner public key followed by the Merkle proof,
    in 32-byte chunks.
  - The call checks that the proof leads to `addr` and that `signature`
    is valid for `message` under `pubkey`.
  - It then records `addr` for `script_hash` and marks the signature as
    used. Reusing a signature fails.
- `exec_script(origin, target, call, amount, time_lock)`:
  - It recomputes the script hash and checks that it was authorised.
  - It checks that `block_number` lies within the time lock.
  - It then transfers `amount` from the authorising address to `target`
    and removes the authorisation.
  - It returns the weight used.
- An origin of `None` is rejected with `PermissionError`.
- Events are appended to `pallet.events`.

```python
from thresig.pallet import Balances, ThresholdSignaturePallet
from thresig.primitive import OpCode

pallet = ThresholdSignaturePallet(Balances({1: 10}, 1), block_number=1)
script_hash = pallet.compute_script_hash(1, OpCode.TRANSFER, 10, (0, 10))
```

## Errors

- Tree building and encoding raise subclasses of
  `thresig.errors.MastError`.
- Pallet calls raise `thresig.errors.ThresholdSignatureError`. Its `kind`
  is a `thresig.errors.ErrorKind`.
- Failed balance transfers raise `ValueError`.

## What it does not do

- It verifies signatures but does not create them, and it does not
  aggregate keys.
- All pallet state lives in memory for the life of the object. There is
  no persistent storage, no block production and no network node.
- `thresig.rpc` provides functions only. It runs no RPC server.

## Running the tests

```
pip install -e .[test]
pytest
```