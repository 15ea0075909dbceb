from __future__ import annotations
from typing import Any

from .errors import MalformedResponseError
from .models import Block, Transaction, TxInput
from .value_types import BlockHash, TxId

# ---------- field helpers -----------------------------------------------------

def _is_int(v: Any) -> bool:
    """JSON integers only; bool is an int subclass and is rejected."""
    return isinstance(v, int) and not isinstance(v, bool)

# ---------- per-method decoders -----------------------------------------------

def decode_height(result: Any) -> int:
    """`getblockchaininfo` -> `.blocks` as a non-negative int."""
    if not isinstance(result, dict):
        raise MalformedResponseError("blocks", "getblockchaininfo result is not an object")
    blocks = result.get("blocks")
    if not _is_int(blocks) or blocks < 0:
        raise MalformedResponseError("blocks", f"expected non-negative integer, got {blocks!r}")
    return blocks

def decode_block_hash(result: Any) -> BlockHash:
    if not isinstance(result, str):
        raise MalformedResponseError("block hash", f"expected string, got {type(result).__name__}")
    return BlockHash(result)

def decode_input(raw: Any) -> TxInput:
    if not isinstance(raw, dict):
        raise MalformedResponseError("vin", "input is not an object")
    # presence of the key decides, a JSON null still counts as carried
    return TxInput(
        has_coinbase_marker="coinbase" in raw,
        has_prev_txid="txid" in raw,
        has_prev_vout="vout" in raw,
    )

def decode_transaction(raw: Any) -> Transaction:
    if not isinstance(raw, dict):
        raise MalformedResponseError("tx", "transaction is not an object")
    txid = raw.get("txid")
    if not isinstance(txid, str):
        raise MalformedResponseError("txid")
    vin = raw.get("vin")
    if not isinstance(vin, list):
        raise MalformedResponseError("vin", f"in tx {txid}")
    vout = raw.get("vout")
    if not isinstance(vout, list):
        raise MalformedResponseError("vout", f"in tx {txid}")
    return Transaction(
        txid=TxId(txid),
        inputs=tuple(decode_input(i) for i in vin),
        output_count=len(vout),
    )

def decode_block(result: Any, requested_hash: str) -> Block:
    """`getblock <hash> 2` -> Block with fully decoded transactions."""
    if not isinstance(result, dict):
        raise MalformedResponseError("block", "getblock result is not an object")
    txs = result.get("tx")
    if not isinstance(txs, list):
        raise MalformedResponseError("transactions", f"block {requested_hash} has no tx array")
    h = result.get("hash")
    return Block(
        hash=BlockHash(h if isinstance(h, str) else requested_hash),
        transactions=tuple(decode_transaction(tx) for tx in txs),
    )
