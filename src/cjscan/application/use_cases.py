from __future__ import annotations
import logging
from typing import Callable

from ..domain.classify import is_coinbase, passes_thresholds
from ..domain.models import BlockSummary, SuspiciousTransaction
from ..domain.value_types import Height
from ..ports.rpc import BitcoinRPC
from .planning import plan_window

log = logging.getLogger(__name__)

BlockHook = Callable[[BlockSummary], None]


async def analyze_blocks(
    rpc: BitcoinRPC,
    start_height: int,
    range_: int,
    min_inputs: int,
    min_outputs: int,
    *,
    on_block: BlockHook | None = None,
) -> list[SuspiciousTransaction]:
    """
    Walk `range_` blocks down from `start_height` and return every
    non-coinbase transaction with at least `min_inputs` inputs and
    `min_outputs` outputs, most recent block first.

    Any RPC or decoding failure aborts the whole scan; nothing is returned.
    """
    if min_inputs < 0 or min_outputs < 0:
        raise ValueError(f"thresholds must be >= 0 (got inputs={min_inputs}, outputs={min_outputs})")
    window = plan_window(start_height, range_)
    if window.truncated:
        log.warning(
            "Requested %d blocks from height %d; only %d exist down to genesis, scanning %d..%d",
            window.requested, window.end, window.span(), window.end, window.start,
        )

    suspicious: list[SuspiciousTransaction] = []
    total_txs = coinbase_txs = 0

    for height in window.heights():
        block_hash = await rpc.get_block_hash(height)
        log.info("Scanning block %d (hash: %s)", height, block_hash)
        block = await rpc.get_block(block_hash)

        n_coinbase = n_flagged = 0
        for tx in block.transactions:
            if is_coinbase(tx.inputs):
                n_coinbase += 1
                continue
            if passes_thresholds(tx, min_inputs, min_outputs):
                log.debug("flagged %s in=%d out=%d", tx.txid, tx.input_count, tx.output_count)
                suspicious.append(SuspiciousTransaction(
                    txid=tx.txid,
                    block_height=Height(height),
                    block_hash=block.hash,
                    input_count=tx.input_count,
                    output_count=tx.output_count,
                ))
                n_flagged += 1

        total_txs += len(block.transactions)
        coinbase_txs += n_coinbase
        if on_block is not None:
            on_block(BlockSummary(
                height=Height(height), hash=block.hash, tx_count=len(block.transactions),
                coinbase_count=n_coinbase, flagged_count=n_flagged,
            ))

    log.info(
        "Scanned %d blocks: %d transactions (%d coinbase), %d flagged",
        window.span(), total_txs, coinbase_txs, len(suspicious),
    )
    return suspicious


async def scan_recent(
    rpc: BitcoinRPC,
    range_: int,
    min_inputs: int,
    min_outputs: int,
    *,
    start_height: int | None = None,
    on_block: BlockHook | None = None,
) -> list[SuspiciousTransaction]:
    """Like `analyze_blocks`, starting from the chain tip unless `start_height` is given."""
    if start_height is None:
        start_height = await rpc.get_latest_height()
    return await analyze_blocks(rpc, start_height, range_, min_inputs, min_outputs, on_block=on_block)
