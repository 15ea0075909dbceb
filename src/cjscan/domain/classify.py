from __future__ import annotations
from typing import Sequence
from .models import Transaction, TxInput


def is_coinbase(inputs: Sequence[TxInput]) -> bool:
    """
    Exactly one input, and that input either carries the `coinbase` marker or
    references no previous output (neither `txid` nor `vout`). Node API shapes
    differ on which of the two representations they use.
    """
    if len(inputs) != 1:
        return False
    first = inputs[0]
    return first.has_coinbase_marker or (not first.has_prev_txid and not first.has_prev_vout)


def passes_thresholds(tx: Transaction, min_inputs: int, min_outputs: int) -> bool:
    if is_coinbase(tx.inputs):
        return False
    return tx.input_count >= min_inputs and tx.output_count >= min_outputs
