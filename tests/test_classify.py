from __future__ import annotations

import pytest

from cjscan.domain.classify import is_coinbase, passes_thresholds
from cjscan.domain.models import Transaction, TxInput
from cjscan.domain.value_types import TxId

SPEND = TxInput(has_coinbase_marker=False, has_prev_txid=True, has_prev_vout=True)
MARKER = TxInput(has_coinbase_marker=True, has_prev_txid=False, has_prev_vout=False)
BARE = TxInput(has_coinbase_marker=False, has_prev_txid=False, has_prev_vout=False)


def _tx(inputs, outputs: int) -> Transaction:
    return Transaction(txid=TxId("t"), inputs=tuple(inputs), output_count=outputs)


def test_marker_wins_even_with_spend_reference():
    odd = TxInput(has_coinbase_marker=True, has_prev_txid=True, has_prev_vout=True)
    assert is_coinbase([odd])
    assert is_coinbase([MARKER])


def test_single_input_without_reference_is_coinbase():
    assert is_coinbase([BARE])


@pytest.mark.parametrize("inputs", [
    [],
    [SPEND],
    [MARKER, SPEND],
    [BARE, BARE],
    [MARKER, MARKER, MARKER],
])
def test_not_coinbase(inputs):
    assert not is_coinbase(inputs)


def test_half_reference_is_not_coinbase():
    only_txid = TxInput(has_coinbase_marker=False, has_prev_txid=True, has_prev_vout=False)
    only_vout = TxInput(has_coinbase_marker=False, has_prev_txid=False, has_prev_vout=True)
    assert not is_coinbase([only_txid])
    assert not is_coinbase([only_vout])


def test_thresholds_are_inclusive():
    tx = _tx([SPEND] * 3, 2)
    assert passes_thresholds(tx, 3, 2)
    assert not passes_thresholds(tx, 4, 2)
    assert not passes_thresholds(tx, 3, 3)


def test_coinbase_never_passes_even_with_zero_thresholds():
    assert not passes_thresholds(_tx([MARKER], 50), 0, 0)
    assert passes_thresholds(_tx([], 0), 0, 0)
