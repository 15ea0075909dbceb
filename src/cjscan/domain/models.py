from __future__ import annotations
from dataclasses import dataclass, field
from .value_types import BlockHash, Height, TxId

@dataclass(slots=True, frozen=True)
class RPCEndpoint:
    url: str
    username: str
    password: str = field(repr=False)

@dataclass(slots=True, frozen=True)
class TxInput:
    has_coinbase_marker: bool
    has_prev_txid: bool        # key present, whatever its value
    has_prev_vout: bool

@dataclass(slots=True, frozen=True)
class Transaction:
    txid: TxId
    inputs: tuple[TxInput, ...]
    output_count: int
    @property
    def input_count(self) -> int: return len(self.inputs)

@dataclass(slots=True, frozen=True)
class Block:
    hash: BlockHash
    transactions: tuple[Transaction, ...]

@dataclass(slots=True, frozen=True)
class SuspiciousTransaction:
    txid: TxId
    block_height: Height
    block_hash: BlockHash
    input_count: int
    output_count: int

@dataclass(slots=True, frozen=True)
class HeightWindow:
    start: int        # lowest height, inclusive
    end: int          # highest height, inclusive
    requested: int    # range asked for by the caller
    def span(self) -> int: return self.end - self.start + 1
    @property
    def truncated(self) -> bool: return self.requested > self.span()
    def heights(self) -> range:
        """Heights most-recent first."""
        return range(self.end, self.start - 1, -1)

@dataclass(slots=True, frozen=True)
class BlockSummary:
    height: Height
    hash: BlockHash
    tx_count: int
    coinbase_count: int
    flagged_count: int
