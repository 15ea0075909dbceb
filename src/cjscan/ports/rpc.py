# cjscan/ports/rpc.py
from __future__ import annotations

from typing import Any, Protocol, Sequence
from ..domain.models import Block
from ..domain.value_types import BlockHash


class BitcoinRPC(Protocol):
    """Port defining the contract for a Bitcoin node JSON-RPC client."""

    async def call(self, method: str, params: Sequence[Any] = ()) -> Any:
        """Issue one JSON-RPC request and return its `result` verbatim."""

    async def get_latest_height(self) -> int:
        """Return the height of the chain tip (`getblockchaininfo.blocks`)."""

    async def get_block_hash(self, height: int) -> BlockHash:
        """Return the hash of the block at `height` on the active chain."""

    async def get_block(self, block_hash: str) -> Block:
        """Return the block with full transaction detail (verbosity 2)."""
