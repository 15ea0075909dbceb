from __future__ import annotations
from typing import NewType

BlockHash = NewType("BlockHash", str)   # 64-char hex, as returned by the node
TxId      = NewType("TxId", str)
Height    = NewType("Height", int)      # >= 0
