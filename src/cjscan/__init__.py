"""cjscan: flag CoinJoin-like transactions in recent Bitcoin blocks."""

__version__ = "0.1.0"
