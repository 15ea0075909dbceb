"""
Pytest fixtures for cjscan tests. The node is faked with httpx.MockTransport
so the real adapter code (auth, payload, error mapping) runs end to end.
"""

from __future__ import annotations

import json
import logging

import httpx
import pytest

from cjscan.adapters.rpc_httpx import HttpxBitcoinRPC
from cjscan.domain.models import RPCEndpoint

ENDPOINT = RPCEndpoint(url="http://node.test:8332", username="alice", password="s3cret")


def block_hash(height: int) -> str:
    return f"{height:064x}"


def coinbase_tx(txid: str, outputs: int = 1) -> dict:
    return {
        "txid": txid,
        "vin": [{"coinbase": "03a0860100", "sequence": 4294967295}],
        "vout": [{"value": 3.125, "n": i} for i in range(outputs)],
    }


def regular_tx(txid: str, inputs: int, outputs: int) -> dict:
    return {
        "txid": txid,
        "vin": [{"txid": f"{i:064x}", "vout": i, "sequence": 4294967293} for i in range(inputs)],
        "vout": [{"value": 0.01, "n": i} for i in range(outputs)],
    }


class FakeNode:
    """Minimal bitcoind: serves blocks keyed by height and records every call."""

    def __init__(self, blocks: dict[int, list[dict]] | None = None, tip: int | None = None) -> None:
        self.blocks = blocks or {}
        self.tip = tip if tip is not None else max(self.blocks, default=0)
        self.calls: list[tuple[str, list]] = []
        self.requests: list[httpx.Request] = []
        self.fail_on: dict[tuple[str, str], dict] = {}  # (method, first param) -> error object

    def _by_hash(self, h: str) -> int | None:
        for height in self.blocks:
            if block_hash(height) == h:
                return height
        return None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body = json.loads(request.content)
        method, params = body["method"], body["params"]
        self.calls.append((method, params))
        key = (method, str(params[0]) if params else "")
        if key in self.fail_on:
            return httpx.Response(500, json={"result": None, "error": self.fail_on[key], "id": body["id"]})
        if method == "getblockchaininfo":
            result = {"chain": "regtest", "blocks": self.tip}
        elif method == "getblockhash":
            if params[0] not in self.blocks:
                return httpx.Response(500, json={"result": None, "id": body["id"],
                                                 "error": {"code": -8, "message": "Block height out of range"}})
            result = block_hash(params[0])
        elif method == "getblock":
            height = self._by_hash(params[0])
            if height is None:
                return httpx.Response(500, json={"result": None, "id": body["id"],
                                                 "error": {"code": -5, "message": "Block not found"}})
            result = {"hash": params[0], "height": height, "tx": self.blocks[height]}
        else:
            return httpx.Response(500, json={"result": None, "id": body["id"],
                                             "error": {"code": -32601, "message": "Method not found"}})
        return httpx.Response(200, json={"result": result, "error": None, "id": body["id"]})

    def client(self) -> HttpxBitcoinRPC:
        return HttpxBitcoinRPC(ENDPOINT, transport=httpx.MockTransport(self.handler))


@pytest.fixture(autouse=True)
def _reset_cjscan_logger():
    yield
    lg = logging.getLogger("cjscan")
    lg.handlers.clear()
    lg.setLevel(logging.NOTSET)
    lg.propagate = True
