from __future__ import annotations
import json, logging
import httpx
from typing import Any, Sequence
from ..domain.decoding import decode_block, decode_block_hash, decode_height
from ..domain.errors import MalformedResponseError, RPCError, TransportError
from ..domain.models import Block, RPCEndpoint
from ..domain.value_types import BlockHash
from ..ports.rpc import BitcoinRPC

log = logging.getLogger(__name__)

GETBLOCK_VERBOSITY = 2  # full decoded transactions, not just txids

def _build_payload(method: str, params: Sequence[Any]) -> dict[str, Any]:
    return {"jsonrpc": "1.0", "id": "1", "method": method, "params": list(params)}

def _raise_rpc_error(err: Any) -> None:
    if isinstance(err, dict):
        msg = err.get("message")
        code = err.get("code")
        raise RPCError(msg if isinstance(msg, str) else None, code if isinstance(code, int) else None)
    raise RPCError(str(err))

class HttpxBitcoinRPC(BitcoinRPC):
    def __init__(
        self,
        endpoint: RPCEndpoint,
        timeout_s: float = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.client = httpx.AsyncClient(
            auth=httpx.BasicAuth(endpoint.username, endpoint.password),
            timeout=httpx.Timeout(timeout_s),
            limits=httpx.Limits(max_connections=1, max_keepalive_connections=1),
            transport=transport,
        )

    async def __aenter__(self) -> "HttpxBitcoinRPC":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def call(self, method: str, params: Sequence[Any] = ()) -> Any:
        payload = _build_payload(method, params)
        log.debug("rpc -> %s %s", method, payload["params"])
        try:
            r = await self.client.post(self.endpoint.url, json=payload)
        except httpx.HTTPError as e:
            raise TransportError(f"{method}: {type(e).__name__}: {e}") from e
        # bitcoind answers RPC errors with HTTP 500 and a JSON body, so parse first
        try:
            data = r.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise TransportError(f"{method}: HTTP {r.status_code} with non-JSON body") from e
        if not isinstance(data, dict):
            raise MalformedResponseError("response", f"{method} reply is not a JSON object")
        err = data.get("error")
        if err is not None:
            _raise_rpc_error(err)
        return data.get("result")

    async def get_latest_height(self) -> int:
        return decode_height(await self.call("getblockchaininfo"))

    async def get_block_hash(self, height: int) -> BlockHash:
        return decode_block_hash(await self.call("getblockhash", [int(height)]))

    async def get_block(self, block_hash: str) -> Block:
        result = await self.call("getblock", [block_hash, GETBLOCK_VERBOSITY])
        return decode_block(result, block_hash)
