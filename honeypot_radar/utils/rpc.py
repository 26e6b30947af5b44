# honeypot_radar/utils/rpc.py
# Purpose: read-only contract calls over a rotating list of BSC RPC endpoints (Web3 v7, async).

import asyncio
import logging
import random
from typing import Any, Dict, Sequence

from aiohttp import ClientTimeout
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.middleware.proof_of_authority import ExtraDataToPOAMiddleware

from honeypot_radar.chains import POA_CHAIN_IDS

logger = logging.getLogger(__name__)


def _dbg(msg: str) -> None:
    logger.debug(f"[rpc] {msg}")


class RpcTransport:
    """
    Async contract-call transport.

    Each call is tried up to max_retries times, moving to the next RPC URL
    after every failure; the last error is re-raised. The first URL is
    picked at random (load balancing) unless prefer_first is set, which is
    how a user-supplied RPC is always tried first.
    """

    def __init__(
        self,
        rpc_urls: Sequence[str],
        chain_id: int = 56,
        timeout: float = 8.0,
        max_retries: int = 2,
        retry_delay: float = 0.5,
        prefer_first: bool = False,
    ):
        if not rpc_urls:
            raise ValueError("RpcTransport needs at least one RPC URL")
        self.rpc_urls = list(rpc_urls)
        self.chain_id = chain_id
        self.timeout = float(timeout)
        self.max_retries = max(1, int(max_retries))
        self.retry_delay = float(retry_delay)
        self.prefer_first = prefer_first
        self._clients: Dict[str, AsyncWeb3] = {}

    @classmethod
    def from_config(cls, cfg) -> "RpcTransport":
        return cls(
            cfg.rpc_urls,
            chain_id=cfg.chain_id,
            timeout=cfg.rpc_timeout,
            max_retries=cfg.rpc_max_retries,
            retry_delay=cfg.rpc_retry_delay,
            prefer_first=cfg.custom_rpc,
        )

    def _w3(self, url: str) -> AsyncWeb3:
        w3 = self._clients.get(url)
        if w3 is None:
            _dbg(f"AsyncHTTPProvider -> {url}")
            w3 = AsyncWeb3(AsyncHTTPProvider(url, request_kwargs={"timeout": ClientTimeout(total=self.timeout)}))
            if self.chain_id in POA_CHAIN_IDS:
                w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
            self._clients[url] = w3
        return w3

    async def call(self, address: str, abi: list, fn_name: str, *args: Any) -> Any:
        start = 0 if self.prefer_first else random.randrange(len(self.rpc_urls))
        for attempt in range(self.max_retries):
            url = self.rpc_urls[(start + attempt) % len(self.rpc_urls)]
            try:
                contract = self._w3(url).eth.contract(address=AsyncWeb3.to_checksum_address(address), abi=abi)
                return await getattr(contract.functions, fn_name)(*args).call()
            except Exception as e:
                if attempt == self.max_retries - 1:
                    raise
                _dbg(f"{fn_name} on {address} failed via {url}: {e}; retrying")
                await asyncio.sleep(self.retry_delay)

    async def close(self) -> None:
        for url, w3 in self._clients.items():
            try:
                await w3.provider.disconnect()
            except Exception as e:
                _dbg(f"disconnect {url} failed: {e}")
        self._clients.clear()

