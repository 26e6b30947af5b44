# honeypot_radar/utils/contracts.py
# Minimal ABIs + typed reads for ERC20 tokens and V2 factory/pair/router contracts.
import asyncio
import logging
from decimal import Decimal
from typing import List, Optional

from honeypot_radar.models import ZERO_ADDRESS, PairSnapshot, TokenMetadata
from honeypot_radar.utils.addr import is_zero_address

logger = logging.getLogger(__name__)

ERC20_ABI = [
    {"name":"name","outputs":[{"type":"string","name":""}],"inputs":[],"stateMutability":"view","type":"function"},
    {"name":"symbol","outputs":[{"type":"string","name":""}],"inputs":[],"stateMutability":"view","type":"function"},
    {"name":"decimals","outputs":[{"type":"uint8","name":""}],"inputs":[],"stateMutability":"view","type":"function"},
    {"name":"totalSupply","outputs":[{"type":"uint256","name":""}],"inputs":[],"stateMutability":"view","type":"function"},
]

FACTORY_ABI = [{
    "name": "getPair",
    "outputs": [{"type": "address","name": "pair"}],
    "inputs": [{"type": "address","name": "tokenA"}, {"type": "address","name": "tokenB"}],
    "stateMutability": "view", "type": "function"
}]

PAIR_ABI = [
    {"name":"getReserves","outputs":[
        {"type":"uint112","name":"_reserve0"},
        {"type":"uint112","name":"_reserve1"},
        {"type":"uint32","name":"_blockTimestampLast"}],
     "inputs":[], "stateMutability":"view","type":"function"},
    {"name":"token0","outputs":[{"type":"address","name":""}],"inputs":[],"stateMutability":"view","type":"function"},
    {"name":"token1","outputs":[{"type":"address","name":""}],"inputs":[],"stateMutability":"view","type":"function"},
]

ROUTER_ABI = [{
    "name": "getAmountsOut",
    "type": "function",
    "stateMutability": "view",
    "inputs": [{"name": "amountIn", "type": "uint256"}, {"name": "path", "type": "address[]"}],
    "outputs": [{"name": "amounts", "type": "uint256[]"}],
}]


def _dbg(msg: str) -> None:
    logger.debug(f"[contracts] {msg}")


def to_wei_amount(amount: str, decimals: int = 18) -> int:
    """'0.003' -> 3000000000000000 for an 18-decimal asset."""
    return int(Decimal(amount) * (Decimal(10) ** decimals))


def from_wei_amount(raw: int, decimals: int = 18) -> float:
    return float(raw) / float(10 ** decimals)


async def get_token_info(transport, token: str) -> TokenMetadata:
    """Read name/symbol/decimals/totalSupply. Raises if the contract does not answer like an ERC20."""
    name, symbol, decimals, total_supply = await asyncio.gather(
        transport.call(token, ERC20_ABI, "name"),
        transport.call(token, ERC20_ABI, "symbol"),
        transport.call(token, ERC20_ABI, "decimals"),
        transport.call(token, ERC20_ABI, "totalSupply"),
    )
    return TokenMetadata(
        name=str(name),
        symbol=str(symbol),
        decimals=int(decimals),
        total_supply=str(int(total_supply)),
    )


async def get_pair_address(transport, factory: str, token_a: str, token_b: str) -> str:
    """Pair address from the factory; the zero address when missing or on any call failure."""
    try:
        pair = await transport.call(factory, FACTORY_ABI, "getPair", token_a, token_b)
    except Exception as e:
        _dbg(f"getPair failed factory={factory}: {e}")
        return ZERO_ADDRESS
    return pair or ZERO_ADDRESS


async def get_pair_reserves(transport, pair: str) -> Optional[PairSnapshot]:
    """Reserves + constituents of a pair; None for the zero address or on any call failure."""
    if is_zero_address(pair):
        return None
    try:
        r0, r1, _ = await transport.call(pair, PAIR_ABI, "getReserves")
        t0 = await transport.call(pair, PAIR_ABI, "token0")
        t1 = await transport.call(pair, PAIR_ABI, "token1")
    except Exception as e:
        _dbg(f"reserves read failed pair={pair}: {e}")
        return None
    return PairSnapshot(pair_address=pair, reserve0=int(r0), reserve1=int(r1), token0=t0, token1=t1)


async def get_amounts_out(transport, router: str, amount_in: int, path: List[str]) -> List[int]:
    """Router quote along path. Raises on revert / missing route."""
    amounts = await transport.call(router, ROUTER_ABI, "getAmountsOut", amount_in, path)
    return [int(a) for a in amounts]
