"""
Shared fixtures: an in-memory stand-in for RpcTransport that answers the
handful of ERC20 / factory / pair / router calls the detector makes.
"""

import pytest
from web3 import Web3

from honeypot_radar.config import default_config
from honeypot_radar.models import ZERO_ADDRESS

TOKEN = Web3.to_checksum_address("0x" + "ab" * 20)
OTHER_TOKEN = Web3.to_checksum_address("0x" + "cd" * 20)

WEI = 10 ** 18


class Reverted(Exception):
    pass


class FakeTransport:
    def __init__(self):
        self.tokens = {}
        self.pairs = {}
        self.reserves = {}
        self.routers = {}
        self.failing = set()
        self.calls = []
        self._next_pair = 1

    # --- setup helpers

    def add_token(self, address, name="Test Token", symbol="TEST", decimals=18, total_supply=10 ** 27):
        self.tokens[address.lower()] = {
            "name": name,
            "symbol": symbol,
            "decimals": decimals,
            "totalSupply": total_supply,
        }

    def add_pair(self, venue, token, base, base_reserve, token_reserve=10 ** 24):
        pair = Web3.to_checksum_address("0x" + f"{self._next_pair:040x}")
        self._next_pair += 1
        key = (venue.factory.lower(), frozenset((token.lower(), base.address.lower())))
        self.pairs[key] = pair
        # V2 pairs order constituents by address
        if token.lower() < base.address.lower():
            self.reserves[pair.lower()] = (token_reserve, base_reserve, token, base.address)
        else:
            self.reserves[pair.lower()] = (base_reserve, token_reserve, base.address, token)
        return pair

    def set_router(self, venue, quote):
        """quote(amount_in, path) -> list of amounts"""
        self.routers[venue.router.lower()] = quote

    def fail(self, address):
        self.failing.add(address.lower())

    def count(self, fn_name):
        return sum(1 for _, name, _ in self.calls if name == fn_name)

    # --- transport interface

    async def call(self, address, abi, fn_name, *args):
        addr = address.lower()
        self.calls.append((addr, fn_name, args))
        if addr in self.failing:
            raise ConnectionError(f"rpc unavailable for {address}")

        if fn_name in ("name", "symbol", "decimals", "totalSupply"):
            token = self.tokens.get(addr)
            if token is None:
                raise Reverted("execution reverted")
            return token[fn_name]
        if fn_name == "getPair":
            return self.pairs.get((addr, frozenset((args[0].lower(), args[1].lower()))), ZERO_ADDRESS)
        if fn_name == "getReserves":
            r0, r1, _, _ = self.reserves[addr]
            return (r0, r1, 0)
        if fn_name == "token0":
            return self.reserves[addr][2]
        if fn_name == "token1":
            return self.reserves[addr][3]
        if fn_name == "getAmountsOut":
            quote = self.routers.get(addr)
            if quote is None:
                raise Reverted("execution reverted: PancakeLibrary: INSUFFICIENT_LIQUIDITY")
            return quote(args[0], list(args[1]))
        raise AssertionError(f"unexpected call {fn_name}")


def taxed_quote(wrapped_address, tax=0.0, tokens_per_bnb=1000):
    """Router quote that loses `tax` of the value on the sell leg."""
    def quote(amount_in, path):
        if path[0].lower() == wrapped_address.lower():
            return [amount_in, amount_in * tokens_per_bnb]
        back = amount_in // tokens_per_bnb
        return [amount_in, int(back * (1 - tax))]
    return quote


@pytest.fixture
def cfg():
    return default_config()


@pytest.fixture
def transport():
    fake = FakeTransport()
    fake.add_token(TOKEN)
    return fake


@pytest.fixture
def wbnb(cfg):
    return cfg.wrapped_asset


@pytest.fixture
def usdt(cfg):
    return next(b for b in cfg.base_assets if b.symbol == "USDT")
