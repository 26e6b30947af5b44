import asyncio

import pytest

from honeypot_radar.config import default_config, load_config
from honeypot_radar.utils.rpc import RpcTransport

from conftest import TOKEN


class _Call:
    def __init__(self, outcome):
        self.outcome = outcome

    async def call(self):
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


class _Functions:
    def __init__(self, outcome):
        self.outcome = outcome

    def __getattr__(self, name):
        return lambda *args: _Call(self.outcome)


class _Contract:
    def __init__(self, outcome):
        self.functions = _Functions(outcome)


class _Eth:
    def __init__(self, outcome):
        self.outcome = outcome

    def contract(self, address, abi):
        return _Contract(self.outcome)


class _W3:
    def __init__(self, outcome):
        self.eth = _Eth(outcome)


def _patch_clients(transport, outcomes, used):
    def fake_w3(url):
        used.append(url)
        return _W3(outcomes[url])
    transport._w3 = fake_w3


URLS = ["https://a.example", "https://b.example", "https://c.example"]


class TestRpcTransport:

    def test_requires_urls(self):
        with pytest.raises(ValueError):
            RpcTransport([])

    def test_retries_on_next_url(self):
        transport = RpcTransport(URLS, max_retries=2, retry_delay=0, prefer_first=True)
        used = []
        _patch_clients(transport, {URLS[0]: ConnectionError("down"), URLS[1]: "Moon Dog"}, used)

        assert asyncio.run(transport.call(TOKEN, [], "name")) == "Moon Dog"
        assert used == URLS[:2]

    def test_last_error_is_raised(self):
        transport = RpcTransport(URLS, max_retries=3, retry_delay=0, prefer_first=True)
        used = []
        _patch_clients(transport, {u: TimeoutError(u) for u in URLS}, used)

        with pytest.raises(TimeoutError, match="c.example"):
            asyncio.run(transport.call(TOKEN, [], "name"))
        assert used == URLS

    def test_rotation_wraps_around(self, monkeypatch):
        transport = RpcTransport(URLS, max_retries=2, retry_delay=0)
        monkeypatch.setattr("honeypot_radar.utils.rpc.random.randrange", lambda n: 2)
        used = []
        _patch_clients(transport, {URLS[2]: OSError("reset"), URLS[0]: 18}, used)

        assert asyncio.run(transport.call(TOKEN, [], "decimals")) == 18
        assert used == [URLS[2], URLS[0]]

    def test_from_config_prefers_custom_rpc(self):
        assert RpcTransport.from_config(load_config("https://mine.example")).prefer_first is True
        assert RpcTransport.from_config(default_config()).prefer_first is False
