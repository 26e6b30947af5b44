import asyncio
import json

import pytest

from honeypot_radar.core.analyze import (
    INVALID_TOKEN_ERROR,
    LP_RECOMMENDATION,
    HoneypotDetector,
    is_pool_token,
)
from honeypot_radar.models import SIM_NO_LIQUIDITY, SIM_NOT_SIMULATED, SIM_OK, TokenMetadata

from conftest import OTHER_TOKEN, TOKEN, WEI, taxed_quote

REPORT_KEYS = {"tokenAddress", "tokenInfo", "isHoneypot", "riskLevel", "checks",
               "liquidity", "trading", "details", "error"}


@pytest.fixture
def detector(cfg, transport):
    return HoneypotDetector(cfg, transport)


class TestPoolTokenDetection:

    @pytest.mark.parametrize("name,symbol,expected", [
        ("Pancake LPs", "Cake-LP", True),
        ("Some LP Share", "SLS", True),
        ("Wrapped Thing", "WT-LP", True),
        ("PancakeSwap Token", "CAKE", True),
        ("Moon Dog", "MDOG", False),
    ])
    def test_markers(self, name, symbol, expected):
        assert is_pool_token(TokenMetadata(name, symbol, 18, "0")) is expected


class TestAssessToken:

    def test_healthy_token(self, cfg, transport, detector, wbnb, usdt):
        venue = cfg.venues[0]
        transport.add_pair(venue, TOKEN, usdt, base_reserve=5_000 * WEI)  # $10,000
        transport.set_router(venue, taxed_quote(wbnb.address, tax=0.02))

        report = asyncio.run(detector.assess_token(TOKEN.lower()))

        assert report.token_address == TOKEN
        assert report.error is None
        assert report.token_info.symbol == "TEST"
        assert report.liquidity.total_liquidity == pytest.approx(10_000)
        assert report.trading.status == SIM_OK
        assert report.trading.dex == venue.name
        assert report.risk_level == "low"
        assert report.is_honeypot is False
        assert report.details.risk_score == 5
        assert report.checks.can_sell is True
        assert report.checks.has_liquidity is True
        assert report.checks.has_high_tax is False
        assert report.checks.single_dex_dominance is True

    def test_no_liquidity_anywhere(self, transport, detector):
        report = asyncio.run(detector.assess_token(TOKEN))

        assert report.liquidity.total_liquidity == 0
        assert report.liquidity.risk_factors.no_pairs is True
        assert report.trading.status == SIM_NO_LIQUIDITY
        assert report.risk_level == "high"
        assert report.is_honeypot is True
        assert transport.count("getAmountsOut") == 0

    def test_pool_token_short_circuits(self, transport, detector):
        transport.add_token(TOKEN, name="Pancake LPs", symbol="Cake-LP")

        report = asyncio.run(detector.assess_token(TOKEN))

        assert report.risk_level == "info"
        assert report.is_honeypot is False
        assert report.trading.status == SIM_NOT_SIMULATED
        assert report.details.recommendation == LP_RECOMMENDATION
        assert report.liquidity.total_liquidity == 0
        assert report.liquidity.risk_factors.no_pairs is True
        assert report.liquidity.risk_factors.low_total_liquidity is True
        assert transport.count("getPair") == 0
        assert transport.count("getAmountsOut") == 0

    def test_sell_blocked_token(self, cfg, transport, detector, wbnb):
        venue = cfg.venues[2]
        transport.add_pair(venue, TOKEN, wbnb, base_reserve=50 * WEI)  # $30,000
        transport.set_router(venue, taxed_quote(wbnb.address, tax=1.0))

        report = asyncio.run(detector.assess_token(TOKEN))

        assert report.trading.can_sell is False
        assert report.checks.can_sell is False
        assert report.checks.has_high_tax is True
        assert report.risk_level == "high"
        assert report.is_honeypot is True

    def test_wrapped_asset_itself(self, cfg, transport, detector, wbnb, usdt):
        venue = cfg.venues[0]
        transport.add_token(wbnb.address, name="Wrapped BNB", symbol="WBNB")
        transport.add_pair(venue, wbnb.address, usdt, base_reserve=500_000 * WEI)  # $1,000,000
        transport.set_router(venue, taxed_quote(usdt.address))

        report = asyncio.run(detector.assess_token(wbnb.address))

        assert report.trading.status == SIM_OK
        assert report.trading.can_sell is True
        assert report.is_honeypot is False
        assert report.risk_level == "low"

    def test_invalid_address(self, transport, detector):
        report = asyncio.run(detector.assess_token("0x1234...abcd"))

        assert report.is_honeypot is True
        assert report.risk_level == "high"
        assert "Ellipses" in report.error
        assert report.token_info is None
        assert report.liquidity is None
        assert transport.calls == []

    def test_not_an_erc20(self, transport, detector):
        report = asyncio.run(detector.assess_token(OTHER_TOKEN))

        assert report.is_honeypot is True
        assert report.risk_level == "high"
        assert report.error == INVALID_TOKEN_ERROR
        assert report.trading is None
        assert transport.count("getPair") == 0

    def test_report_serializes_with_every_key(self, transport, detector):
        ok = asyncio.run(detector.assess_token(TOKEN)).to_dict()
        failed = asyncio.run(detector.assess_token(OTHER_TOKEN)).to_dict()

        assert set(ok) == REPORT_KEYS
        assert set(failed) == REPORT_KEYS
        assert set(ok["liquidity"]) == {"totalLiquidity", "dexDistribution", "riskFactors"}
        assert set(ok["liquidity"]["riskFactors"]) == {"singleDexDominance", "lowTotalLiquidity", "noPairs"}
        assert ok["details"]["totalRiskFactors"] == len(ok["details"]["risks"])
        assert failed["tokenInfo"] is None
        json.dumps(ok)
        json.dumps(failed)


class TestAssessTokens:

    def test_order_and_isolation(self, cfg, transport, detector, usdt, wbnb):
        venue = cfg.venues[0]
        transport.add_pair(venue, TOKEN, usdt, base_reserve=5_000 * WEI)
        transport.set_router(venue, taxed_quote(wbnb.address))
        addresses = [TOKEN, "not-an-address", OTHER_TOKEN, TOKEN]

        reports = asyncio.run(detector.assess_tokens(addresses, concurrency=2))

        assert len(reports) == 4
        assert [r.error is None for r in reports] == [True, False, False, True]
        assert reports[0].risk_level == "low"
        assert reports[1].token_address == "not-an-address"
        assert reports[2].error == INVALID_TOKEN_ERROR
        assert reports[3] == reports[0]

    def test_empty_batch(self, detector):
        assert asyncio.run(detector.assess_tokens([])) == []
