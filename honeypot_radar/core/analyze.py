# honeypot_radar/core/analyze.py
from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Optional

from honeypot_radar.config import DetectorConfig, load_config
from honeypot_radar.core.liquidity import LiquidityAggregator
from honeypot_radar.core.score import score_token
from honeypot_radar.core.simulate import TradeSimulator
from honeypot_radar.models import (
    Checks,
    LiquiditySummary,
    Report,
    RiskAssessment,
    RiskFactors,
    TokenMetadata,
    TradeSimulationResult,
)
from honeypot_radar.utils.addr import normalize_evm_address
from honeypot_radar.utils.contracts import get_token_info
from honeypot_radar.utils.rpc import RpcTransport

logger = logging.getLogger(__name__)

LP_NAME_MARKERS = ("LP", "Pancake")
LP_SYMBOL_MARKERS = ("LP",)
LP_RECOMMENDATION = "This is an LP (Liquidity Provider) token, not a trading token"
INVALID_TOKEN_ERROR = "Invalid token address or contract"


def _dbg(msg: str):
    logger.debug(f"[ANALYZE] {msg}")


def is_pool_token(info: TokenMetadata) -> bool:
    """Pool-share tokens (e.g. 'Pancake LPs' / 'Cake-LP') are not meant to be traded directly."""
    return any(m in info.name for m in LP_NAME_MARKERS) or any(m in info.symbol for m in LP_SYMBOL_MARKERS)


def pool_token_report(token: str, info: TokenMetadata) -> Report:
    return Report(
        token_address=token,
        token_info=info,
        is_honeypot=False,
        risk_level="info",
        checks=Checks(),
        # liquidity is not measured for pool tokens; flags stay consistent with a zero total
        liquidity=LiquiditySummary(risk_factors=RiskFactors(low_total_liquidity=True, no_pairs=True)),
        trading=TradeSimulationResult.not_simulated(),
        details=RiskAssessment(
            risk_score=0,
            risk_level="info",
            is_honeypot=False,
            risks=(),
            recommendation=LP_RECOMMENDATION,
        ),
    )


class HoneypotDetector:
    """
    Runs the assessment pipeline for one token or a batch:
    metadata -> liquidity across venues -> round-trip quote -> risk score.
    """

    def __init__(self, config: Optional[DetectorConfig] = None, transport=None):
        self.cfg = config or load_config()
        self.transport = transport or RpcTransport.from_config(self.cfg)
        self.liquidity = LiquidityAggregator(self.cfg, self.transport)
        self.simulator = TradeSimulator(self.cfg, self.transport)

    async def assess_token(self, token_address: str) -> Report:
        _dbg(f"assess_token start addr={token_address}")

        # 1) Normalize address
        try:
            token = normalize_evm_address(token_address)
        except ValueError as e:
            _dbg(f"Address normalize FAIL: {e}")
            return Report.failure(token_address, str(e))

        try:
            # 2) Metadata; the only fetch whose failure is fatal for the token
            try:
                info = await get_token_info(self.transport, token)
            except Exception as e:
                logger.info(f"[ANALYZE] metadata fetch failed for {token}: {e}")
                return Report.failure(token, INVALID_TOKEN_ERROR)
            _dbg(f"Token info OK: {info.name} ({info.symbol})")

            # 3) Pool tokens are informational
            if is_pool_token(info):
                _dbg(f"{info.symbol} looks like an LP token; skipping liquidity/trade checks")
                return pool_token_report(token, info)

            # 4) Liquidity
            liquidity = await self.liquidity.assess_liquidity(token)

            # 5) Round-trip quote on the deepest venue
            trading = await self.simulator.simulate_trade(token, liquidity)

            # 6) Score
            th = self.cfg.thresholds
            details = score_token(info, liquidity, trading, th)
        except Exception as e:
            logger.exception(f"[ANALYZE] assessment failed for {token}")
            return Report.failure(token, str(e))

        report = Report(
            token_address=token,
            token_info=info,
            is_honeypot=details.is_honeypot,
            risk_level=details.risk_level,
            checks=Checks(
                can_sell=trading.can_sell,
                has_high_tax=trading.tax_rate > th.max_tax_rate,
                has_liquidity=liquidity.total_liquidity > th.min_liquidity,
                single_dex_dominance=liquidity.risk_factors.single_dex_dominance,
            ),
            liquidity=liquidity,
            trading=trading,
            details=details,
        )
        logger.info(
            f"[ANALYZE] {token} ({info.symbol}) score={details.risk_score} "
            f"level={details.risk_level} honeypot={details.is_honeypot}"
        )
        return report

    async def assess_tokens(self, token_addresses: Iterable[str], concurrency: Optional[int] = None) -> List[Report]:
        """One report per input address, in input order; tokens never affect each other."""
        addresses = list(token_addresses)
        sem = asyncio.Semaphore(max(1, concurrency)) if concurrency else None

        async def work(addr: str) -> Report:
            if sem is None:
                return await self.assess_token(addr)
            async with sem:
                return await self.assess_token(addr)

        return list(await asyncio.gather(*(work(a) for a in addresses)))

    async def close(self):
        close = getattr(self.transport, "close", None)
        if close is not None:
            await close()


async def check_honeypot(token_address: str, rpc_url: Optional[str] = None) -> Report:
    """One-shot check with a fresh detector."""
    detector = HoneypotDetector(load_config(rpc_url))
    try:
        return await detector.assess_token(token_address)
    finally:
        await detector.close()


async def check_multiple_tokens(token_addresses: Iterable[str], rpc_url: Optional[str] = None,
                                concurrency: Optional[int] = None) -> List[Report]:
    detector = HoneypotDetector(load_config(rpc_url))
    try:
        return await detector.assess_tokens(token_addresses, concurrency=concurrency)
    finally:
        await detector.close()
