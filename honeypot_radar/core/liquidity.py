# honeypot_radar/core/liquidity.py
import asyncio
import logging
from dataclasses import replace
from typing import List, Optional

from honeypot_radar.config import BaseAsset, DetectorConfig, Venue
from honeypot_radar.models import (
    ZERO_ADDRESS,
    LiquiditySummary,
    PairSnapshot,
    RiskFactors,
    VenueLiquidity,
    VenueShare,
)
from honeypot_radar.utils.addr import same_address
from honeypot_radar.utils.contracts import from_wei_amount, get_pair_address, get_pair_reserves

logger = logging.getLogger(__name__)


def _dbg(msg: str):
    logger.debug(f"[liquidity] {msg}")


async def resolve_pair(transport, venue: Venue, token: str, base: BaseAsset) -> Optional[PairSnapshot]:
    """token/base pair on one venue, with matched_base set when a side is the base."""
    pair = await get_pair_address(transport, venue.factory, token, base.address)
    snapshot = await get_pair_reserves(transport, pair)
    if snapshot is None:
        return None
    if same_address(snapshot.token0, base.address) or same_address(snapshot.token1, base.address):
        snapshot = replace(snapshot, matched_base=base.address)
    return snapshot


def calculate_liquidity_usd(snapshot: Optional[PairSnapshot], base: BaseAsset) -> float:
    """Base-side reserve in USD, doubled for the token side of the pool."""
    if snapshot is None:
        return 0.0
    base_reserve = snapshot.base_reserve()
    if base_reserve is None or not same_address(snapshot.matched_base, base.address):
        return 0.0
    return from_wei_amount(base_reserve, base.decimals) * base.price_usd * 2


def summarize(results: List[VenueLiquidity], cfg: DetectorConfig) -> LiquiditySummary:
    """Totals, per-venue shares and risk flags; venue order is kept as given."""
    total = sum(r.liquidity for r in results)
    max_liquidity = max((r.liquidity for r in results), default=0.0)

    shares = tuple(
        VenueShare(
            venue=r.venue,
            name=r.name,
            liquidity=r.liquidity,
            percentage=(r.liquidity / total) * 100 if total > 0 else 0.0,
            has_liquidity=r.has_liquidity,
            pair_address=r.pair_address,
        )
        for r in results
    )

    th = cfg.thresholds
    factors = RiskFactors(
        single_dex_dominance=total > 0 and (max_liquidity / total) > th.max_single_dex_dominance,
        low_total_liquidity=total < th.min_liquidity,
        no_pairs=total == 0,
    )
    return LiquiditySummary(total_liquidity=total, venues=shares, risk_factors=factors)


class LiquidityAggregator:
    """Liquidity of a token across every configured venue and base asset."""

    def __init__(self, cfg: DetectorConfig, transport):
        self.cfg = cfg
        self.transport = transport

    async def venue_liquidity(self, venue: Venue, token: str) -> VenueLiquidity:
        """Deepest base pair on one venue. Never raises: failures read as zero liquidity."""
        best_liquidity = 0.0
        best_pair = ZERO_ADDRESS
        try:
            for base in self.cfg.base_assets:
                if same_address(base.address, token):
                    _dbg(f"{venue.name}: skip base={base.symbol} because base==token")
                    continue
                snapshot = await resolve_pair(self.transport, venue, token, base)
                liquidity = calculate_liquidity_usd(snapshot, base)
                if liquidity > best_liquidity:
                    best_liquidity = liquidity
                    best_pair = snapshot.pair_address
                _dbg(f"{venue.name} - {base.symbol}: ${liquidity:,.0f}")
        except Exception as e:
            logger.warning(f"[liquidity] {venue.name} failed for {token}: {e}")
            return VenueLiquidity(venue=venue.key, name=venue.name, error=str(e))

        return VenueLiquidity(venue=venue.key, name=venue.name, liquidity=best_liquidity, pair_address=best_pair)

    async def assess_liquidity(self, token: str) -> LiquiditySummary:
        # gather keeps input order, so the summary follows registry order
        results = await asyncio.gather(*(self.venue_liquidity(v, token) for v in self.cfg.venues))
        summary = summarize(list(results), self.cfg)
        _dbg(
            f"token={token} total=${summary.total_liquidity:,.0f} "
            f"factors={summary.risk_factors}"
        )
        return summary
