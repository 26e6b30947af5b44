# honeypot_radar/core/simulate.py
import logging
from decimal import Decimal

from honeypot_radar.config import BaseAsset, DetectorConfig
from honeypot_radar.models import (
    SIM_NO_LIQUIDITY,
    SIM_OK,
    SIM_QUOTE_FAILED,
    LiquiditySummary,
    TradeSimulationResult,
)
from honeypot_radar.utils.addr import same_address
from honeypot_radar.utils.contracts import from_wei_amount, get_amounts_out, to_wei_amount

logger = logging.getLogger(__name__)

# Share of price impact subtracted from slippage before calling the rest "tax".
# Calibration constant; changing it moves tokens between risk levels.
TAX_IMPACT_CORRECTION = 0.01

# (upper liquidity bound in USD, probe size in native units); last band is open-ended
TRADE_SIZE_LADDER = [
    (50, "0.00003"),
    (200, "0.0001"),
    (1_000, "0.0003"),
    (5_000, "0.001"),
    (20_000, "0.003"),
]
MAX_TRADE_SIZE = "0.01"


def _dbg(msg: str):
    logger.debug(f"[simulate] {msg}")


def trade_amount_for_liquidity(liquidity_usd: float) -> str:
    """Probe size for a venue: thinner pools get smaller probes so we do not move the price ourselves."""
    for upper, amount in TRADE_SIZE_LADDER:
        if liquidity_usd < upper:
            return amount
    return MAX_TRADE_SIZE


def compute_trade_metrics(probe: float, sell_out: float, reference_price: float, liquidity_usd: float):
    """Return (slippage, price_impact, tax_rate) for a round trip of `probe` native units."""
    slippage = max(0.0, (probe - sell_out) / probe)
    price_impact = (probe * reference_price) / liquidity_usd if liquidity_usd > 0 else 1.0
    if slippage > 0.5:
        tax_rate = slippage
    else:
        tax_rate = max(0.0, slippage - price_impact * TAX_IMPACT_CORRECTION)
    return slippage, price_impact, tax_rate


class TradeSimulator:
    """Read-only buy-then-sell quote on the deepest venue."""

    def __init__(self, cfg: DetectorConfig, transport):
        self.cfg = cfg
        self.transport = transport

    def quote_asset_for(self, token: str) -> BaseAsset:
        """WBNB, unless the token is WBNB itself; then the first other base (a stable)."""
        wrapped = self.cfg.wrapped_asset
        if not same_address(wrapped.address, token):
            return wrapped
        for base in self.cfg.base_assets:
            if not same_address(base.address, token):
                return base
        return wrapped

    def probe_in_quote_units(self, trade_amount: str, quote: BaseAsset) -> Decimal:
        """Probe sizes are native units; a stable quote asset gets the same USD value."""
        wrapped = self.cfg.wrapped_asset
        if quote.address == wrapped.address:
            return Decimal(trade_amount)
        return Decimal(trade_amount) * Decimal(str(wrapped.price_usd)) / Decimal(str(quote.price_usd))

    async def simulate_trade(self, token: str, summary: LiquiditySummary) -> TradeSimulationResult:
        best = summary.best_venue()
        if best is None:
            _dbg(f"token={token} has no liquidity on any venue")
            return TradeSimulationResult.sentinel(SIM_NO_LIQUIDITY, "No Liquidity", 0.0, "No liquidity found")

        venue = self.cfg.venue(best.venue)
        quote = self.quote_asset_for(token)
        liquidity_usd = best.liquidity
        trade_amount = trade_amount_for_liquidity(liquidity_usd)
        probe = self.probe_in_quote_units(trade_amount, quote)

        try:
            amount_in = to_wei_amount(str(probe), quote.decimals)

            # sell quote needs the buy output; keep these sequential
            buy_amounts = await get_amounts_out(self.transport, venue.router, amount_in, [quote.address, token])
            buy_out = buy_amounts[-1]
            sell_amounts = await get_amounts_out(self.transport, venue.router, buy_out, [token, quote.address])
            sell_out = sell_amounts[-1]
        except Exception as e:
            logger.warning(f"[simulate] quote failed on {venue.name} for {token}: {e}")
            return TradeSimulationResult.sentinel(SIM_QUOTE_FAILED, venue.name, liquidity_usd, str(e))

        slippage, price_impact, tax_rate = compute_trade_metrics(
            float(probe),
            from_wei_amount(sell_out, quote.decimals),
            quote.price_usd,
            liquidity_usd,
        )
        _dbg(
            f"{venue.name} token={token} probe={probe} {quote.symbol} buy_out={buy_out} sell_out={sell_out} "
            f"slippage={slippage:.4f} impact={price_impact:.4f} tax={tax_rate:.4f}"
        )
        return TradeSimulationResult(
            status=SIM_OK,
            dex=venue.name,
            can_buy=buy_out > 0,
            can_sell=sell_out > 0,
            slippage=slippage,
            tax_rate=tax_rate,
            trade_amount=trade_amount,
            price_impact=price_impact,
            liquidity_used=liquidity_usd,
        )
