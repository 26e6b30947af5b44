# honeypot_radar/core/score.py
from __future__ import annotations
from typing import List

from honeypot_radar.config import RiskThresholds
from honeypot_radar.models import LiquiditySummary, RiskAssessment, TokenMetadata, TradeSimulationResult

RECOMMEND_HONEYPOT = "DO NOT TRADE - High risk of honeypot"
RECOMMEND_MEDIUM = "CAUTION - Medium risk, trade carefully"
RECOMMEND_LOW = "LOW RISK - Appears safe to trade"

def risk_tier(score: int) -> str:
    return "high" if score >= 50 else ("medium" if score >= 25 else "low")

def recommendation_for(level: str, is_honeypot: bool) -> str:
    if is_honeypot:
        return RECOMMEND_HONEYPOT
    return RECOMMEND_MEDIUM if level == "medium" else RECOMMEND_LOW

def score_token(
    token_info: TokenMetadata,
    liquidity: LiquiditySummary,
    trading: TradeSimulationResult,
    thresholds: RiskThresholds | None = None,
) -> RiskAssessment:
    """Additive rule table -> (score, level, honeypot verdict, reasons). Pure function of its inputs."""
    th = thresholds or RiskThresholds()
    risks: List[str] = []
    score = 0
    total = liquidity.total_liquidity

    # Sell path
    if not trading.can_sell:
        risks.append("Cannot sell token - likely honeypot")
        score += 50

    # Tax
    if trading.tax_rate > th.max_tax_rate:
        risks.append(f"High tax rate: {trading.tax_rate * 100:.1f}%")
        score += 30

    # Liquidity bands (dangerous wins over micro)
    if total < th.dangerous_liquidity:
        risks.append(f"Dangerous liquidity: ${total:.0f} - High rug risk")
        score += 60
    elif total < th.micro_liquidity:
        risks.append(f"Micro liquidity: ${total:.0f} - Very risky")
        score += 40

    # Price impact (lenient for meme coins)
    if trading.price_impact > 0.5:
        risks.append(f"Extreme price impact: {trading.price_impact * 100:.1f}%")
        score += 30
    elif trading.price_impact > 0.2:
        risks.append(f"High price impact: {trading.price_impact * 100:.1f}% - Normal for meme coins")
        score += 10

    # Probe size
    if float(trading.trade_amount) <= th.dust_trade_amount:
        risks.append("Only dust trades possible - Extremely dangerous")
        score += 50

    factors = liquidity.risk_factors
    if factors.low_total_liquidity:
        risks.append(f"Low liquidity: ${total:.0f}")
        score += 20

    if factors.no_pairs:
        risks.append("No trading pairs found")
        score += 40

    # Expected for new tokens, lightly penalized
    if factors.single_dex_dominance and total > 1_000:
        risks.append("Single DEX dominance - Normal for meme coins")
        score += 5

    level = risk_tier(score)
    is_honeypot = level == "high"
    return RiskAssessment(
        risk_score=score,
        risk_level=level,
        is_honeypot=is_honeypot,
        risks=tuple(risks),
        recommendation=recommendation_for(level, is_honeypot),
    )
