"""
Result structures for a honeypot assessment.

Every stage returns one of these frozen values; to_dict() gives the wire
shape (camelCase keys, every key always present).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# TradeSimulationResult.status
SIM_OK = "ok"
SIM_NO_LIQUIDITY = "no_liquidity"
SIM_QUOTE_FAILED = "quote_failed"
SIM_NOT_SIMULATED = "not_simulated"


@dataclass(frozen=True)
class TokenMetadata:
    name: str
    symbol: str
    decimals: int
    total_supply: str  # integer as decimal string, no precision loss

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "symbol": self.symbol,
            "decimals": self.decimals,
            "totalSupply": self.total_supply,
        }


@dataclass(frozen=True)
class PairSnapshot:
    pair_address: str
    reserve0: int
    reserve1: int
    token0: str
    token1: str
    matched_base: Optional[str] = None

    def base_reserve(self) -> Optional[int]:
        """Reserve on the matched base side, or None when neither side matched."""
        if not self.matched_base:
            return None
        if self.token0.lower() == self.matched_base.lower():
            return self.reserve0
        return self.reserve1


@dataclass(frozen=True)
class VenueLiquidity:
    venue: str
    name: str
    liquidity: float = 0.0
    pair_address: str = ZERO_ADDRESS
    error: Optional[str] = None

    @property
    def has_liquidity(self) -> bool:
        return self.liquidity > 0


@dataclass(frozen=True)
class VenueShare:
    venue: str
    name: str
    liquidity: float
    percentage: float
    has_liquidity: bool
    pair_address: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "liquidity": self.liquidity,
            "percentage": self.percentage,
            "hasLiquidity": self.has_liquidity,
            "pairAddress": self.pair_address,
        }


@dataclass(frozen=True)
class RiskFactors:
    single_dex_dominance: bool = False
    low_total_liquidity: bool = False
    no_pairs: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "singleDexDominance": self.single_dex_dominance,
            "lowTotalLiquidity": self.low_total_liquidity,
            "noPairs": self.no_pairs,
        }


@dataclass(frozen=True)
class LiquiditySummary:
    total_liquidity: float = 0.0
    venues: Tuple[VenueShare, ...] = ()  # registry order
    risk_factors: RiskFactors = field(default_factory=RiskFactors)

    @property
    def distribution(self) -> Dict[str, VenueShare]:
        return {share.venue: share for share in self.venues}

    def best_venue(self) -> Optional[VenueShare]:
        """Venue with the single highest liquidity; first wins on ties; None if all are 0."""
        best = None
        for share in self.venues:
            if share.liquidity > (best.liquidity if best else 0):
                best = share
        return best

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalLiquidity": self.total_liquidity,
            "dexDistribution": {s.venue: s.to_dict() for s in self.venues},
            "riskFactors": self.risk_factors.to_dict(),
        }


@dataclass(frozen=True)
class TradeSimulationResult:
    status: str
    dex: str
    can_buy: bool
    can_sell: bool
    slippage: float
    tax_rate: float
    trade_amount: str  # native units, e.g. "0.003"
    price_impact: float
    liquidity_used: float
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.status in (SIM_NO_LIQUIDITY, SIM_QUOTE_FAILED)

    @classmethod
    def sentinel(cls, status: str, dex: str, liquidity_used: float, error: str) -> "TradeSimulationResult":
        """Maximal-risk result: scoring reads it like any other simulation."""
        return cls(
            status=status,
            dex=dex,
            can_buy=False,
            can_sell=False,
            slippage=1.0,
            tax_rate=1.0,
            trade_amount="0",
            price_impact=1.0,
            liquidity_used=liquidity_used,
            error=error,
        )

    @classmethod
    def not_simulated(cls) -> "TradeSimulationResult":
        return cls(
            status=SIM_NOT_SIMULATED,
            dex="",
            can_buy=False,
            can_sell=False,
            slippage=0.0,
            tax_rate=0.0,
            trade_amount="0",
            price_impact=0.0,
            liquidity_used=0.0,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "dex": self.dex,
            "canBuy": self.can_buy,
            "canSell": self.can_sell,
            "slippage": self.slippage,
            "taxRate": self.tax_rate,
            "tradeAmount": self.trade_amount,
            "priceImpact": self.price_impact,
            "liquidityUsed": self.liquidity_used,
            "error": self.error,
        }


@dataclass(frozen=True)
class RiskAssessment:
    risk_score: int
    risk_level: str
    is_honeypot: bool
    risks: Tuple[str, ...]
    recommendation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "risks": list(self.risks),
            "totalRiskFactors": len(self.risks),
            "riskScore": self.risk_score,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class Checks:
    can_sell: bool = False
    has_high_tax: bool = False
    has_liquidity: bool = False
    single_dex_dominance: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "canSell": self.can_sell,
            "hasHighTax": self.has_high_tax,
            "hasLiquidity": self.has_liquidity,
            "singleDexDominance": self.single_dex_dominance,
        }


@dataclass(frozen=True)
class Report:
    token_address: str
    is_honeypot: bool
    risk_level: str  # low | medium | high | info
    token_info: Optional[TokenMetadata] = None
    checks: Optional[Checks] = None
    liquidity: Optional[LiquiditySummary] = None
    trading: Optional[TradeSimulationResult] = None
    details: Optional[RiskAssessment] = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, token_address: str, error: str) -> "Report":
        return cls(token_address=token_address, is_honeypot=True, risk_level="high", error=error)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tokenAddress": self.token_address,
            "tokenInfo": self.token_info.to_dict() if self.token_info else None,
            "isHoneypot": self.is_honeypot,
            "riskLevel": self.risk_level,
            "checks": self.checks.to_dict() if self.checks else None,
            "liquidity": self.liquidity.to_dict() if self.liquidity else None,
            "trading": self.trading.to_dict() if self.trading else None,
            "details": self.details.to_dict() if self.details else None,
            "error": self.error,
        }
