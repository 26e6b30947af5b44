"""
Detector configuration.

Builds immutable config values from the BSC registry in chains.py, with
optional environment overrides. The config is passed explicitly into every
component; nothing here is a process-wide singleton.
"""

import os
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from honeypot_radar.chains import BASES, BSC_RPC_URLS, CHAIN_ID, RISK_THRESHOLDS, VENUES


@dataclass(frozen=True)
class Venue:
    """A V2-style DEX: router for quotes, factory for pair lookup."""

    key: str
    name: str
    router: str
    factory: str


@dataclass(frozen=True)
class BaseAsset:
    """Reference asset used to price a pair in USD."""

    symbol: str
    address: str
    price_usd: float
    kind: str = "stable"  # 'wrapped' or 'stable'
    decimals: int = 18


@dataclass(frozen=True)
class RiskThresholds:
    min_liquidity: float = RISK_THRESHOLDS["min_liquidity"]
    max_tax_rate: float = RISK_THRESHOLDS["max_tax_rate"]
    max_single_dex_dominance: float = RISK_THRESHOLDS["max_single_dex_dominance"]
    micro_liquidity: float = RISK_THRESHOLDS["micro_liquidity"]
    dangerous_liquidity: float = RISK_THRESHOLDS["dangerous_liquidity"]
    dust_trade_amount: float = RISK_THRESHOLDS["dust_trade_amount"]


@dataclass(frozen=True)
class DetectorConfig:
    chain_id: int
    venues: Tuple[Venue, ...]
    base_assets: Tuple[BaseAsset, ...]
    rpc_urls: Tuple[str, ...]
    custom_rpc: bool = False  # rpc_urls[0] is user-supplied and always tried first
    rpc_timeout: float = 8.0
    rpc_max_retries: int = 2
    rpc_retry_delay: float = 0.5
    thresholds: RiskThresholds = field(default_factory=RiskThresholds)

    @property
    def wrapped_asset(self) -> BaseAsset:
        """The native wrapped coin (WBNB); trade simulation quotes against it."""
        for base in self.base_assets:
            if base.kind == "wrapped":
                return base
        raise ValueError("config has no wrapped base asset")

    def venue(self, key: str) -> Venue:
        for v in self.venues:
            if v.key == key:
                return v
        raise KeyError(f"Unknown venue: {key}")


def default_config() -> DetectorConfig:
    venues = tuple(
        Venue(key=key, name=cfg["name"], router=cfg["router"], factory=cfg["factory"])
        for key, cfg in VENUES.items()
    )
    bases = tuple(
        BaseAsset(
            symbol=b["symbol"],
            address=b["address"],
            price_usd=float(b["price_usd"]),
            kind=b["type"],
            decimals=int(b["decimals"]),
        )
        for b in BASES
    )
    return DetectorConfig(
        chain_id=CHAIN_ID,
        venues=venues,
        base_assets=bases,
        rpc_urls=tuple(BSC_RPC_URLS),
    )


def _env_number(name: str, cast, default):
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"Invalid value for {name}: {raw!r}")


_THRESHOLD_ENV = {
    "min_liquidity": "HONEYPOT_MIN_LIQUIDITY",
    "max_tax_rate": "HONEYPOT_MAX_TAX_RATE",
    "max_single_dex_dominance": "HONEYPOT_MAX_DEX_DOMINANCE",
    "micro_liquidity": "HONEYPOT_MICRO_LIQUIDITY",
    "dangerous_liquidity": "HONEYPOT_DANGEROUS_LIQUIDITY",
    "dust_trade_amount": "HONEYPOT_DUST_TRADE_AMOUNT",
}


def load_config(rpc_url: Optional[str] = None) -> DetectorConfig:
    """
    Default BSC config with environment overrides applied.

    rpc_url (or BSC_RPC_URL) is tried before the public dataseed endpoints.
    Raises ValueError on a malformed numeric override.
    """
    cfg = default_config()

    custom = (rpc_url or os.getenv("BSC_RPC_URL") or "").strip()
    if custom:
        cfg = replace(
            cfg,
            rpc_urls=(custom,) + tuple(u for u in cfg.rpc_urls if u != custom),
            custom_rpc=True,
        )

    bnb_price = _env_number("BNB_PRICE_USD", float, None)
    if bnb_price is not None:
        cfg = replace(cfg, base_assets=tuple(
            replace(b, price_usd=bnb_price) if b.kind == "wrapped" else b
            for b in cfg.base_assets
        ))

    cfg = replace(
        cfg,
        rpc_timeout=_env_number("RPC_TIMEOUT", float, cfg.rpc_timeout),
        rpc_max_retries=max(1, _env_number("RPC_MAX_RETRIES", int, cfg.rpc_max_retries)),
    )

    overrides = {}
    for attr, env_name in _THRESHOLD_ENV.items():
        val = _env_number(env_name, float, None)
        if val is not None:
            overrides[attr] = val
    if overrides:
        cfg = replace(cfg, thresholds=replace(cfg.thresholds, **overrides))

    return cfg


__all__ = ["Venue", "BaseAsset", "RiskThresholds", "DetectorConfig", "default_config", "load_config"]
