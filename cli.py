# cli.py
import argparse
import asyncio
import json
import logging
import sys

from dotenv import load_dotenv

from honeypot_radar.core.analyze import check_honeypot
from honeypot_radar.logging_setup import setup_logging
from honeypot_radar.models import Report

logger = logging.getLogger("cli")

_LEVEL_BANNER = {
    "high": "❗ HIGH RISK",
    "medium": "⚠️  MEDIUM RISK",
    "low": "✅ LOW RISK",
    "info": "ℹ️  INFO",
}


def print_report(report: Report) -> None:
    if report.error:
        print(f"🚨 Address={report.token_address}")
        print(f"❌ {report.error}")
        print(_LEVEL_BANNER["high"])
        return

    info = report.token_info
    print(f"✅ Address={report.token_address}")
    print(f"🔹 Token: {info.name} ({info.symbol})  decimals={info.decimals}")
    print(f"🍯 Is Honeypot: {'🚨 YES' if report.is_honeypot else '✅ NO'}")

    liq = report.liquidity
    print(f"💧 Total Liquidity: ${liq.total_liquidity:,.0f}")
    for share in liq.venues:
        if share.has_liquidity:
            print(f"   {share.name}: ${share.liquidity:,.0f} ({share.percentage:.1f}%)  pair={share.pair_address}")

    tr = report.trading
    if tr.status != "not_simulated":
        print(f"🔁 Simulated on: {tr.dex}")
        print(f"🔹 Can Sell: {'✅ YES' if tr.can_sell else '❌ NO'}")
        print(f"💸 Tax Rate: {tr.tax_rate * 100:.1f}%  (slippage {tr.slippage * 100:.1f}%, impact {tr.price_impact * 100:.1f}%)")
        print(f"🔹 Trade Amount: {tr.trade_amount} BNB")
        if tr.error:
            print(f"⚠️  Simulation error: {tr.error}")

    details = report.details
    if details.risks:
        print("⚠️ Risk Factors:")
        for risk in details.risks:
            print(f"  - {risk}")
    print(f"🧮 Risk Score: {details.risk_score}")
    print(_LEVEL_BANNER.get(report.risk_level, f"❓ Unknown level: {report.risk_level}"))
    print(f"💡 {details.recommendation}")


def main(argv=None) -> int:
    load_dotenv()
    p = argparse.ArgumentParser(description="BSC Honeypot Radar CLI")
    p.add_argument("--address", required=True, help="BEP-20 token contract address")
    p.add_argument("--rpc", default=None, help="Custom BSC RPC URL (tried before the public endpoints)")
    p.add_argument("--json", action="store_true", help="Print JSON only")
    p.add_argument("--verbose", action="store_true", help="Debug logging")
    args = p.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)
    logger.debug(f"Args -> address={args.address} rpc={args.rpc} json={args.json}")

    try:
        report = asyncio.run(check_honeypot(args.address, args.rpc))
    except ValueError as e:
        # bad configuration (env overrides), not a token verdict
        print(f"❌ {e}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print_report(report)
    return 1 if report.is_honeypot else 0


if __name__ == "__main__":
    sys.exit(main())
