# batch_cli.py
import argparse
import asyncio
import csv
import json
import logging
import sys
from pathlib import Path
from typing import List

from dotenv import load_dotenv

from honeypot_radar.core.analyze import check_multiple_tokens
from honeypot_radar.logging_setup import setup_logging
from honeypot_radar.models import Report

logger = logging.getLogger("batch_cli")

FIELDNAMES = ["address", "name", "symbol", "is_honeypot", "risk_level", "risk_score",
              "total_liquidity", "best_dex", "can_sell", "tax_rate_pct", "price_impact_pct",
              "trade_amount", "error"]


def load_addresses(path: str) -> List[str]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    addrs = []
    with p.open() as f:
        for line in f:
            s = line.strip()
            if not s or s.startswith("#"):
                continue
            addrs.append(s)
    logger.info(f"[BATCH] Loaded {len(addrs)} addresses from {path}")
    return addrs


def flatten_report(report: Report) -> dict:
    row = {k: "" for k in FIELDNAMES}
    row.update({
        "address": report.token_address,
        "is_honeypot": report.is_honeypot,
        "risk_level": report.risk_level,
        "error": report.error or "",
    })
    if report.token_info:
        row["name"] = report.token_info.name
        row["symbol"] = report.token_info.symbol
    if report.details:
        row["risk_score"] = report.details.risk_score
    if report.liquidity:
        row["total_liquidity"] = f"{report.liquidity.total_liquidity:.0f}"
    if report.trading:
        tr = report.trading
        row["best_dex"] = tr.dex
        row["can_sell"] = tr.can_sell
        row["tax_rate_pct"] = f"{tr.tax_rate * 100:.2f}"
        row["price_impact_pct"] = f"{tr.price_impact * 100:.2f}"
        row["trade_amount"] = tr.trade_amount
        if tr.error and not row["error"]:
            row["error"] = tr.error
    return row


def main(argv=None) -> int:
    load_dotenv()
    ap = argparse.ArgumentParser(description="BSC Honeypot Radar - Batch Scanner")
    ap.add_argument("--infile", required=True, help="Path to text file with one address per line")
    ap.add_argument("--out-csv", default="batch_scan.csv", help="CSV output path")
    ap.add_argument("--out-json", default="batch_scan.json", help="JSON output path")
    ap.add_argument("--concurrency", type=int, default=4, help="Tokens assessed in parallel")
    ap.add_argument("--rpc", default=None, help="Custom BSC RPC URL")
    args = ap.parse_args(argv)

    setup_logging()

    try:
        addresses = load_addresses(args.infile)
    except FileNotFoundError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    logger.info(f"[BATCH] Scanning {len(addresses)} addresses with concurrency={args.concurrency}")
    reports = asyncio.run(check_multiple_tokens(addresses, args.rpc, concurrency=args.concurrency))

    with open(args.out_csv, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=FIELDNAMES)
        w.writeheader()
        w.writerows(flatten_report(r) for r in reports)
    logger.info(f"[BATCH] Wrote CSV -> {args.out_csv}")

    with open(args.out_json, "w") as f:
        json.dump([r.to_dict() for r in reports], f, indent=2)
    logger.info(f"[BATCH] Wrote JSON -> {args.out_json}")

    flagged = sum(1 for r in reports if r.is_honeypot)
    print(f"✅ Done. {len(reports)} scanned, {flagged} flagged. CSV → {args.out_csv}  JSON → {args.out_json}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
