from __future__ import annotations

import argparse
import json
import logging
from datetime import date, timedelta
from pathlib import Path
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)

_SECTORS: dict[str, list[str]] = {
    "Financials": ["Banks", "Insurance", "Investment Services"],
    "Energy": ["Oil, Gas & Coal", "Alternative Energy"],
    "Basic Materials": ["Chemicals", "Metals & Minerals", "Forestry & Paper"],
    "Consumer Non-Cyclicals": ["Food & Beverage", "Tobacco", "Personal Care"],
    "Infrastructures": ["Telecommunication", "Utilities", "Transportation Infrastructure"],
    "Properties & Real Estate": ["Real Estate Developers"],
    "Technology": ["Software & IT Services", "Technology Hardware"],
    "Healthcare": ["Pharmaceuticals", "Healthcare Providers"],
}
_TAGS = ["LQ45", "IDX30", "KOMPAS100", "SMC", ""]
_BOARDS = ["Main", "Development", "Acceleration"]
_INDEXES = ["COMPOSITE", "LQ45", "IDX30", "IDX80", "KOMPAS100", "JII", "SRI-KEHATI"]
_TRENDS = ["ACCUMULATION", "DISTRIBUTION", "NEUTRAL"]
_BROKERS = [("CC", "Mandiri Sekuritas"), ("DX", "Bahana Sekuritas"), ("NI", "BNI Sekuritas"), ("OD", "BRI Danareksa")]


def _default_repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Write a synthetic IDX screener snapshot file.")
    parser.add_argument("--stocks", type=int, default=900, help="Stocks per snapshot date.")
    parser.add_argument("--days", type=int, default=2, help="Number of consecutive snapshot dates.")
    parser.add_argument("--end-date", type=str, default=date.today().isoformat(), help="Latest snapshot date.")
    parser.add_argument("--seed", type=int, default=42, help="Random seed.")
    parser.add_argument(
        "--output",
        type=str,
        default=str(_default_repo_root() / "data" / "snapshot.json"),
        help="Output path (.json, .jsonl, .csv or .parquet).",
    )
    return parser.parse_args()


def _maybe(rng: np.random.Generator, value: float, missing_rate: float = 0.05) -> float | None:
    return None if rng.random() < missing_rate else round(float(value), 4)


def _code(i: int) -> str:
    letters = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    return "".join(letters[(i // 26**k) % 26] for k in (3, 2, 1, 0))


def build_rows(n_stocks: int, snapshot_date: str, rng: np.random.Generator) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    sectors = list(_SECTORS)
    for i in range(n_stocks):
        sector = sectors[int(rng.integers(len(sectors)))]
        sub_sector = _SECTORS[sector][int(rng.integers(len(_SECTORS[sector])))]
        score = int(np.clip(rng.normal(55, 20), 0, 100))
        action = "BUY" if score >= 70 else "HOLD" if score >= 45 else "AVOID"
        previous = float(np.round(np.exp(rng.normal(6.5, 1.2)) / 5) * 5 or 50)
        price = max(1.0, previous + float(rng.integers(-10, 11)) * 5)
        top3 = float(np.clip(rng.beta(5, 2), 0, 1))
        holders = [
            {"name": f"PT Holder {i}-{k}", "percentage": round(top3 / (k + 2), 4), "value": "", "badges": [], "id": f"{i}-{k}"}
            for k in range(int(rng.integers(3, 9)))
        ]
        brokers = [
            {"broker_id": bid, "broker_name": name, "type": "underwriter"}
            for bid, name in _BROKERS[: int(rng.integers(0, 3))]
        ]
        rows.append(
            {
                "stock_code": _code(i),
                "name": f"PT Sample Emiten {i} Tbk",
                "date": snapshot_date,
                "sector": sector,
                "sub_sector": sub_sector,
                "tag": _TAGS[int(rng.integers(len(_TAGS)))],
                "group": f"Group {int(rng.integers(1, 40))}" if rng.random() < 0.4 else "",
                "indexes": sorted({_INDEXES[int(j)] for j in rng.integers(0, len(_INDEXES), size=3)}),
                "action": action,
                "score": score,
                "price": price,
                "previous": previous,
                "ipo_date": (date(1990, 1, 1) + timedelta(days=int(rng.integers(0, 12000)))).isoformat(),
                "ipo_price": float(rng.integers(1, 40)) * 25,
                "ipo_board": _BOARDS[int(rng.integers(len(_BOARDS)))],
                "ipo_underwriters": brokers,
                "market_cap": _maybe(rng, np.exp(rng.normal(28, 2))),
                "free_float": _maybe(rng, rng.uniform(0.05, 0.6)),
                "pe_ttm": _maybe(rng, rng.normal(15, 10), 0.1),
                "pbv": _maybe(rng, abs(rng.normal(1.8, 1.5))),
                "fair_pbv": _maybe(rng, abs(rng.normal(1.8, 0.8)), 0.15),
                "ps": _maybe(rng, abs(rng.normal(2, 1.5))),
                "ev_ebitda": _maybe(rng, rng.normal(9, 5)),
                "earnings_yield": _maybe(rng, rng.normal(0.07, 0.05)),
                "roe": _maybe(rng, rng.normal(0.1, 0.12)),
                "roa": _maybe(rng, rng.normal(0.05, 0.06)),
                "roic": _maybe(rng, rng.normal(0.08, 0.08)),
                "net_margin": _maybe(rng, rng.normal(0.08, 0.12)),
                "operating_margin": _maybe(rng, rng.normal(0.12, 0.12)),
                "fcf_ttm": _maybe(rng, rng.normal(2e11, 8e11)),
                "fcf_per_share": _maybe(rng, rng.normal(20, 60)),
                "operating_cashflow": _maybe(rng, rng.normal(4e11, 9e11)),
                "revenue_yoy": _maybe(rng, rng.normal(0.06, 0.2)),
                "net_income_yoy": _maybe(rng, rng.normal(0.04, 0.4)),
                "debt_to_equity": _maybe(rng, abs(rng.normal(0.8, 0.7))),
                "interest_coverage": _maybe(rng, rng.normal(8, 6)),
                "current_ratio": _maybe(rng, abs(rng.normal(1.6, 0.8))),
                "quick_ratio": _maybe(rng, abs(rng.normal(1.1, 0.6))),
                "altman_z": _maybe(rng, rng.normal(2.8, 1.6)),
                "book_value_per_share": _maybe(rng, abs(rng.normal(800, 600))),
                "eps_ttm": _maybe(rng, rng.normal(60, 80)),
                "dividend_yield": _maybe(rng, abs(rng.normal(0.03, 0.03)), 0.2),
                "payout_ratio": _maybe(rng, abs(rng.normal(0.35, 0.2)), 0.2),
                "intrinsic_price": _maybe(rng, price * rng.uniform(0.5, 1.8), 0.1),
                "shareholder_top1_pct": round(holders[0]["percentage"], 4),
                "shareholder_top3_pct": round(top3, 4),
                "has_controlling_shareholder": bool(holders[0]["percentage"] > 0.5),
                "shareholder_count": int(rng.integers(200, 250_000)),
                "shareholders": holders,
                "shareholder_trend_latest": _TRENDS[int(rng.integers(len(_TRENDS)))],
            }
        )
    return rows


def write_rows(rows: list[dict[str, Any]], output: Path) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    suffix = output.suffix.lower()
    if suffix == ".json":
        output.write_text(json.dumps({"stocks": rows}, ensure_ascii=False, indent=1), encoding="utf-8")
        return
    if suffix in {".jsonl", ".ndjson"}:
        with output.open("w", encoding="utf-8") as handle:
            for row in rows:
                handle.write(json.dumps(row, ensure_ascii=False) + "\n")
        return

    import pandas as pd

    frame = pd.DataFrame(rows)
    nested = ["indexes", "ipo_underwriters", "shareholders"]
    if suffix == ".csv":
        for column in nested:
            frame[column] = frame[column].map(json.dumps)
        frame.to_csv(output, index=False)
    elif suffix == ".parquet":
        for column in nested:
            frame[column] = frame[column].map(json.dumps)
        frame.to_parquet(output, index=False)
    else:
        raise SystemExit(f"Unsupported output format: {output.suffix}")


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    args = _parse_args()
    rng = np.random.default_rng(args.seed)
    end = date.fromisoformat(args.end_date)
    rows: list[dict[str, Any]] = []
    for offset in range(args.days - 1, -1, -1):
        day = (end - timedelta(days=offset)).isoformat()
        rows.extend(build_rows(args.stocks, day, rng))
    write_rows(rows, Path(args.output))
    logger.info("Wrote %d rows (%d per date, %d dates) to %s", len(rows), args.stocks, args.days, args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
