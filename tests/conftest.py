"""Shared pytest fixtures for idx_screener tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import numpy as np
import pytest

from idx_screener.common import StockRecord
from idx_screener.snapshot import InMemorySnapshotStore, Snapshot


def _record(code: str, **fields: Any) -> StockRecord:
    row: dict[str, Any] = {"stock_code": code, "name": f"PT {code} Tbk", "date": "2024-06-03"}
    row.update(fields)
    return StockRecord.from_mapping(row)


@pytest.fixture
def make_record() -> Callable[..., StockRecord]:
    return _record


@pytest.fixture
def sample_records() -> list[StockRecord]:
    """Small hand-written universe with known metrics."""
    return [
        _record(
            "BBCA",
            name="Bank Central Asia",
            sector="Financials",
            sub_sector="Banks",
            tag="LQ45",
            action="BUY",
            score=90,
            pbv=4.5,
            fair_pbv=5.0,
            pe_ttm=24.0,
            roe=0.21,
            dividend_yield=0.028,
            altman_z=3.4,
            free_float=0.42,
            market_cap=1.2e15,
            shareholder_top3_pct=0.55,
        ),
        _record(
            "TLKM",
            name="Telkom Indonesia",
            sector="Infrastructures",
            sub_sector="Telecommunication",
            tag="LQ45",
            action="HOLD",
            score=70,
            pbv=2.4,
            fair_pbv=2.0,
            pe_ttm=13.0,
            roe=0.17,
            dividend_yield=0.062,
            altman_z=2.6,
            free_float=0.47,
            market_cap=3.1e14,
            shareholder_top3_pct=0.53,
        ),
        _record(
            "ADRO",
            name="Adaro Energy",
            sector="Energy",
            sub_sector="Oil, Gas & Coal",
            tag="IDX30",
            action="BUY",
            score=85,
            pbv=0.9,
            fair_pbv=1.3,
            pe_ttm=4.1,
            roe=0.26,
            dividend_yield=0.11,
            altman_z=4.1,
            free_float=0.36,
            market_cap=8.0e13,
            shareholder_top3_pct=0.64,
        ),
        _record(
            "GOTO",
            name="GoTo Gojek Tokopedia",
            sector="Technology",
            sub_sector="Software & IT Services",
            action="AVOID",
            score=22,
            pbv=1.1,
            pe_ttm=None,
            roe=-0.45,
            altman_z=1.2,
            free_float=0.71,
            market_cap=7.5e13,
        ),
        _record(
            "PANI",
            name="Pantai Indah Kapuk Dua",
            sector="Properties & Real Estate",
            sub_sector="Real Estate Developers",
            action="HOLD",
            score=51,
            pbv=8.2,
            fair_pbv=3.0,
            altman_z=None,
            free_float=0.12,
            shareholder_top3_pct=0.88,
            has_controlling_shareholder=True,
        ),
    ]


@pytest.fixture
def sample_snapshot(sample_records: list[StockRecord]) -> Snapshot:
    return Snapshot.from_records("2024-06-03", sample_records)


@pytest.fixture
def sample_store(sample_records: list[StockRecord]) -> InMemorySnapshotStore:
    return InMemorySnapshotStore(sample_records)


@pytest.fixture
def large_records() -> list[StockRecord]:
    """Generated universe large enough to exercise windowing."""
    rng = np.random.default_rng(seed=2024)
    sectors = ["Financials", "Energy", "Technology", "Healthcare"]
    return [
        _record(
            f"S{i:04d}",
            sector=sectors[i % len(sectors)],
            action=["BUY", "HOLD", "AVOID"][i % 3],
            score=int(rng.integers(0, 101)),
            pbv=float(rng.uniform(0.2, 6.0)),
        )
        for i in range(1_000)
    ]
