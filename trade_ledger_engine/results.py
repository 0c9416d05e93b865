"""Immutable result objects produced by the ledger pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from trade_ledger_engine._vendor import make_json_safe
from trade_ledger_engine.constants import PCT_SOURCE_EQUITY, PCT_SOURCE_TRADE
from trade_ledger_engine.data_objects import DailyBucket, EquityPoint, MonthlyBucket


@dataclass(frozen=True)
class LedgerStats:
    """
    Summary statistics and derived series for one statement.

    Scalar fields are computed over valid trades only. ``daily_data`` and
    ``monthly_data`` are strictly ascending; ``realized_equity_data`` is empty
    until the equity reconciler runs.

    Percent-change values on buckets are trade-derived unless
    ``pct_change_source == "equity"``.
    """

    total_trades: int = 0
    profitable_trades: int = 0
    loss_trades: int = 0
    break_even_trades: int = 0
    win_rate: float = 0.0
    total_profit: float = 0.0
    max_profit: float = 0.0
    min_profit: float = 0.0
    avg_profit: float = 0.0
    median_profit: float = 0.0
    std_dev: float = 0.0
    average_daily_profit: float = 0.0
    projected_annual_income: float = 0.0
    initial_balance: float = 0.0
    daily_data: Tuple[DailyBucket, ...] = field(default_factory=tuple)
    monthly_data: Tuple[MonthlyBucket, ...] = field(default_factory=tuple)
    realized_equity_data: Tuple[EquityPoint, ...] = field(default_factory=tuple)

    @property
    def has_equity_data(self) -> bool:
        return bool(self.realized_equity_data)

    def pct_change_sources(self) -> Dict[str, Dict[str, int]]:
        """Count buckets per percent-change source for each series."""
        def _count(buckets) -> Dict[str, int]:
            counts = {PCT_SOURCE_TRADE: 0, PCT_SOURCE_EQUITY: 0}
            for bucket in buckets:
                counts[bucket.pct_change_source] = counts.get(bucket.pct_change_source, 0) + 1
            return counts

        return {"daily": _count(self.daily_data), "monthly": _count(self.monthly_data)}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_trades": self.total_trades,
            "profitable_trades": self.profitable_trades,
            "loss_trades": self.loss_trades,
            "break_even_trades": self.break_even_trades,
            "win_rate": self.win_rate,
            "total_profit": self.total_profit,
            "max_profit": self.max_profit,
            "min_profit": self.min_profit,
            "avg_profit": self.avg_profit,
            "median_profit": self.median_profit,
            "std_dev": self.std_dev,
            "average_daily_profit": self.average_daily_profit,
            "projected_annual_income": self.projected_annual_income,
            "initial_balance": self.initial_balance,
            "daily_data": [bucket.to_dict() for bucket in self.daily_data],
            "monthly_data": [bucket.to_dict() for bucket in self.monthly_data],
            "realized_equity_data": [point.to_dict() for point in self.realized_equity_data],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LedgerStats":
        return cls(
            total_trades=d.get("total_trades", 0),
            profitable_trades=d.get("profitable_trades", 0),
            loss_trades=d.get("loss_trades", 0),
            break_even_trades=d.get("break_even_trades", 0),
            win_rate=d.get("win_rate", 0.0),
            total_profit=d.get("total_profit", 0.0),
            max_profit=d.get("max_profit", 0.0),
            min_profit=d.get("min_profit", 0.0),
            avg_profit=d.get("avg_profit", 0.0),
            median_profit=d.get("median_profit", 0.0),
            std_dev=d.get("std_dev", 0.0),
            average_daily_profit=d.get("average_daily_profit", 0.0),
            projected_annual_income=d.get("projected_annual_income", 0.0),
            initial_balance=d.get("initial_balance", 0.0),
            daily_data=tuple(DailyBucket.from_dict(b) for b in d.get("daily_data", [])),
            monthly_data=tuple(MonthlyBucket.from_dict(b) for b in d.get("monthly_data", [])),
            realized_equity_data=tuple(
                EquityPoint.from_dict(p) for p in d.get("realized_equity_data", [])
            ),
        )

    def to_api_response(self) -> Dict[str, Any]:
        return make_json_safe(self.to_dict())


@dataclass(frozen=True)
class DataQuality:
    """Row-level skip counts for one statement."""

    trade_rows: int = 0
    valid_trades: int = 0
    invalid_trade_rows: int = 0
    undated_trades: int = 0
    equity_rows: int = 0
    usable_equity_rows: int = 0
    skipped_equity_rows: int = 0

    @property
    def invalid_trade_share_pct(self) -> float:
        if self.trade_rows == 0:
            return 0.0
        return self.invalid_trade_rows / self.trade_rows * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trade_rows": self.trade_rows,
            "valid_trades": self.valid_trades,
            "invalid_trade_rows": self.invalid_trade_rows,
            "undated_trades": self.undated_trades,
            "equity_rows": self.equity_rows,
            "usable_equity_rows": self.usable_equity_rows,
            "skipped_equity_rows": self.skipped_equity_rows,
            "invalid_trade_share_pct": self.invalid_trade_share_pct,
        }
