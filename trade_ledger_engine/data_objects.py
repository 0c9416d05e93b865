"""
Ledger Data Objects Module

Immutable records and series points used by the aggregation pipeline.

Classes:
- TradeRecord: one closed position (profit + close date)
- EquitySnapshot: one account-activity row with a parsed timestamp
- DailyBucket / MonthlyBucket: summed profit per calendar period with running
  cumulative profit, balance and percent change
- EquityPoint: last realized equity reported for a calendar day

Row constructors (``from_row``) return ``None`` for rows that cannot be used;
they never raise on bad cell values.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from trade_ledger_engine._vendor import _to_float
from trade_ledger_engine.constants import PCT_SOURCE_TRADE
from trade_ledger_engine.date_normalizer import parse_instant


Row = Mapping[str, Any]


@dataclass(frozen=True)
class TradeRecord:
    """A closed position. ``profit`` is always a finite float."""

    profit: float
    close_date: Optional[str] = None

    @classmethod
    def from_row(cls, row: Row, columns: Mapping[str, str]) -> Optional["TradeRecord"]:
        profit = _to_float(row.get(columns["profit"]))
        if profit is None:
            return None
        raw_date = row.get(columns["close_date"])
        close_date = None if raw_date is None or raw_date == "" else raw_date
        return cls(profit=profit, close_date=close_date)


@dataclass(frozen=True)
class EquitySnapshot:
    """
    One account-activity row.

    ``balance`` only matters for the chronologically first snapshot (it seeds
    the initial balance); ``realized_equity`` feeds the equity series. Either
    may be ``None`` when the cell is blank or not numeric.
    """

    date: str
    instant: datetime
    balance: Optional[float] = None
    realized_equity: Optional[float] = None

    @classmethod
    def from_row(cls, row: Row, columns: Mapping[str, str]) -> Optional["EquitySnapshot"]:
        raw_date = row.get(columns["date"])
        instant = parse_instant(raw_date)
        if instant is None:
            return None
        return cls(
            date=instant.date().isoformat(),
            instant=instant,
            balance=_to_float(row.get(columns["balance"])),
            realized_equity=_to_float(row.get(columns["realized_equity"])),
        )


@dataclass(frozen=True)
class DailyBucket:
    date: str
    profit: float
    cumulative_profit: float
    balance: float
    pct_change: float
    pct_change_source: str = PCT_SOURCE_TRADE

    @property
    def key(self) -> str:
        return self.date

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "profit": self.profit,
            "cumulative_profit": self.cumulative_profit,
            "balance": self.balance,
            "pct_change": self.pct_change,
            "pct_change_source": self.pct_change_source,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DailyBucket":
        return cls(
            date=d["date"],
            profit=d.get("profit", 0.0),
            cumulative_profit=d.get("cumulative_profit", 0.0),
            balance=d.get("balance", 0.0),
            pct_change=d.get("pct_change", 0.0),
            pct_change_source=d.get("pct_change_source", PCT_SOURCE_TRADE),
        )


@dataclass(frozen=True)
class MonthlyBucket:
    month: str
    profit: float
    cumulative_profit: float
    balance: float
    pct_change: float
    pct_change_source: str = PCT_SOURCE_TRADE

    @property
    def key(self) -> str:
        return self.month

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "profit": self.profit,
            "cumulative_profit": self.cumulative_profit,
            "balance": self.balance,
            "pct_change": self.pct_change,
            "pct_change_source": self.pct_change_source,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "MonthlyBucket":
        return cls(
            month=d["month"],
            profit=d.get("profit", 0.0),
            cumulative_profit=d.get("cumulative_profit", 0.0),
            balance=d.get("balance", 0.0),
            pct_change=d.get("pct_change", 0.0),
            pct_change_source=d.get("pct_change_source", PCT_SOURCE_TRADE),
        )


@dataclass(frozen=True)
class EquityPoint:
    date: str
    realized_equity: float

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date, "realized_equity": self.realized_equity}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "EquityPoint":
        return cls(date=d["date"], realized_equity=d.get("realized_equity", 0.0))
