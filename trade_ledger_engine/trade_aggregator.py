"""Trade aggregation: scalar profit statistics and date-bucketed series.

Called by:
- ``ledger_analysis.compute_ledger_stats`` (full pipeline).

Contract notes:
- Rows whose profit cell is missing or not numeric are dropped before any
  statistic is computed; they never change counts or sums.
- Trades whose close date does not parse still count in the scalar
  statistics but are left out of the daily/monthly buckets.
- Bucket percent changes here are trade-derived (profit over previous
  balance). The equity reconciler may overwrite them afterwards.
"""

from __future__ import annotations

import logging
from itertools import accumulate
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from trade_ledger_engine import config
from trade_ledger_engine.data_objects import DailyBucket, MonthlyBucket, Row, TradeRecord
from trade_ledger_engine.date_normalizer import CalendarDay, month_key, parse_calendar_day
from trade_ledger_engine.results import LedgerStats


logger = logging.getLogger(__name__)


def resolve_trade_columns(columns: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    resolved = config.get_trade_columns()
    if columns:
        resolved.update(columns)
    return resolved


def collect_trades(rows: Iterable[Row], columns: Optional[Mapping[str, str]] = None) -> List[TradeRecord]:
    """Keep rows with a numeric profit, in source order."""
    resolved = resolve_trade_columns(columns)
    trades: List[TradeRecord] = []
    skipped = 0
    for row in rows:
        record = TradeRecord.from_row(row, resolved)
        if record is None:
            skipped += 1
            continue
        trades.append(record)
    if skipped:
        logger.debug("Skipped %d trade row(s) without a numeric %r", skipped, resolved["profit"])
    return trades


def percent_change(profit: float, previous_balance: float) -> float:
    if previous_balance == 0:
        return 0.0
    return profit / previous_balance * 100


def scan_balances(profits: Sequence[float], initial_balance: float) -> List[Tuple[float, float, float]]:
    """
    Fold period profits into ``(cumulative_profit, balance, pct_change)``.

    ``cumulative_profit`` is the prefix sum of ``profits``; ``balance`` is
    ``initial_balance + cumulative_profit``; ``pct_change`` divides each
    period's profit by the balance that preceded it (``initial_balance`` for
    the first period).
    """
    cumulative = list(accumulate(profits))
    balances = [initial_balance + c for c in cumulative]
    previous_balances = [initial_balance] + balances[:-1]
    return [
        (cum, bal, percent_change(profit, prev))
        for profit, cum, bal, prev in zip(profits, cumulative, balances, previous_balances)
    ]


def _sum_by_key(keys: Sequence[str], values: Sequence[float]) -> pd.Series:
    if not keys:
        return pd.Series(dtype=float)
    return pd.Series(list(values), index=list(keys), dtype=float).groupby(level=0, sort=True).sum()


def build_daily_buckets(trades: Sequence[TradeRecord], initial_balance: float = 0.0) -> Tuple[DailyBucket, ...]:
    keys: List[str] = []
    profits: List[float] = []
    for trade in trades:
        parsed = parse_calendar_day(trade.close_date)
        if not isinstance(parsed, CalendarDay):
            continue
        keys.append(parsed.value)
        profits.append(trade.profit)

    daily = _sum_by_key(keys, profits)
    day_profits = [float(v) for v in daily.to_numpy()]
    scanned = scan_balances(day_profits, initial_balance)
    return tuple(
        DailyBucket(
            date=str(day),
            profit=profit,
            cumulative_profit=cumulative,
            balance=balance,
            pct_change=pct,
        )
        for day, profit, (cumulative, balance, pct) in zip(daily.index, day_profits, scanned)
    )


def build_monthly_buckets(daily: Sequence[DailyBucket], initial_balance: float = 0.0) -> Tuple[MonthlyBucket, ...]:
    monthly = _sum_by_key([month_key(b.date) for b in daily], [b.profit for b in daily])
    month_profits = [float(v) for v in monthly.to_numpy()]
    scanned = scan_balances(month_profits, initial_balance)
    return tuple(
        MonthlyBucket(
            month=str(month),
            profit=profit,
            cumulative_profit=cumulative,
            balance=balance,
            pct_change=pct,
        )
        for month, profit, (cumulative, balance, pct) in zip(monthly.index, month_profits, scanned)
    )


def summarize_profits(profits: Sequence[float]) -> Dict[str, Any]:
    """Counts, win rate and order statistics over valid trade profits."""
    total = len(profits)
    if total == 0:
        return {
            "total_trades": 0,
            "profitable_trades": 0,
            "loss_trades": 0,
            "break_even_trades": 0,
            "win_rate": 0.0,
            "total_profit": 0.0,
            "max_profit": 0.0,
            "min_profit": 0.0,
            "avg_profit": 0.0,
            "median_profit": 0.0,
            "std_dev": 0.0,
        }

    series = pd.Series(list(profits), dtype=float)
    profitable = int((series > 0).sum())
    total_profit = float(series.sum())
    return {
        "total_trades": total,
        "profitable_trades": profitable,
        "loss_trades": int((series < 0).sum()),
        "break_even_trades": int((series == 0).sum()),
        "win_rate": profitable / total * 100,
        "total_profit": total_profit,
        "max_profit": float(series.max()),
        "min_profit": float(series.min()),
        "avg_profit": total_profit / total,
        "median_profit": float(series.median()),
        "std_dev": float(series.std(ddof=0)),
    }


def aggregate_trades(
    trade_rows: Iterable[Row],
    initial_balance: float = 0.0,
    *,
    columns: Optional[Mapping[str, str]] = None,
) -> LedgerStats:
    """Reduce raw trade rows into ``LedgerStats`` with daily/monthly buckets."""
    initial_balance = float(initial_balance)
    trades = collect_trades(trade_rows, columns)
    summary = summarize_profits([t.profit for t in trades])

    daily = build_daily_buckets(trades, initial_balance)
    monthly = build_monthly_buckets(daily, initial_balance)

    average_daily_profit = sum(b.profit for b in daily) / len(daily) if daily else 0.0
    days_per_year = config.ANALYSIS_DEFAULTS.get("days_per_year", 365)

    return LedgerStats(
        **summary,
        average_daily_profit=average_daily_profit,
        projected_annual_income=average_daily_profit * days_per_year,
        initial_balance=initial_balance,
        daily_data=daily,
        monthly_data=monthly,
    )
