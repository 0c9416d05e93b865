"""
Ledger analysis entrypoint.

Canonical pure-function pipeline used beneath the service and CLI wrappers.

Primary flow:
    1) Seed the initial balance from the earliest equity snapshot (0 if none).
    2) Aggregate trade rows into scalar statistics and daily/monthly buckets.
    3) Reconcile bucket percent changes against the equity series.

No I/O happens here; rows arrive fully materialized.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from trade_ledger_engine._logging import log_errors, log_operation, log_timing
from trade_ledger_engine.data_objects import Row
from trade_ledger_engine.date_normalizer import CalendarDay, parse_calendar_day
from trade_ledger_engine.equity_reconciler import (
    collect_snapshots,
    extract_initial_balance,
    reconcile_equity,
)
from trade_ledger_engine.results import DataQuality, LedgerStats
from trade_ledger_engine.trade_aggregator import aggregate_trades, collect_trades


@log_errors("high")
@log_operation("ledger_stats")
@log_timing(2.0)
def compute_ledger_stats(
    trade_rows: Iterable[Row],
    equity_rows: Optional[Iterable[Row]] = None,
    *,
    trade_columns: Optional[Mapping[str, str]] = None,
    equity_columns: Optional[Mapping[str, str]] = None,
) -> LedgerStats:
    """
    Compute ``LedgerStats`` for one statement.

    Parameters
    ----------
    trade_rows : Iterable[Mapping[str, Any]]
        Closed-position rows keyed by column header.
    equity_rows : Iterable[Mapping[str, Any]], optional
        Account-activity rows. When omitted or empty, the initial balance is
        ``0`` and bucket percent changes stay trade-derived.
    trade_columns, equity_columns : Mapping[str, str], optional
        Per-call header overrides on top of ``config``.

    Returns
    -------
    LedgerStats
        Never raises for malformed rows; bad rows are skipped.
    """
    trade_rows = list(trade_rows)
    equity_rows = list(equity_rows or [])

    initial_balance = extract_initial_balance(equity_rows, columns=equity_columns)
    stats = aggregate_trades(trade_rows, initial_balance, columns=trade_columns)
    if not equity_rows:
        return stats
    return reconcile_equity(stats, equity_rows, columns=equity_columns)


def summarize_data_quality(
    trade_rows: Iterable[Row],
    equity_rows: Optional[Iterable[Row]] = None,
    *,
    trade_columns: Optional[Mapping[str, str]] = None,
    equity_columns: Optional[Mapping[str, str]] = None,
) -> DataQuality:
    """Count the rows each stage skipped."""
    trade_rows = list(trade_rows)
    equity_rows = list(equity_rows or [])

    trades = collect_trades(trade_rows, trade_columns)
    undated = sum(
        1 for t in trades if not isinstance(parse_calendar_day(t.close_date), CalendarDay)
    )

    snapshots = collect_snapshots(equity_rows, equity_columns)
    usable = sum(1 for s in snapshots if s.realized_equity is not None)

    return DataQuality(
        trade_rows=len(trade_rows),
        valid_trades=len(trades),
        invalid_trade_rows=len(trade_rows) - len(trades),
        undated_trades=undated,
        equity_rows=len(equity_rows),
        usable_equity_rows=usable,
        skipped_equity_rows=len(equity_rows) - usable,
    )


__all__ = ["compute_ledger_stats", "summarize_data_quality"]
