"""Equity reconciliation: equity-derived percent changes patched onto buckets.

Called by:
- ``ledger_analysis.compute_ledger_stats`` after ``aggregate_trades``.

Primary flow:
1) Parse and chronologically order snapshots (unparseable dates skipped).
2) Reduce to one realized-equity point per calendar day (last one wins).
3) Derive day-over-day and month-over-month percent changes from equity levels.
4) Overwrite bucket percent changes where the date/month has an equity change;
   other buckets keep their trade-derived value.

Every function returns new values; ``LedgerStats`` is never mutated.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from trade_ledger_engine import config
from trade_ledger_engine.constants import PCT_SOURCE_EQUITY
from trade_ledger_engine.data_objects import EquityPoint, EquitySnapshot, Row
from trade_ledger_engine.date_normalizer import month_key
from trade_ledger_engine.results import LedgerStats


logger = logging.getLogger(__name__)


def resolve_equity_columns(columns: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    resolved = config.get_equity_columns()
    if columns:
        resolved.update(columns)
    return resolved


def collect_snapshots(
    rows: Iterable[Row],
    columns: Optional[Mapping[str, str]] = None,
) -> List[EquitySnapshot]:
    """Parse equity rows and sort them by timestamp; ties keep source order."""
    resolved = resolve_equity_columns(columns)
    snapshots: List[EquitySnapshot] = []
    skipped = 0
    for row in rows:
        snapshot = EquitySnapshot.from_row(row, resolved)
        if snapshot is None:
            skipped += 1
            continue
        snapshots.append(snapshot)
    if skipped:
        logger.debug("Skipped %d equity row(s) with unparseable %r", skipped, resolved["date"])
    return sorted(snapshots, key=lambda s: s.instant)


def extract_initial_balance(
    equity_rows: Iterable[Row],
    *,
    columns: Optional[Mapping[str, str]] = None,
) -> float:
    """Balance of the earliest snapshot, or ``0.0`` when unavailable."""
    snapshots = collect_snapshots(equity_rows, columns)
    if not snapshots or snapshots[0].balance is None:
        return 0.0
    return snapshots[0].balance


def build_equity_series(snapshots: Sequence[EquitySnapshot]) -> Tuple[EquityPoint, ...]:
    """One point per calendar day; later snapshots overwrite earlier ones."""
    by_day: Dict[str, float] = {}
    for snapshot in snapshots:
        if snapshot.realized_equity is None:
            continue
        by_day[snapshot.date] = snapshot.realized_equity
    return tuple(EquityPoint(date=day, realized_equity=by_day[day]) for day in sorted(by_day))


def _relative_changes(levels: Sequence[Tuple[str, float]]) -> Dict[str, float]:
    changes: Dict[str, float] = {}
    previous: Optional[float] = None
    for key, level in levels:
        if previous is None or previous == 0:
            changes[key] = 0.0
        else:
            changes[key] = (level - previous) / previous * 100
        previous = level
    return changes


def daily_equity_changes(points: Sequence[EquityPoint]) -> Dict[str, float]:
    """Day-over-day percent change keyed by ``YYYY-MM-DD``; first day is ``0``."""
    ordered = sorted(points, key=lambda p: p.date)
    return _relative_changes([(p.date, p.realized_equity) for p in ordered])


def monthly_equity_changes(points: Sequence[EquityPoint]) -> Dict[str, float]:
    """Month-over-month percent change using each month's last daily level."""
    month_end: Dict[str, float] = {}
    for point in sorted(points, key=lambda p: p.date):
        month_end[month_key(point.date)] = point.realized_equity
    return _relative_changes([(month, month_end[month]) for month in sorted(month_end)])


def _patch(buckets, changes: Mapping[str, float]):
    return tuple(
        dataclasses.replace(b, pct_change=changes[b.key], pct_change_source=PCT_SOURCE_EQUITY)
        if b.key in changes
        else b
        for b in buckets
    )


def reconcile_equity(
    stats: LedgerStats,
    equity_rows: Iterable[Row],
    *,
    columns: Optional[Mapping[str, str]] = None,
) -> LedgerStats:
    """Return ``stats`` with equity data attached and percent changes patched."""
    points = build_equity_series(collect_snapshots(equity_rows, columns))
    if not points:
        return dataclasses.replace(stats, realized_equity_data=())

    daily_changes = daily_equity_changes(points)
    monthly_changes = monthly_equity_changes(points)
    return dataclasses.replace(
        stats,
        daily_data=_patch(stats.daily_data, daily_changes),
        monthly_data=_patch(stats.monthly_data, monthly_changes),
        realized_equity_data=points,
    )
