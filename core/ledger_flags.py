"""Ledger-level interpretive flags for agent-oriented responses."""

from __future__ import annotations

import math
from typing import Any

from trade_ledger_engine import config
from trade_ledger_engine.constants import PCT_SOURCE_EQUITY, PCT_SOURCE_TRADE, SEVERITY_ORDER


def _to_float(value: Any) -> float | None:
    """Convert to finite float; return None for missing/invalid values."""
    if value is None or isinstance(value, bool):
        return None
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(numeric):
        return None
    return numeric


def _to_int(value: Any) -> int:
    return int(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else 0


def _mixes_sources(counts: dict) -> bool:
    return _to_int(counts.get(PCT_SOURCE_TRADE)) > 0 and _to_int(counts.get(PCT_SOURCE_EQUITY)) > 0


def generate_ledger_flags(snapshot: dict) -> list[dict]:
    """Generate actionable flags from a ledger snapshot payload."""
    flags: list[dict] = []
    if not isinstance(snapshot, dict):
        return flags

    trades = snapshot.get("trades", {}) or {}
    profit = snapshot.get("profit", {}) or {}
    data_quality = snapshot.get("data_quality", {}) or {}
    sources = snapshot.get("pct_change_sources", {}) or {}
    mode = snapshot.get("mode", "trade_only")
    thresholds = config.FLAG_THRESHOLDS

    total_trades = _to_int(trades.get("total"))
    win_rate = _to_float(trades.get("win_rate_pct"))
    total_profit = _to_float(profit.get("total"))

    if total_trades == 0:
        flags.append(
            {
                "type": "no_trades",
                "severity": "warning",
                "message": "No closed positions with a numeric profit were found",
            }
        )

    if total_profit is not None and total_profit < 0:
        flags.append(
            {
                "type": "negative_total_profit",
                "severity": "warning",
                "message": f"Ledger is down ${abs(total_profit):,.2f} in total",
                "total_profit": round(total_profit, 2),
            }
        )

    low_win_rate = thresholds.get("low_win_rate_pct", 40.0)
    if total_trades > 0 and win_rate is not None and win_rate < low_win_rate:
        flags.append(
            {
                "type": "low_win_rate",
                "severity": "warning" if win_rate < low_win_rate / 2 else "info",
                "message": f"Win rate is {win_rate:.1f}% (below {low_win_rate:.0f}%)",
                "win_rate_pct": round(win_rate, 2),
            }
        )

    invalid_rows = _to_int(data_quality.get("invalid_trade_rows"))
    if invalid_rows > 0:
        share = _to_float(data_quality.get("invalid_trade_share_pct")) or 0.0
        flags.append(
            {
                "type": "invalid_rows_skipped",
                "severity": "warning" if share > thresholds.get("invalid_row_share_pct", 5.0) else "info",
                "message": f"{invalid_rows} trade row(s) skipped for missing or non-numeric profit",
                "invalid_trade_rows": invalid_rows,
                "invalid_trade_share_pct": round(share, 1),
            }
        )

    undated = _to_int(data_quality.get("undated_trades"))
    if undated > 0:
        flags.append(
            {
                "type": "undated_trades",
                "severity": "info",
                "message": f"{undated} trade(s) have an unrecognized close date and are excluded from daily/monthly series",
                "undated_trades": undated,
            }
        )

    if mode != "equity_reconciled" and total_trades > 0:
        flags.append(
            {
                "type": "no_equity_data",
                "severity": "info",
                "message": "No account equity data; percent changes are profit over previous balance",
            }
        )

    if _mixes_sources(sources.get("daily", {}) or {}) or _mixes_sources(sources.get("monthly", {}) or {}):
        flags.append(
            {
                "type": "mixed_pct_change_sources",
                "severity": "warning",
                "message": "Equity data does not cover every trading period; percent changes mix equity-derived and trade-derived values",
                "pct_change_sources": sources,
            }
        )

    if total_profit is not None and total_profit > 0 and win_rate is not None and win_rate >= 50:
        flags.append(
            {
                "type": "profitable_ledger",
                "severity": "success",
                "message": f"Profitable ledger: ${total_profit:,.2f} at {win_rate:.0f}% win rate",
                "total_profit": round(total_profit, 2),
            }
        )

    flags.sort(key=lambda flag: SEVERITY_ORDER.get(flag.get("severity"), 9))
    return flags
