"""Ledger report result objects."""

from typing import Dict, Any, Optional, List
from datetime import datetime, UTC
from dataclasses import dataclass, field

import pandas as pd

from core.ledger_flags import generate_ledger_flags
from trade_ledger_engine._vendor import make_json_safe
from trade_ledger_engine.results import DataQuality, LedgerStats
from ._helpers import _format_df_as_text


@dataclass
class LedgerReport:
    """
    Trade-ledger analysis results for one statement.

    Wraps the pure ``LedgerStats`` value with the row-level data quality
    counts and run metadata, and provides the structured/API/CLI views used by
    the service layer and ``run_ledger``.

    Usage Patterns:
    1. **Structured Data Access**: ``report.stats.total_profit``,
       ``report.stats.daily_data``
    2. **Summary**: ``get_summary()`` for the headline numbers
    3. **Agent Snapshot**: ``get_agent_snapshot()`` feeds
       ``core.ledger_flags.generate_ledger_flags``
    4. **API Serialization**: ``to_api_response()``
    5. **Formatted Reporting**: ``to_cli_report()``

    Example:
        ```python
        report = analyze_statement("statement.xlsx")
        report.stats.win_rate                # 58.3
        report.get_summary()["total_profit"] # 1234.5
        print(report.to_cli_report())
        ```
    """

    stats: LedgerStats
    data_quality: DataQuality = field(default_factory=DataQuality)
    analysis_metadata: Dict[str, Any] = field(default_factory=dict)
    statement_file: Optional[str] = None

    @classmethod
    def from_core_analysis(cls,
                           stats: LedgerStats,
                           data_quality: Optional[DataQuality] = None,
                           analysis_metadata: Optional[Dict[str, Any]] = None,
                           statement_file: Optional[str] = None) -> 'LedgerReport':
        metadata = dict(analysis_metadata or {})
        metadata.setdefault("analysis_date", datetime.now(UTC).isoformat())
        return cls(
            stats=stats,
            data_quality=data_quality or DataQuality(),
            analysis_metadata=metadata,
            statement_file=statement_file,
        )

    @property
    def mode(self) -> str:
        return "equity_reconciled" if self.stats.has_equity_data else "trade_only"

    def get_summary(self) -> Dict[str, Any]:
        """Get key ledger metrics summary."""
        return {
            "total_trades": self.stats.total_trades,
            "win_rate": self.stats.win_rate,
            "total_profit": self.stats.total_profit,
            "average_daily_profit": self.stats.average_daily_profit,
            "projected_annual_income": self.stats.projected_annual_income,
            "trading_days": len(self.stats.daily_data),
            "months": len(self.stats.monthly_data),
        }

    def _period(self) -> Dict[str, Any]:
        daily = self.stats.daily_data
        return {
            "first_day": daily[0].date if daily else None,
            "last_day": daily[-1].date if daily else None,
            "trading_days": len(daily),
            "months": len(self.stats.monthly_data),
        }

    def _categorize_ledger(self) -> str:
        stats = self.stats
        if stats.total_trades == 0:
            return "empty"
        if stats.total_profit > 0 and stats.win_rate >= 50:
            return "profitable"
        if stats.total_profit > 0:
            return "profitable_low_hit_rate"
        if stats.total_profit == 0:
            return "flat"
        return "losing"

    def get_agent_snapshot(self) -> Dict[str, Any]:
        """Compact metrics payload for agent-oriented ledger responses."""
        stats = self.stats
        equity = stats.realized_equity_data
        return make_json_safe({
            "mode": self.mode,
            "period": self._period(),
            "trades": {
                "total": stats.total_trades,
                "profitable": stats.profitable_trades,
                "losing": stats.loss_trades,
                "break_even": stats.break_even_trades,
                "win_rate_pct": round(stats.win_rate, 2),
            },
            "profit": {
                "total": round(stats.total_profit, 2),
                "average": round(stats.avg_profit, 2),
                "median": round(stats.median_profit, 2),
                "std_dev": round(stats.std_dev, 2),
                "max": round(stats.max_profit, 2),
                "min": round(stats.min_profit, 2),
                "average_daily": round(stats.average_daily_profit, 2),
                "projected_annual": round(stats.projected_annual_income, 2),
            },
            "equity": {
                "initial_balance": stats.initial_balance,
                "points": len(equity),
                "first_date": equity[0].date if equity else None,
                "last_date": equity[-1].date if equity else None,
            },
            "pct_change_sources": stats.pct_change_sources(),
            "data_quality": self.data_quality.to_dict(),
            "verdict": self._categorize_ledger(),
        })

    def get_flags(self) -> List[Dict[str, Any]]:
        return generate_ledger_flags(self.get_agent_snapshot())

    def to_api_response(self) -> Dict[str, Any]:
        return make_json_safe({
            "mode": self.mode,
            "statistics": self.stats.to_dict(),
            "summary": self.get_summary(),
            "data_quality": self.data_quality.to_dict(),
            "flags": self.get_flags(),
            "analysis_metadata": self.analysis_metadata,
            "statement_file": self.statement_file,
        })

    def to_cli_report(self) -> str:
        """Generate complete CLI formatted report."""
        sections = [
            self._format_header(),
            self._format_statistics(),
            self._format_series(),
            self._format_flags(),
        ]
        return "\n".join(s for s in sections if s)

    def _format_header(self) -> str:
        period = self._period()
        lines = ["📒 Trading Statistics"]
        lines.append("=" * 50)
        lines.append(f"📁 Statement file: {self.statement_file or '(in-memory)'}")
        if period["first_day"]:
            lines.append(f"📅 Period: {period['first_day']} to {period['last_day']}")
        lines.append(f"📊 Percent change basis: {self.mode.replace('_', ' ')}")
        return "\n".join(lines)

    def _format_statistics(self) -> str:
        s = self.stats
        lines = [""]
        lines.append(f"Total trades:                        {s.total_trades}")
        lines.append(f"Profitable trades:                   {s.profitable_trades}")
        lines.append(f"Losing trades:                       {s.loss_trades}")
        lines.append(f"Break-even trades:                   {s.break_even_trades}")
        lines.append(f"Win rate:                            {s.win_rate:.2f}%")
        lines.append(f"Total profit (USD):                  ${s.total_profit:.2f}")
        lines.append(f"Maximum profit on single trade (USD): ${s.max_profit:.2f}")
        lines.append(f"Maximum loss on single trade (USD):  ${s.min_profit:.2f}")
        lines.append(f"Average profit per trade (USD):      ${s.avg_profit:.2f}")
        lines.append(f"Median profit per trade (USD):       ${s.median_profit:.2f}")
        lines.append(f"Standard deviation of profit (USD):  ${s.std_dev:.2f}")
        lines.append(f"Average daily profit (USD):          ${s.average_daily_profit:.2f}")
        lines.append(f"Projected yearly income (USD):       ${s.projected_annual_income:.2f}")
        return "\n".join(lines)

    def _series_frame(self, buckets, key: str) -> pd.DataFrame:
        if not buckets:
            return pd.DataFrame()
        frame = pd.DataFrame([b.to_dict() for b in buckets]).set_index(key)
        return frame.rename(columns={
            "cumulative_profit": "cumulative",
            "pct_change": "pct",
            "pct_change_source": "source",
        })

    def _format_series(self) -> str:
        formats = {"pct": "{:+.2f}%"}
        lines: List[str] = []
        lines.extend(_format_df_as_text(
            self._series_frame(self.stats.daily_data, "date"),
            title="Daily profit",
            formats=formats,
        ))
        lines.extend(_format_df_as_text(
            self._series_frame(self.stats.monthly_data, "month"),
            title="Monthly profit",
            formats=formats,
        ))
        return "\n".join(lines)

    def _format_flags(self) -> str:
        flags = self.get_flags()
        if not flags:
            return ""
        icons = {"error": "❌", "warning": "⚠️", "info": "ℹ️", "success": "✅"}
        lines = ["", "Flags"]
        for flag in flags:
            lines.append(f"{icons.get(flag['severity'], '•')} {flag['message']}")
        return "\n".join(lines)

    def to_formatted_report(self) -> str:
        """Format ledger results for display (identical to to_cli_report())."""
        return self.to_cli_report()
