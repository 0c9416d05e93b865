#!/usr/bin/env python3
# coding: utf-8

"""
Core statement analysis business logic.

Agent orientation:
    Canonical statement -> report entrypoint used beneath the CLI wrapper.
    Start here when CLI and API outputs diverge.

Called by:
    - ``run_ledger.run_ledger`` (dual-mode wrapper)

Primary flow:
    1) Load trade/equity rows from the statement workbook.
    2) Run the ledger pipeline and row-level data quality summary.
    3) Return ``LedgerReport`` or error payload.
"""

from typing import Dict, Any, Optional, Union
from datetime import datetime, UTC

from trade_ledger_engine._logging import (
    log_operation,
    log_timing,
    log_errors,
    log_ledger_operation,
)
from trade_ledger_engine._vendor import make_json_safe
from trade_ledger_engine.ledger_analysis import compute_ledger_stats, summarize_data_quality
from trade_ledger_engine.workbook import LedgerInputError, load_statement
from core.result_objects import LedgerReport


@log_errors("high")
@log_operation("statement_analysis")
@log_timing(5.0)
def analyze_statement(
    filepath: str,
    *,
    trades_sheet: Optional[str] = None,
    equity_sheet: Optional[str] = None,
) -> Union[LedgerReport, Dict[str, Any]]:
    """
    Run ledger analysis for one statement workbook.

    Contract notes:
    - Success path returns ``LedgerReport``.
    - Missing file, missing trades sheet or unreadable workbook return an
      error dict instead of raising.

    Parameters
    ----------
    filepath : str
        Path to the ``.xlsx`` statement.
    trades_sheet, equity_sheet : str, optional
        Sheet name overrides (defaults from ``config.STATEMENT_SHEETS``).

    Returns
    -------
    Union[LedgerReport, Dict[str, Any]]
        On success: LedgerReport with statistics, series and data quality
        On error: Dict with ``error``, ``statement_file`` and ``analysis_date``
    """
    try:
        tables = load_statement(filepath, trades_sheet=trades_sheet, equity_sheet=equity_sheet)
    except FileNotFoundError:
        return make_json_safe({
            "error": f"Statement file '{filepath}' not found",
            "statement_file": filepath,
            "analysis_date": datetime.now(UTC).isoformat(),
        })
    except LedgerInputError as e:
        return make_json_safe({
            "error": str(e),
            "error_type": type(e).__name__,
            "statement_file": filepath,
            "analysis_date": datetime.now(UTC).isoformat(),
        })

    stats = compute_ledger_stats(tables.trade_rows, tables.equity_rows)
    data_quality = summarize_data_quality(tables.trade_rows, tables.equity_rows)

    log_ledger_operation("statement_analyzed", {
        "statement_file": filepath,
        "valid_trades": data_quality.valid_trades,
        "invalid_trade_rows": data_quality.invalid_trade_rows,
        "equity_points": len(stats.realized_equity_data),
    })

    return LedgerReport.from_core_analysis(
        stats=stats,
        data_quality=data_quality,
        analysis_metadata={
            "analysis_date": datetime.now(UTC).isoformat(),
            "statement_file": filepath,
            "trades_sheet": tables.trades_sheet,
            "equity_sheet": tables.equity_sheet,
        },
        statement_file=filepath,
    )
