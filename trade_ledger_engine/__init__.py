"""Public API for trade_ledger_engine."""

from trade_ledger_engine.date_normalizer import (
    CalendarDay,
    Unparsed,
    parse_calendar_day,
    to_calendar_day,
    to_instant,
)
from trade_ledger_engine.data_objects import (
    DailyBucket,
    EquityPoint,
    EquitySnapshot,
    MonthlyBucket,
    TradeRecord,
)
from trade_ledger_engine.equity_reconciler import extract_initial_balance, reconcile_equity
from trade_ledger_engine.ledger_analysis import compute_ledger_stats, summarize_data_quality
from trade_ledger_engine.results import DataQuality, LedgerStats
from trade_ledger_engine.trade_aggregator import aggregate_trades
from trade_ledger_engine.workbook import (
    LedgerInputError,
    MissingSheetError,
    StatementReadError,
    StatementTables,
    load_statement,
)

__all__ = [
    "CalendarDay",
    "Unparsed",
    "parse_calendar_day",
    "to_calendar_day",
    "to_instant",
    "DailyBucket",
    "EquityPoint",
    "EquitySnapshot",
    "MonthlyBucket",
    "TradeRecord",
    "extract_initial_balance",
    "reconcile_equity",
    "compute_ledger_stats",
    "summarize_data_quality",
    "DataQuality",
    "LedgerStats",
    "aggregate_trades",
    "LedgerInputError",
    "MissingSheetError",
    "StatementReadError",
    "StatementTables",
    "load_statement",
]
