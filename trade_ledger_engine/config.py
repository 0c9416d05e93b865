"""Configuration surface for trade_ledger_engine.

Defaults come from environment variables; ``configure()`` and
``load_column_overrides()`` replace them programmatically.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


_DEFAULTS: dict[str, Any] = {
    "TRADE_COLUMNS": {
        "profit": os.getenv("LEDGER_TRADE_PROFIT_COLUMN", "Profit(USD)"),
        "close_date": os.getenv("LEDGER_TRADE_CLOSE_DATE_COLUMN", "Close Date"),
    },
    "EQUITY_COLUMNS": {
        "date": os.getenv("LEDGER_EQUITY_DATE_COLUMN", "Date"),
        "balance": os.getenv("LEDGER_EQUITY_BALANCE_COLUMN", "Balance"),
        "realized_equity": os.getenv("LEDGER_EQUITY_REALIZED_COLUMN", "Realized Equity"),
    },
    "STATEMENT_SHEETS": {
        "trades": os.getenv("LEDGER_TRADES_SHEET", "Closed Positions"),
        "equity": os.getenv("LEDGER_EQUITY_SHEET", "Account Activity"),
    },
    "ANALYSIS_DEFAULTS": {
        "days_per_year": _env_int("LEDGER_DAYS_PER_YEAR", 365),
    },
    "FLAG_THRESHOLDS": {
        "low_win_rate_pct": _env_float("LEDGER_LOW_WIN_RATE_PCT", 40.0),
        "invalid_row_share_pct": _env_float("LEDGER_INVALID_ROW_SHARE_PCT", 5.0),
    },
}


TRADE_COLUMNS = _DEFAULTS["TRADE_COLUMNS"]
EQUITY_COLUMNS = _DEFAULTS["EQUITY_COLUMNS"]
STATEMENT_SHEETS = _DEFAULTS["STATEMENT_SHEETS"]
ANALYSIS_DEFAULTS = _DEFAULTS["ANALYSIS_DEFAULTS"]
FLAG_THRESHOLDS = _DEFAULTS["FLAG_THRESHOLDS"]


def configure(**overrides: Any) -> None:
    """Programmatically override package configuration values."""
    globals_dict = globals()
    for key, value in overrides.items():
        if key not in _DEFAULTS:
            raise KeyError(f"Unknown config key: {key}")
        globals_dict[key] = value


def get_trade_columns() -> dict[str, str]:
    return dict(TRADE_COLUMNS)


def get_equity_columns() -> dict[str, str]:
    return dict(EQUITY_COLUMNS)


def get_statement_sheets() -> dict[str, str]:
    return dict(STATEMENT_SHEETS)


_OVERRIDE_SECTIONS = {
    "trade_columns": "TRADE_COLUMNS",
    "equity_columns": "EQUITY_COLUMNS",
    "statement_sheets": "STATEMENT_SHEETS",
}


def load_column_overrides(path: str | Path) -> dict[str, dict[str, str]]:
    """Apply column/sheet name overrides from a YAML file.

    The file may contain any of ``trade_columns``, ``equity_columns`` and
    ``statement_sheets``; each maps logical field names to the header used in
    the statement. Keys not known to the section raise ``KeyError``.

    Returns the sections that were applied.
    """
    with open(path, "r") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid column override file {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"Column override file must contain a mapping: {path}")

    applied: dict[str, dict[str, str]] = {}
    for section, config_key in _OVERRIDE_SECTIONS.items():
        values = raw.get(section)
        if not values:
            continue
        if not isinstance(values, dict):
            raise ValueError(f"Section {section!r} must be a mapping in {path}")
        current = dict(globals()[config_key])
        for field_name, header in values.items():
            if field_name not in current:
                raise KeyError(f"Unknown {section} field: {field_name}")
            current[field_name] = str(header)
        configure(**{config_key: current})
        applied[section] = current
    return applied
