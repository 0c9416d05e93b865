from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
import pytest

from trade_ledger_engine import config


_CONFIG_KEYS = (
    "TRADE_COLUMNS",
    "EQUITY_COLUMNS",
    "STATEMENT_SHEETS",
    "ANALYSIS_DEFAULTS",
    "FLAG_THRESHOLDS",
)


@pytest.fixture(autouse=True)
def restore_config():
    saved = {key: copy.deepcopy(getattr(config, key)) for key in _CONFIG_KEYS}
    yield
    config.configure(**saved)


def trade(profit: Any, close: Any = "") -> Dict[str, Any]:
    return {"Position ID": 1, "Profit(USD)": profit, "Close Date": close}


def snapshot(date: Any, realized_equity: Any, balance: Any = 1000) -> Dict[str, Any]:
    return {"Date": date, "Balance": balance, "Realized Equity": realized_equity, "Type": "Deposit"}


@pytest.fixture
def scenario_a_trades() -> List[Dict[str, Any]]:
    return [
        trade(100, "01/01/2024 10:00:00"),
        trade(-50, "01/01/2024 12:00:00"),
        trade(20, "02/01/2024 09:00:00"),
    ]


@pytest.fixture
def scenario_c_equity() -> List[Dict[str, Any]]:
    return [
        snapshot("01/01/2024 00:00:00", 1000, balance=1000),
        snapshot("02/01/2024 00:00:00", 1100, balance=1000),
    ]


def write_statement(
    path: Path,
    trades: List[Dict[str, Any]],
    equity: Optional[List[Dict[str, Any]]] = None,
    *,
    trades_sheet: str = "Closed Positions",
    equity_sheet: str = "Account Activity",
) -> Path:
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(trades).to_excel(writer, sheet_name=trades_sheet, index=False)
        if equity is not None:
            pd.DataFrame(equity).to_excel(writer, sheet_name=equity_sheet, index=False)
    return path


@pytest.fixture
def statement_path(tmp_path, scenario_a_trades, scenario_c_equity) -> Path:
    return write_statement(tmp_path / "statement.xlsx", scenario_a_trades, scenario_c_equity)
