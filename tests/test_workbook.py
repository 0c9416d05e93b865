from __future__ import annotations

import pandas as pd
import pytest

from conftest import snapshot, trade, write_statement
from trade_ledger_engine import config
from trade_ledger_engine.workbook import (
    LedgerInputError,
    MissingSheetError,
    StatementReadError,
    load_statement,
    rows_from_frame,
)


def test_loads_both_sheets(statement_path):
    tables = load_statement(statement_path)

    assert tables.trades_sheet == "Closed Positions"
    assert tables.equity_sheet == "Account Activity"
    assert len(tables.trade_rows) == 3
    assert tables.trade_rows[0]["Profit(USD)"] == 100
    assert tables.trade_rows[0]["Close Date"] == "01/01/2024 10:00:00"
    assert tables.equity_rows[1]["Realized Equity"] == 1100
    assert tables.equity_rows[1]["Date"] == "02/01/2024 00:00:00"


def test_blank_cells_become_empty_strings(tmp_path):
    path = write_statement(
        tmp_path / "blank.xlsx",
        [trade(None, "01/01/2024 10:00:00"), trade(5, "01/01/2024 11:00:00")],
    )
    tables = load_statement(path)

    assert tables.trade_rows[0]["Profit(USD)"] == ""
    assert tables.trade_rows[1]["Profit(USD)"] == 5


def test_datetime_cells_are_rendered_day_first(tmp_path):
    path = write_statement(
        tmp_path / "dates.xlsx",
        [trade(1, pd.Timestamp("2024-01-02 09:30:00"))],
        [snapshot(pd.Timestamp("2024-01-02 00:00:00"), 1000)],
    )
    tables = load_statement(path)

    assert tables.trade_rows[0]["Close Date"] == "02/01/2024 09:30:00"
    assert tables.equity_rows[0]["Date"] == "02/01/2024 00:00:00"


def test_missing_trades_sheet(tmp_path):
    path = write_statement(tmp_path / "wrong.xlsx", [trade(1)], trades_sheet="Trades")

    with pytest.raises(MissingSheetError) as exc_info:
        load_statement(path)

    assert str(exc_info.value) == 'Sheet "Closed Positions" not found in the uploaded file.'
    assert exc_info.value.available == ["Trades"]
    assert isinstance(exc_info.value, LedgerInputError)


def test_missing_equity_sheet_is_optional(tmp_path, caplog):
    path = write_statement(tmp_path / "trades_only.xlsx", [trade(1, "01/01/2024")])

    with caplog.at_level("WARNING", logger="trade_ledger_engine"):
        tables = load_statement(path)

    assert tables.equity_rows == []
    assert tables.equity_sheet is None
    assert "Account Activity" in caplog.text


def test_sheet_name_overrides(tmp_path):
    path = write_statement(
        tmp_path / "custom.xlsx",
        [trade(3, "01/01/2024")],
        [snapshot("01/01/2024 00:00:00", 10)],
        trades_sheet="Trades",
        equity_sheet="Equity",
    )
    tables = load_statement(path, trades_sheet="Trades", equity_sheet="Equity")
    assert len(tables.trade_rows) == 1
    assert len(tables.equity_rows) == 1

    config.configure(STATEMENT_SHEETS={"trades": "Trades", "equity": "Equity"})
    assert load_statement(path).equity_sheet == "Equity"


def test_bytes_source(statement_path):
    tables = load_statement(statement_path.read_bytes())
    assert len(tables.trade_rows) == 3


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_statement(tmp_path / "nope.xlsx")


def test_unreadable_file(tmp_path):
    path = tmp_path / "junk.xlsx"
    path.write_text("this is not a workbook")

    with pytest.raises(StatementReadError):
        load_statement(path)


def test_rows_from_frame_drops_blank_rows():
    df = pd.DataFrame(
        {"Profit(USD)": [1.5, None, None], "Close Date": ["01/01/2024", None, "02/01/2024"]}
    )
    assert rows_from_frame(df) == [
        {"Profit(USD)": 1.5, "Close Date": "01/01/2024"},
        {"Profit(USD)": "", "Close Date": "02/01/2024"},
    ]


def test_rows_from_empty_frame():
    assert rows_from_frame(pd.DataFrame()) == []
