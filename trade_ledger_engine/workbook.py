"""Statement workbook loading.

Boundary layer between an exported broker statement (``.xlsx``) and the pure
ledger pipeline. Sheets become lists of row dicts whose values are strings or
numbers, matching what ``compute_ledger_stats`` expects:

- blank cells become ``""``
- date cells are written back as ``DD/MM/YYYY HH:MM:SS``
- fully blank rows are dropped

The trades sheet is required; the equity sheet is optional.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Union

import numpy as np
import pandas as pd

from trade_ledger_engine import config
from trade_ledger_engine._logging import log_errors
from trade_ledger_engine.constants import STATEMENT_DATETIME_FORMAT


logger = logging.getLogger(__name__)

StatementSource = Union[str, Path, bytes, BinaryIO]


class LedgerInputError(ValueError):
    """Statement could not be turned into ledger rows."""


class MissingSheetError(LedgerInputError):
    def __init__(self, sheet_name: str, available: Optional[List[str]] = None):
        self.sheet_name = sheet_name
        self.available = list(available or [])
        super().__init__(f'Sheet "{sheet_name}" not found in the uploaded file.')


class StatementReadError(LedgerInputError):
    """Workbook is not a readable spreadsheet."""


@dataclass(frozen=True)
class StatementTables:
    trade_rows: List[Dict[str, Any]] = field(default_factory=list)
    equity_rows: List[Dict[str, Any]] = field(default_factory=list)
    trades_sheet: str = ""
    equity_sheet: Optional[str] = None


def _cell(value: Any) -> Any:
    if value is None or value is pd.NaT:
        return ""
    if isinstance(value, (pd.Timestamp, datetime)):
        return value.strftime(STATEMENT_DATETIME_FORMAT)
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time()).strftime(STATEMENT_DATETIME_FORMAT)
    if isinstance(value, np.integer):
        return int(value)
    if isinstance(value, np.floating):
        value = float(value)
    if isinstance(value, float) and np.isnan(value):
        return ""
    if isinstance(value, (str, int, float)):
        return value
    return str(value)


def rows_from_frame(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Convert one sheet frame to ledger rows."""
    if df is None or df.empty:
        return []
    frame = df.dropna(how="all")
    headers = [str(c) for c in frame.columns]
    return [
        {header: _cell(value) for header, value in zip(headers, values)}
        for values in frame.itertuples(index=False, name=None)
    ]


def _open_workbook(source: StatementSource) -> pd.ExcelFile:
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Statement file '{source}' not found")
        handle: Any = path
    elif isinstance(source, (bytes, bytearray)):
        handle = io.BytesIO(source)
    else:
        handle = source

    try:
        return pd.ExcelFile(handle, engine="openpyxl")
    except Exception as exc:
        raise StatementReadError(f"Error processing file: {exc}") from exc


@log_errors("medium")
def load_statement(
    source: StatementSource,
    *,
    trades_sheet: Optional[str] = None,
    equity_sheet: Optional[str] = None,
) -> StatementTables:
    """
    Read trade and equity rows from a statement workbook.

    Raises
    ------
    FileNotFoundError
        ``source`` is a path that does not exist.
    StatementReadError
        The file is not a readable workbook.
    MissingSheetError
        The trades sheet is absent.
    """
    sheets = config.get_statement_sheets()
    trades_sheet = trades_sheet or sheets["trades"]
    equity_sheet = equity_sheet or sheets["equity"]

    with _open_workbook(source) as xls:
        available = [str(name) for name in xls.sheet_names]
        if trades_sheet not in available:
            raise MissingSheetError(trades_sheet, available)

        trade_rows = rows_from_frame(pd.read_excel(xls, sheet_name=trades_sheet, dtype=object))

        if equity_sheet in available:
            equity_rows = rows_from_frame(pd.read_excel(xls, sheet_name=equity_sheet, dtype=object))
            loaded_equity: Optional[str] = equity_sheet
        else:
            logger.warning(
                'Equity sheet "%s" not found; percent changes will be trade-derived only',
                equity_sheet,
            )
            equity_rows = []
            loaded_equity = None

    logger.debug(
        "Loaded %d trade row(s) from %r and %d equity row(s)",
        len(trade_rows),
        trades_sheet,
        len(equity_rows),
    )
    return StatementTables(
        trade_rows=trade_rows,
        equity_rows=equity_rows,
        trades_sheet=trades_sheet,
        equity_sheet=loaded_equity,
    )
