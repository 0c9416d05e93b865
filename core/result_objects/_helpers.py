"""Shared helpers for result object formatting."""

from typing import Dict, List, Optional

import pandas as pd


def _format_df_as_text(df: pd.DataFrame,
                       title: Optional[str] = None,
                       max_rows: int = 12,
                       formats: Optional[Dict[str, str]] = None,
                       row_label_min: int = 10,
                       row_label_max: int = 12,
                       col_min: int = 10,
                       col_max: int = 16) -> List[str]:
    """Format a period-indexed DataFrame as aligned text for CLI.

    Only the most recent ``max_rows`` rows are shown. Numeric cells use the
    per-column format from ``formats`` (``"{:,.2f}"`` by default); other cells
    are printed as-is.

    Returns
    -------
    List[str]
        Lines of text ready for printing.
    """
    lines: List[str] = []
    if title:
        lines.append(f"\n{title}")

    if df is None or getattr(df, 'empty', True):
        lines.append("(empty)")
        return lines

    formats = formats or {}
    sub = df.tail(max_rows)
    cols = [str(c) for c in sub.columns]
    rows = [str(r) for r in sub.index]

    # Auto widths within limits
    max_col_label_len = max((len(c) for c in cols), default=col_min)
    col_w = max(col_min, min(col_max, max_col_label_len))

    max_row_label_len = max((len(r) for r in rows), default=row_label_min)
    row_label_w = max(row_label_min, min(row_label_max, max_row_label_len))

    header = " " * (row_label_w + 2) + " ".join(c[:col_w].rjust(col_w) for c in cols)
    lines.append(header)

    for label, (_, record) in zip(rows, sub.iterrows()):
        cells: List[str] = []
        for col, value in zip(cols, record.tolist()):
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                cell = formats.get(col, "{:,.2f}").format(value)
            else:
                cell = str(value)
            cells.append(cell[:col_w].rjust(col_w))
        lines.append(f"{label[:row_label_w].ljust(row_label_w)}  " + " ".join(cells))

    if df.shape[0] > max_rows:
        lines.append(f"… showing last {max_rows} of {df.shape[0]} rows")

    return lines
