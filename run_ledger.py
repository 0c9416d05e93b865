#!/usr/bin/env python3
# coding: utf-8

# File: run_ledger.py

import argparse
import json
import logging
from typing import Optional, Dict, Union, List, Any

from dotenv import load_dotenv

load_dotenv()

from trade_ledger_engine.config import load_column_overrides
from core.result_objects import LedgerReport
from core.statement_analysis import analyze_statement

"""
Ledger Analysis CLI & API Interface Module

DUAL-MODE entrypoint for statement analysis:

    run_ledger(filepath, *, return_data: bool = False)

CLI Mode (default, return_data=False):
    - Prints the formatted report to stdout
    - Example: python run_ledger.py --statement statement.xlsx

API Mode (return_data=True):
    - Returns the ``LedgerReport`` (or the error dict) for programmatic use
    - Example: report = run_ledger("statement.xlsx", return_data=True)

Both modes run the same ``core.statement_analysis.analyze_statement`` call, so
printed and returned numbers never drift apart.
"""


def run_ledger(
    filepath: str,
    *,
    return_data: bool = False,
    trades_sheet: Optional[str] = None,
    equity_sheet: Optional[str] = None,
    as_json: bool = False,
) -> Union[None, LedgerReport, Dict[str, Any]]:
    """
    Analyze a statement workbook and print or return the ledger report.

    Parameters
    ----------
    filepath : str
        Path to the ``.xlsx`` statement.
    return_data : bool, optional
        If True, return ``LedgerReport`` (or error dict). If False, print.
    trades_sheet, equity_sheet : str, optional
        Sheet name overrides.
    as_json : bool, optional
        In CLI mode, print ``to_api_response()`` as JSON instead of the text
        report.

    Returns
    -------
    LedgerReport, Dict[str, Any] or None
    """
    report = analyze_statement(filepath, trades_sheet=trades_sheet, equity_sheet=equity_sheet)

    if return_data:
        return report
    _print_report(report, as_json=as_json)
    return None


def _print_report(report: Union[LedgerReport, Dict[str, Any]], *, as_json: bool = False) -> None:
    if isinstance(report, dict):
        if as_json:
            print(json.dumps(report, indent=2))
        else:
            print(f"❌ Ledger analysis failed: {report['error']}")
        return
    if as_json:
        print(json.dumps(report.to_api_response(), indent=2))
    else:
        print(report.to_cli_report())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Trade ledger statistics for a broker statement")
    parser.add_argument("--statement", type=str, help="Path to the .xlsx statement")
    parser.add_argument("--trades-sheet", type=str, default=None, help="Closed positions sheet name")
    parser.add_argument("--equity-sheet", type=str, default=None, help="Account activity sheet name")
    parser.add_argument("--columns", type=str, default=None,
                        help="YAML file with trade_columns / equity_columns / statement_sheets overrides")
    parser.add_argument("--json", action="store_true", help="Print the API payload as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.statement:
        parser.print_help()
        return 2

    if args.columns:
        try:
            load_column_overrides(args.columns)
        except (OSError, KeyError, ValueError) as e:
            print(f"❌ Error loading column overrides: {e}")
            return 2

    result = run_ledger(
        args.statement,
        return_data=True,
        trades_sheet=args.trades_sheet,
        equity_sheet=args.equity_sheet,
    )
    _print_report(result, as_json=args.json)
    return 1 if isinstance(result, dict) else 0


if __name__ == "__main__":
    raise SystemExit(main())
