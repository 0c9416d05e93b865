"""Result objects for structured service layer responses.

    from core.result_objects import LedgerReport
"""

from ._helpers import _format_df_as_text
from .ledger import LedgerReport

__all__ = [
    "LedgerReport",
]
