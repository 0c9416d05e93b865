"""
Ledger Constants Module

Shared literals for date handling and percent-change provenance.
"""

# Percent-change sources
# ======================
# "trade"  - bucket profit over the previous bucket's balance
# "equity" - relative change between consecutive realized-equity levels

PCT_SOURCE_TRADE = "trade"
PCT_SOURCE_EQUITY = "equity"

# Date formats
# ============
# Statements write day/month/year, optionally followed by a time of day.

STATEMENT_DATETIME_FORMAT = "%d/%m/%Y %H:%M:%S"
MONTH_KEY_LENGTH = 7  # "YYYY-MM"

# Flag severities, most urgent first
SEVERITY_ORDER = {"error": 0, "warning": 1, "info": 2, "success": 3}
