"""
Core service layer for ledger analysis: statement analysis entrypoint,
result objects and interpretive flags.
"""
