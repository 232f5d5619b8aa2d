"""
HTTP API over the collateral ledger.
"""
