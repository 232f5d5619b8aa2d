"""
Kernel - entity registry, document store, permission table, audit log and
the ledger that exposes them as operations.
"""
