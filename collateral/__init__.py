"""
Collateral Registry

Ownership, tiered document permissions and an append-only audit trail for
collateral entities.
"""
