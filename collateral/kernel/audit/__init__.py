"""
Audit Log - append-only, per-document numbered activity trail.
"""

from collateral.kernel.audit.audit_log import AuditLog, FIRST_LOG_ID

__all__ = [
    "AuditLog",
    "FIRST_LOG_ID",
]
