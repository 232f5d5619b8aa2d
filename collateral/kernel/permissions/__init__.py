"""
Permission Core - document access evaluation.
"""

from collateral.kernel.permissions.access_evaluator import (
    AccessEvaluator,
    effective_level,
    has_permission,
    is_entity_owner,
)

__all__ = [
    "AccessEvaluator",
    "effective_level",
    "has_permission",
    "is_entity_owner",
]
