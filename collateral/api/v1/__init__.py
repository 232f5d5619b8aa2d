"""
API v1 routes.
"""

from fastapi import APIRouter

from collateral.api.v1 import entities, documents, permissions, audit

router = APIRouter()

router.include_router(entities.router, prefix="/entities", tags=["Entities"])
router.include_router(documents.router, prefix="/entities", tags=["Documents"])
router.include_router(permissions.router, prefix="/entities", tags=["Permissions"])
router.include_router(audit.router, prefix="/entities", tags=["Audit"])
