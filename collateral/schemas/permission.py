"""
Permission schemas.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, computed_field

from collateral.kernel.models.permission import PermissionLevel


class PermissionGrantRequest(BaseModel):
    """
    Grant a permission level to a user.

    The level is taken as a raw integer so out-of-range values reach the
    ledger and are rejected as InvalidPermissionLevel.
    """

    level: int


class UserPermission(BaseModel):
    """Effective permission of a user on a document."""

    entity_id: str
    document_id: str
    user: str
    level: PermissionLevel

    @computed_field
    @property
    def level_name(self) -> str:
        return self.level.name


class GrantInfo(BaseModel):
    """Stored permission grant."""

    model_config = ConfigDict(from_attributes=True)

    user: str
    level: PermissionLevel
    granted_by: str
    granted_at: int


class GrantListResponse(BaseModel):
    """Stored grants on a document. The entity owner's implicit access is not listed."""

    entity_id: str
    document_id: str
    items: List[GrantInfo]
