"""
Entity schemas.
"""

from pydantic import BaseModel, ConfigDict

from collateral.schemas.types import AsciiName, Identifier


class EntityRegister(BaseModel):
    """Register a new collateral entity; the caller becomes its owner."""

    entity_id: Identifier
    name: AsciiName


class EntityInfo(BaseModel):
    """Entity record as returned by read-only lookups."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    owner: str
    name: str
    registered_at: int
    active: bool
