"""
Document schemas.

The kernel works with raw 32-byte digests; over HTTP the digest travels as
64 hex characters.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from collateral.kernel.models.document import CONTENT_HASH_SIZE
from collateral.schemas.types import AsciiName, ContentHash, Identifier, UnicodeText


class DocumentFields(BaseModel):
    """Mutable document fields supplied on add and update."""

    name: AsciiName
    description: UnicodeText = ""
    content_hash: ContentHash
    doc_type: Identifier


class DocumentPayload(BaseModel):
    """Document fields as sent over HTTP."""

    name: AsciiName
    description: UnicodeText = ""
    content_hash: str = Field(
        pattern=r"^[0-9a-fA-F]+$",
        min_length=CONTENT_HASH_SIZE * 2,
        max_length=CONTENT_HASH_SIZE * 2,
        description="SHA-256 digest of the off-system document, hex encoded",
    )
    doc_type: Identifier

    def to_fields(self) -> DocumentFields:
        return DocumentFields(
            name=self.name,
            description=self.description,
            content_hash=bytes.fromhex(self.content_hash),
            doc_type=self.doc_type,
        )


class DocumentCreate(DocumentPayload):
    """Add a document under an entity."""

    document_id: Identifier


class DocumentInfo(BaseModel):
    """Document record as returned by read-only lookups."""

    model_config = ConfigDict(from_attributes=True)

    entity_id: str
    document_id: str
    name: str
    description: str
    content_hash: bytes
    doc_type: str
    created_at: int
    last_modified_at: int
    version: int
    active: bool

    @field_serializer("content_hash")
    def _hex_digest(self, value: bytes) -> str:
        return value.hex()


class DocumentListResponse(BaseModel):
    """Documents registered under an entity."""

    entity_id: str
    items: List[DocumentInfo]
