"""
Document model - metadata and digest of an off-system collateral artifact.
"""

from sqlalchemy import Boolean, ForeignKey, Integer, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from collateral.kernel.models.base import Base

CONTENT_HASH_SIZE = 32


class Document(Base):
    """
    Versioned document registered under an entity.

    Deletion is soft: `active` flips to False and the row is kept.
    """

    __tablename__ = "documents"

    entity_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("entities.id"),
        primary_key=True,
    )
    document_id: Mapped[str] = mapped_column(String(64), primary_key=True)

    name: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    content_hash: Mapped[bytes] = mapped_column(
        LargeBinary(CONTENT_HASH_SIZE),
        nullable=False,
    )
    doc_type: Mapped[str] = mapped_column(String(64), nullable=False)

    created_at: Mapped[int] = mapped_column(nullable=False)
    last_modified_at: Mapped[int] = mapped_column(nullable=False)
    version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Document {self.entity_id}/{self.document_id} v{self.version}>"
