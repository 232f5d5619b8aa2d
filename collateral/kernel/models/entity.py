"""
Entity model - a registered collateral-owning organization.
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from collateral.kernel.models.base import Base


class Entity(Base):
    """
    Registered collateral entity.

    The owner is fixed at registration; only `active` may change afterwards.
    """

    __tablename__ = "entities"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    owner: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    registered_at: Mapped[int] = mapped_column(nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Entity {self.id} owner={self.owner}>"
