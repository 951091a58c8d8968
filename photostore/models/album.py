"""
Album models.
"""

import uuid
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from photostore.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from photostore.models.rule import Rule
    from photostore.models.user import User


class AlbumType(str, Enum):
    """Types of albums."""
    STANDARD = "standard"  # Manual album
    SMART = "smart"        # Membership defined by rules


class Album(Base, UUIDMixin, TimestampMixin):
    """
    User-created or smart album.
    """
    __tablename__ = "albums"

    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Album details
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    album_type: Mapped[AlbumType] = mapped_column(
        SQLEnum(AlbumType, values_callable=lambda e: [m.value for m in e]),
        default=AlbumType.STANDARD,
    )

    # Relationships
    owner: Mapped["User"] = relationship("User", back_populates="albums")
    rules: Mapped[list["Rule"]] = relationship(
        "Rule",
        back_populates="album",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Album {self.title} ({self.album_type})>"
