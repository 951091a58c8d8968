"""
User-owned tags and their association with assets.
"""

import uuid
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, String, Table, Enum as SQLEnum, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from photostore.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from photostore.models.asset import Asset
    from photostore.models.user import User


class TagType(str, Enum):
    """Types of tags that can be applied to assets."""
    OBJECT = "object"      # Detected objects (car, dog, tree)
    SCENE = "scene"        # Scene classification (beach, mountain, indoor)
    MANUAL = "manual"      # User-added tags
    COLOR = "color"        # Dominant colors
    TEXT = "text"          # OCR detected text


asset_tags = Table(
    "asset_tags",
    Base.metadata,
    Column(
        "asset_id",
        UUID(as_uuid=True),
        ForeignKey("assets.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        UUID(as_uuid=True),
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class Tag(Base, UUIDMixin, TimestampMixin):
    """
    A label owned by one user.

    Names are unique per owner; only the owner's assets may carry the tag.
    """
    __tablename__ = "tags"

    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    tag_type: Mapped[TagType] = mapped_column(
        SQLEnum(TagType, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=TagType.MANUAL,
    )

    # Relationships
    owner: Mapped["User"] = relationship("User", back_populates="tags")
    assets: Mapped[list["Asset"]] = relationship(
        "Asset",
        secondary=asset_tags,
        back_populates="tags",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("owner_id", "name", name="uq_tag_owner_name"),
    )

    def __repr__(self) -> str:
        return f"<Tag {self.name} ({self.tag_type})>"
