"""
Face detection and recognition records.

Faces are attached to assets; people are owner-scoped clusters of faces.
"""

import uuid

from sqlalchemy import Float, ForeignKey, String, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from photostore.models.base import Base, TimestampMixin, UUIDMixin


class Face(Base, UUIDMixin, TimestampMixin):
    """
    Detected face in an asset.

    Bounding box coordinates are normalized to 0-1.
    """
    __tablename__ = "faces"

    # Parent asset
    asset_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("assets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Assigned person (nullable until clustered/assigned)
    person_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("people.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    bbox_x: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    bbox_y: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    bbox_width: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    bbox_height: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    # Detection confidence
    confidence: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)

    # Relationships
    asset = relationship("Asset", back_populates="faces")
    person = relationship("Person", back_populates="faces")

    __table_args__ = (
        Index("ix_faces_person_asset", "person_id", "asset_id"),
    )

    def __repr__(self) -> str:
        return f"<Face {self.id} asset={self.asset_id} person={self.person_id}>"


class Person(Base, UUIDMixin, TimestampMixin):
    """
    A recognized person (cluster of faces).

    Rules keyed on ``person`` reference this table by id.
    """
    __tablename__ = "people"

    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Display name (user-assigned)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Relationships
    owner = relationship("User", back_populates="people")
    faces = relationship("Face", back_populates="person", foreign_keys=[Face.person_id])

    def __repr__(self) -> str:
        return f"<Person {self.id} name={self.name}>"
