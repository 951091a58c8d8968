import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, Boolean, DateTime, Float, Integer, String, Text, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from photostore.models.base import Base, TimestampMixin, UUIDMixin
from photostore.models.tag import asset_tags

if TYPE_CHECKING:
    from photostore.models.face import Face
    from photostore.models.tag import Tag
    from photostore.models.user import User


class Asset(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "assets"

    # Owner
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # File identification
    file_hash_sha256: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    original_filename: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Storage paths
    storage_path: Mapped[str] = mapped_column(Text, nullable=False)
    thumb_path: Mapped[str | None] = mapped_column(Text, nullable=True)

    # File metadata
    file_size_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    mime_type: Mapped[str] = mapped_column(String(100), nullable=False)
    asset_type: Mapped[str] = mapped_column(String(20), nullable=False)  # 'image' or 'video'
    width: Mapped[int | None] = mapped_column(Integer, nullable=True)
    height: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Temporal data
    captured_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Location data
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    city: Mapped[str | None] = mapped_column(String(255), nullable=True)
    country: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Soft delete
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Flags
    is_favorite: Mapped[bool] = mapped_column(Boolean, default=False)

    # Relationships
    owner: Mapped["User"] = relationship("User", back_populates="assets")
    exif_info: Mapped[Optional["ExifInfo"]] = relationship(
        "ExifInfo",
        back_populates="asset",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    tags: Mapped[list["Tag"]] = relationship(
        "Tag",
        secondary=asset_tags,
        back_populates="assets",
        passive_deletes=True,
    )
    faces: Mapped[list["Face"]] = relationship(
        "Face",
        back_populates="asset",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Asset {self.id} ({self.original_filename})>"


class ExifInfo(Base):
    """
    Photo metadata extracted from the original file.

    One row per asset; the asset id doubles as the primary key.
    """
    __tablename__ = "exif_info"

    asset_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("assets.id", ondelete="CASCADE"),
        primary_key=True,
    )

    # Camera
    make: Mapped[str | None] = mapped_column(String(255), nullable=True)
    model: Mapped[str | None] = mapped_column(String(255), nullable=True)
    lens_model: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Exposure
    f_number: Mapped[float | None] = mapped_column(Float, nullable=True)
    focal_length: Mapped[float | None] = mapped_column(Float, nullable=True)
    iso: Mapped[int | None] = mapped_column(Integer, nullable=True)
    exposure_time: Mapped[str | None] = mapped_column(String(32), nullable=True)

    date_time_original: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # GPS and reverse geocoding
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    city: Mapped[str | None] = mapped_column(String(255), nullable=True)
    state: Mapped[str | None] = mapped_column(String(255), nullable=True)
    country: Mapped[str | None] = mapped_column(String(255), nullable=True)

    asset: Mapped["Asset"] = relationship("Asset", back_populates="exif_info")

    def __repr__(self) -> str:
        return f"<ExifInfo asset={self.asset_id} {self.make} {self.model}>"
