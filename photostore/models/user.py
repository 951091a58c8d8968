from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from photostore.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from photostore.models.asset import Asset
    from photostore.models.album import Album
    from photostore.models.face import Person
    from photostore.models.tag import Tag


class User(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "users"

    # Authentication (credentials are managed by the surrounding service)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    # Profile
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    is_admin: Mapped[bool] = mapped_column(Boolean, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Relationships
    assets: Mapped[list["Asset"]] = relationship("Asset", back_populates="owner")
    albums: Mapped[list["Album"]] = relationship("Album", back_populates="owner")
    people: Mapped[list["Person"]] = relationship("Person", back_populates="owner")
    tags: Mapped[list["Tag"]] = relationship("Tag", back_populates="owner")

    def __repr__(self) -> str:
        return f"<User {self.username}>"
