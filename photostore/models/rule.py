"""
Smart-album rule records.

The ``value`` column is loosely typed JSON; the Python attribute is not. Reads
decode through the key's value type and writes validate before anything
reaches the session.
"""

import uuid
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, ForeignKey, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from photostore.criteria import RuleKey, RuleValue, RuleValueType, dump_rule_value, parse_rule_value, value_type_for
from photostore.models.base import Base, UUIDMixin

if TYPE_CHECKING:
    from photostore.models.album import Album
    from photostore.models.user import User


class Rule(Base, UUIDMixin):
    __tablename__ = "rules"

    key: Mapped[RuleKey] = mapped_column(
        SQLEnum(RuleKey, name="rule_key", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )

    # Encoded form, see photostore.criteria.dump_rule_value
    stored_value: Mapped[Any] = mapped_column(
        "value",
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
    )

    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    album_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("albums.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    owner: Mapped["User"] = relationship("User")
    album: Mapped["Album"] = relationship("Album", back_populates="rules")

    def __init__(self, *, key: RuleKey | str, value: Any, **kwargs: Any):
        super().__init__(key=RuleKey(key), **kwargs)
        self.value = value

    @validates("key")
    def _validate_key(self, _attr: str, key: RuleKey | str) -> RuleKey:
        key = RuleKey(key)
        if self.key is not None and self.key != key:
            raise ValueError("Rule key cannot change once set; create a new rule instead")
        return key

    @property
    def value_type(self) -> RuleValueType:
        return value_type_for(self.key)

    @property
    def value(self) -> RuleValue:
        return parse_rule_value(self.key, self.stored_value)

    @value.setter
    def value(self, value: Any) -> None:
        self.stored_value = dump_rule_value(self.key, value)

    def __repr__(self) -> str:
        return f"<Rule {self.key.value}={self.stored_value!r} album={self.album_id}>"
