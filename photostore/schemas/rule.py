from uuid import UUID
from datetime import datetime
from typing import Any

from pydantic import BaseModel, model_validator

from photostore.criteria import RuleGeoValue, RuleKey, parse_rule_value


class RuleCreate(BaseModel):
    """Rule creation request. ``value`` comes back typed for its key."""
    album_id: UUID
    key: RuleKey
    value: Any

    @model_validator(mode="after")
    def check_value(self) -> "RuleCreate":
        self.value = parse_rule_value(self.key, self.value)
        return self


class RuleUpdate(BaseModel):
    """Replacement value; checked against the stored rule's key by the repository."""
    value: Any


class RuleResponse(BaseModel):
    id: UUID
    key: RuleKey
    value: UUID | datetime | RuleGeoValue | str
    owner_id: UUID
    album_id: UUID

    model_config = {"from_attributes": True}
