from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from photostore.models.tag import TagType


class TagCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    tag_type: TagType = TagType.MANUAL


class TagUpdate(BaseModel):
    """Partial update; only fields explicitly set are applied."""
    name: str | None = Field(default=None, min_length=1, max_length=100)
    tag_type: TagType | None = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class TagResponse(BaseModel):
    id: UUID
    name: str
    tag_type: TagType
    owner_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TagAssetsRequest(BaseModel):
    """Assets to attach to or detach from a tag."""
    asset_ids: list[UUID] = Field(min_length=1)
