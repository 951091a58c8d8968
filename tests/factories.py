"""Factories for creating test records."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from photostore.models import Album, AlbumType, Asset, ExifInfo, Face, Person, Tag, TagType, User


def _now() -> datetime:
    return datetime.now(timezone.utc)


class UserFactory:
    """Factory for creating User instances."""

    @staticmethod
    def create(**kwargs: Any) -> User:
        user_id = kwargs.get("id", uuid.uuid4())
        username = kwargs.pop("username", f"user-{user_id.hex[:8]}")
        defaults = {
            "id": user_id,
            "username": username,
            "email": f"{username}@example.com",
            "hashed_password": "not-a-real-hash",
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(kwargs)
        return User(**defaults)


class AssetFactory:
    """Factory for creating Asset instances."""

    @staticmethod
    def create(**kwargs: Any) -> Asset:
        asset_id = kwargs.get("id", uuid.uuid4())
        defaults = {
            "id": asset_id,
            "file_hash_sha256": asset_id.hex * 2,
            "original_filename": f"IMG_{asset_id.hex[:6]}.jpg",
            "storage_path": f"originals/{asset_id.hex[:2]}/{asset_id.hex[2:4]}/{asset_id.hex}.jpg",
            "file_size_bytes": 2458624,
            "mime_type": "image/jpeg",
            "asset_type": "image",
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(kwargs)
        return Asset(**defaults)


class ExifInfoFactory:
    """Factory for creating ExifInfo instances."""

    @staticmethod
    def create(**kwargs: Any) -> ExifInfo:
        defaults = {
            "make": "Canon",
            "model": "EOS R6",
            "city": "Lisbon",
            "state": "Lisbon",
            "country": "Portugal",
        }
        defaults.update(kwargs)
        return ExifInfo(**defaults)


class PersonFactory:
    """Factory for creating Person instances."""

    @staticmethod
    def create(**kwargs: Any) -> Person:
        defaults = {
            "id": uuid.uuid4(),
            "name": "Test Person",
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(kwargs)
        return Person(**defaults)


class FaceFactory:
    """Factory for creating Face instances."""

    @staticmethod
    def create(**kwargs: Any) -> Face:
        defaults = {
            "id": uuid.uuid4(),
            "bbox_x": 0.25,
            "bbox_y": 0.25,
            "bbox_width": 0.1,
            "bbox_height": 0.1,
            "confidence": 0.98,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(kwargs)
        return Face(**defaults)


class TagFactory:
    """Factory for creating Tag instances."""

    @staticmethod
    def create(**kwargs: Any) -> Tag:
        defaults = {
            "name": "test-tag",
            "tag_type": TagType.MANUAL,
        }
        defaults.update(kwargs)
        return Tag(**defaults)


class AlbumFactory:
    """Factory for creating Album instances."""

    @staticmethod
    def create(**kwargs: Any) -> Album:
        defaults = {
            "id": uuid.uuid4(),
            "title": "Test Album",
            "album_type": AlbumType.SMART,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(kwargs)
        return Album(**defaults)
