from photostore.models.base import Base
from photostore.models.user import User
from photostore.models.tag import Tag, TagType, asset_tags
from photostore.models.asset import Asset, ExifInfo
from photostore.models.face import Face, Person
from photostore.models.album import Album, AlbumType
from photostore.models.rule import Rule

__all__ = [
    "Base",
    "User",
    "Asset",
    "ExifInfo",
    "Face",
    "Person",
    "Tag",
    "TagType",
    "asset_tags",
    "Album",
    "AlbumType",
    "Rule",
]
