"""Repository layer for database operations."""
from photostore.repositories.rule_repository import RuleRepository
from photostore.repositories.tag_repository import BatchMode, TagRepository

__all__ = [
    "BatchMode",
    "RuleRepository",
    "TagRepository",
]
