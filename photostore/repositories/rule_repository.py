"""Rule repository for smart-album criteria."""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from photostore.criteria import RuleKey
from photostore.exceptions import NotFoundError
from photostore.models import Album, Rule
from photostore.tracing import traced

logger = logging.getLogger(__name__)


class RuleRepository:
    """
    Repository for album rules.

    Values are validated against their key when the ``Rule`` is built or its
    value replaced, so an invalid criterion never reaches the session.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    @traced
    async def get_by_id(self, owner_id: UUID, rule_id: UUID) -> Rule | None:
        result = await self.db.execute(
            select(Rule).where(Rule.id == rule_id, Rule.owner_id == owner_id)
        )
        return result.scalar_one_or_none()

    @traced
    async def get_by_album(self, owner_id: UUID, album_id: UUID) -> list[Rule]:
        result = await self.db.execute(
            select(Rule)
            .where(Rule.album_id == album_id, Rule.owner_id == owner_id)
            .order_by(Rule.key)
        )
        return list(result.scalars().all())

    @traced
    async def create(self, owner_id: UUID, album_id: UUID, key: RuleKey | str, value: Any) -> Rule:
        """
        Attach a new rule to one of the owner's albums.

        Raises:
            NotFoundError: If the album does not exist for this owner
            InvalidCriterionValueError: If ``value`` does not fit ``key``
        """
        album_exists = await self.db.scalar(
            select(Album.id).where(Album.id == album_id, Album.owner_id == owner_id)
        )
        if album_exists is None:
            raise NotFoundError(resource="album", identifier=str(album_id))

        rule = Rule(key=key, value=value, owner_id=owner_id, album_id=album_id)
        self.db.add(rule)
        await self.db.commit()

        logger.info(f"Created rule {rule.id} ({rule.key.value}) on album {album_id}")
        return rule

    @traced
    async def update_value(self, owner_id: UUID, rule_id: UUID, value: Any) -> Rule:
        """
        Replace a rule's value. The key stays as it is.

        Raises:
            NotFoundError: If the rule does not exist for this owner
            InvalidCriterionValueError: If ``value`` does not fit the rule's key
        """
        rule = await self.get_by_id(owner_id, rule_id)
        if rule is None:
            raise NotFoundError(resource="rule", identifier=str(rule_id))

        rule.value = value
        await self.db.commit()

        logger.info(f"Updated rule {rule_id} ({rule.key.value})")
        return rule

    @traced
    async def remove(self, owner_id: UUID, rule_id: UUID) -> bool:
        """
        Delete a rule.

        Returns:
            True if deleted, False if it did not exist for this owner
        """
        result = await self.db.execute(
            delete(Rule).where(Rule.id == rule_id, Rule.owner_id == owner_id)
        )
        await self.db.commit()
        deleted = result.rowcount > 0
        if deleted:
            logger.info(f"Removed rule {rule_id}")
        return deleted
