"""
Tag repository.

Every read and write is scoped to an owner at the query itself; a tag or asset
belonging to someone else is indistinguishable from one that does not exist.
"""

import logging
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any
from uuid import UUID

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from photostore.exceptions import AssetNotFoundError, DuplicateNameError, NotFoundError
from photostore.models import Asset, Face, Tag, asset_tags
from photostore.tracing import traced

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"name", "tag_type"})


class BatchMode(str, Enum):
    """Transaction boundary for add_assets/remove_assets."""
    PER_ITEM = "per_item"  # Commit after each asset; a failure keeps earlier items
    ATOMIC = "atomic"      # Commit once at the end; a failure applies nothing


class TagRepository:
    """Repository for user-owned tags and tag membership of assets."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @traced
    async def get_by_id(self, owner_id: UUID, tag_id: UUID) -> Tag | None:
        """
        Get a tag owned by ``owner_id``, with its owner loaded.

        Returns:
            Tag or None if it does not exist for this owner
        """
        result = await self.db.execute(
            select(Tag)
            .where(Tag.id == tag_id, Tag.owner_id == owner_id)
            .options(selectinload(Tag.owner))
        )
        return result.scalar_one_or_none()

    @traced
    async def get_by_id_or_fail(self, owner_id: UUID, tag_id: UUID) -> Tag:
        """
        Raises:
            NotFoundError: If the tag does not exist for this owner
        """
        tag = await self.get_by_id(owner_id, tag_id)
        if tag is None:
            raise NotFoundError(resource="tag", identifier=str(tag_id))
        return tag

    @traced
    async def get_all(self, owner_id: UUID) -> list[Tag]:
        result = await self.db.execute(
            select(Tag)
            .where(Tag.owner_id == owner_id)
            .order_by(Tag.created_at, Tag.name)
        )
        return list(result.scalars().all())

    @traced
    async def create(self, tag: Tag) -> Tag:
        """
        Persist a new tag and return it re-read with ``owner`` populated.

        Raises:
            DuplicateNameError: If the owner already has a tag with this name
        """
        owner_id, name = tag.owner_id, tag.name
        self.db.add(tag)
        try:
            await self.db.flush()
            tag_id = tag.id
            await self.db.commit()
        except IntegrityError as exc:
            await self._raise_for_integrity_error(exc, owner_id, name)

        logger.info(f"Created tag {tag_id} '{name}' for user {owner_id}")
        return await self._reread(owner_id, tag_id)

    @traced
    async def update(self, owner_id: UUID, tag_id: UUID, values: dict[str, Any]) -> Tag:
        """
        Merge ``values`` into an existing tag and return it re-read.

        Args:
            owner_id: Owner the tag must belong to
            tag_id: Tag UUID
            values: Fields to change; only ``name`` and ``tag_type`` are accepted

        Raises:
            ValueError: If ``values`` names a field that cannot be updated
            NotFoundError: If the tag does not exist for this owner
            DuplicateNameError: If the new name is already used by the owner
        """
        unknown = set(values) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update tag fields: {', '.join(sorted(unknown))}")

        tag = await self.get_by_id_or_fail(owner_id, tag_id)
        name = values.get("name", tag.name)
        for field, value in values.items():
            setattr(tag, field, value)

        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self._raise_for_integrity_error(exc, owner_id, name)

        logger.info(f"Updated tag {tag_id} for user {owner_id}: {sorted(values)}")
        return await self._reread(owner_id, tag_id)

    @traced
    async def remove(self, tag: Tag) -> None:
        """Delete a tag. Its asset associations go with it; the assets stay."""
        tag_id, owner_id = tag.id, tag.owner_id
        await self.db.execute(delete(asset_tags).where(asset_tags.c.tag_id == tag_id))
        await self.db.execute(delete(Tag).where(Tag.id == tag_id, Tag.owner_id == owner_id))
        await self.db.commit()
        logger.info(f"Removed tag {tag_id} for user {owner_id}")

    @traced
    async def get_assets(self, owner_id: UUID, tag_id: UUID) -> list[Asset]:
        """
        Get the owner's assets carrying a tag, oldest first.

        Each asset comes with its exif info, all of its tags and its faces
        (each face with its person) loaded.
        """
        result = await self.db.execute(
            select(Asset)
            .join(Asset.tags)
            .where(
                Tag.id == tag_id,
                Tag.owner_id == owner_id,
                Asset.owner_id == owner_id,
            )
            .options(
                selectinload(Asset.exif_info),
                selectinload(Asset.tags),
                selectinload(Asset.faces).selectinload(Face.person),
            )
            .order_by(Asset.created_at.asc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    @traced
    async def add_assets(
        self,
        owner_id: UUID,
        tag_id: UUID,
        asset_ids: Iterable[UUID],
        mode: BatchMode = BatchMode.PER_ITEM,
    ) -> None:
        """
        Tag each of ``asset_ids``. Assets already carrying the tag are left alone.

        Raises:
            NotFoundError: If the tag does not exist for this owner
            AssetNotFoundError: For the first asset id not owned by ``owner_id``.
                Under ``BatchMode.PER_ITEM`` assets before it stay tagged.
        """
        tag = await self.get_by_id_or_fail(owner_id, tag_id)

        def attach(asset: Asset) -> None:
            if any(existing.id == tag_id for existing in asset.tags):
                logger.debug(f"Asset {asset.id} already tagged {tag_id}")
                return
            asset.tags.append(tag)

        await self._apply_to_assets(owner_id, asset_ids, mode, attach)
        logger.info(f"Added assets to tag {tag_id} for user {owner_id} ({mode.value})")

    @traced
    async def remove_assets(
        self,
        owner_id: UUID,
        tag_id: UUID,
        asset_ids: Iterable[UUID],
        mode: BatchMode = BatchMode.PER_ITEM,
    ) -> None:
        """
        Untag each of ``asset_ids``. Assets without the tag are left alone.

        Raises:
            NotFoundError: If the tag does not exist for this owner
            AssetNotFoundError: For the first asset id not owned by ``owner_id``.
                Under ``BatchMode.PER_ITEM`` assets before it stay untagged.
        """
        await self.get_by_id_or_fail(owner_id, tag_id)

        def detach(asset: Asset) -> None:
            remaining = [existing for existing in asset.tags if existing.id != tag_id]
            if len(remaining) == len(asset.tags):
                logger.debug(f"Asset {asset.id} not tagged {tag_id}")
                return
            asset.tags = remaining

        await self._apply_to_assets(owner_id, asset_ids, mode, detach)
        logger.info(f"Removed assets from tag {tag_id} for user {owner_id} ({mode.value})")

    @traced
    async def has_asset(self, owner_id: UUID, tag_id: UUID, asset_id: UUID) -> bool:
        stmt = select(
            exists().where(
                Tag.id == tag_id,
                Tag.owner_id == owner_id,
                Tag.assets.any(Asset.id == asset_id),
            )
        )
        return bool(await self.db.scalar(stmt))

    @traced
    async def has_name(self, owner_id: UUID, name: str) -> bool:
        stmt = select(exists().where(Tag.owner_id == owner_id, Tag.name == name))
        return bool(await self.db.scalar(stmt))

    async def _reread(self, owner_id: UUID, tag_id: UUID) -> Tag:
        # The write path does not load relations, so fetch the row again with
        # owner populated, overwriting whatever the identity map holds.
        result = await self.db.execute(
            select(Tag)
            .where(Tag.id == tag_id, Tag.owner_id == owner_id)
            .options(selectinload(Tag.owner))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def _get_owned_asset(self, owner_id: UUID, asset_id: UUID) -> Asset | None:
        result = await self.db.execute(
            select(Asset)
            .where(Asset.id == asset_id, Asset.owner_id == owner_id)
            .options(selectinload(Asset.tags))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _apply_to_assets(
        self,
        owner_id: UUID,
        asset_ids: Iterable[UUID],
        mode: BatchMode,
        change: Callable[[Asset], None],
    ) -> None:
        if mode is BatchMode.ATOMIC:
            try:
                for asset_id in asset_ids:
                    asset = await self._get_owned_asset(owner_id, asset_id)
                    if asset is None:
                        raise AssetNotFoundError(asset_id)
                    change(asset)
                await self.db.commit()
            except Exception as exc:
                logger.warning(f"Rolling back tag batch for user {owner_id}: {exc}")
                await self.db.rollback()
                raise
            return

        for asset_id in asset_ids:
            asset = await self._get_owned_asset(owner_id, asset_id)
            if asset is None:
                logger.warning(f"Asset {asset_id} not found for user {owner_id}; stopping tag batch")
                raise AssetNotFoundError(asset_id)
            change(asset)
            await self.db.commit()

    async def _raise_for_integrity_error(self, exc: IntegrityError, owner_id: UUID, name: str):
        await self.db.rollback()
        if await self.has_name(owner_id, name):
            logger.warning(f"Tag name '{name}' already exists for user {owner_id}")
            raise DuplicateNameError(resource="tag", name=name) from exc
        raise exc
