"""Tests for repository tracing spans."""
from __future__ import annotations

import uuid

import pytest
from opentelemetry.trace import StatusCode

from photostore.criteria import RuleKey
from photostore.exceptions import NotFoundError
from photostore.repositories import RuleRepository, TagRepository
from tests.factories import AlbumFactory, AssetFactory, TagFactory


def _by_name(spans):
    return {span.name: span for span in spans.get_finished_spans()}


def test_wrapper_keeps_method_identity():
    assert TagRepository.add_assets.__name__ == "add_assets"
    assert TagRepository.add_assets.__qualname__ == "TagRepository.add_assets"
    assert RuleRepository.remove.__doc__.strip().startswith("Delete a rule.")


@pytest.mark.asyncio
class TestRepositorySpans:
    """Test spans emitted by repository operations."""

    async def test_tag_lookup_emits_span(self, db_session, owner, spans):
        repo = TagRepository(db_session)

        await repo.has_name(owner.id, "pets")

        assert [span.name for span in spans.get_finished_spans()] == ["TagRepository.has_name"]

    async def test_nested_calls_are_child_spans(self, db_session, owner, spans):
        asset = AssetFactory.create(owner_id=owner.id)
        db_session.add(asset)
        await db_session.commit()
        repo = TagRepository(db_session)
        tag = await repo.create(TagFactory.create(owner_id=owner.id, name="trip"))
        spans.clear()

        await repo.add_assets(owner.id, tag.id, [asset.id])

        finished = _by_name(spans)
        parent = finished["TagRepository.add_assets"]
        child = finished["TagRepository.get_by_id_or_fail"]
        assert child.parent.span_id == parent.context.span_id
        assert finished["TagRepository.get_by_id"].parent.span_id == child.context.span_id

    async def test_failure_marks_span_as_error(self, db_session, owner, spans):
        repo = TagRepository(db_session)

        with pytest.raises(NotFoundError):
            await repo.get_by_id_or_fail(owner.id, uuid.uuid4())

        span = _by_name(spans)["TagRepository.get_by_id_or_fail"]
        assert span.status.status_code is StatusCode.ERROR
        assert [event.name for event in span.events] == ["exception"]

    async def test_rule_operations_emit_spans(self, db_session, owner, spans):
        album = AlbumFactory.create(owner_id=owner.id)
        db_session.add(album)
        await db_session.commit()
        repo = RuleRepository(db_session)

        rule = await repo.create(owner.id, album.id, RuleKey.CITY, "Lisbon")
        await repo.update_value(owner.id, rule.id, "Porto")
        await repo.remove(owner.id, rule.id)

        assert set(_by_name(spans)) == {
            "RuleRepository.create",
            "RuleRepository.update_value",
            "RuleRepository.get_by_id",
            "RuleRepository.remove",
        }
