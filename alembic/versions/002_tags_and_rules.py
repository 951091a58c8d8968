"""Tags, album rules, faces and exif info

Revision ID: 002_tags_and_rules
Revises: 001_initial
Create Date: 2025-02-03

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "002_tags_and_rules"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

RULE_KEYS = ("person", "taken-after", "city", "state", "country", "make", "model", "location")
TAG_TYPES = ("object", "scene", "manual", "color", "text")
ALBUM_TYPES = ("standard", "smart")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _owner_column() -> sa.Column:
    return sa.Column(
        "owner_id",
        postgresql.UUID(as_uuid=True),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


def upgrade() -> None:
    op.create_table(
        "exif_info",
        sa.Column(
            "asset_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("assets.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("make", sa.String(255), nullable=True),
        sa.Column("model", sa.String(255), nullable=True),
        sa.Column("lens_model", sa.String(255), nullable=True),
        sa.Column("f_number", sa.Float(), nullable=True),
        sa.Column("focal_length", sa.Float(), nullable=True),
        sa.Column("iso", sa.Integer(), nullable=True),
        sa.Column("exposure_time", sa.String(32), nullable=True),
        sa.Column("date_time_original", sa.DateTime(timezone=True), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("city", sa.String(255), nullable=True),
        sa.Column("state", sa.String(255), nullable=True),
        sa.Column("country", sa.String(255), nullable=True),
    )

    op.create_table(
        "people",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _owner_column(),
        sa.Column("name", sa.String(255), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "faces",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "asset_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("assets.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "person_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("people.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
        sa.Column("bbox_x", sa.Float(), nullable=False),
        sa.Column("bbox_y", sa.Float(), nullable=False),
        sa.Column("bbox_width", sa.Float(), nullable=False),
        sa.Column("bbox_height", sa.Float(), nullable=False),
        sa.Column("confidence", sa.Float(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_faces_person_asset", "faces", ["person_id", "asset_id"])

    op.create_table(
        "albums",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _owner_column(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("album_type", sa.Enum(*ALBUM_TYPES, name="albumtype"), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "rules",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("key", sa.Enum(*RULE_KEYS, name="rule_key"), nullable=False),
        sa.Column("value", postgresql.JSONB(), nullable=False),
        _owner_column(),
        sa.Column(
            "album_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("albums.id", ondelete="CASCADE", onupdate="CASCADE"),
            nullable=False,
            index=True,
        ),
    )

    op.create_table(
        "tags",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _owner_column(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("tag_type", sa.Enum(*TAG_TYPES, name="tagtype"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("owner_id", "name", name="uq_tag_owner_name"),
    )

    op.create_table(
        "asset_tags",
        sa.Column(
            "asset_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("assets.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "tag_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("tags.id", ondelete="CASCADE"),
            primary_key=True,
            index=True,
        ),
    )


def downgrade() -> None:
    op.drop_table("asset_tags")
    op.drop_table("tags")
    op.drop_table("rules")
    op.drop_table("albums")
    op.drop_table("faces")
    op.drop_table("people")
    op.drop_table("exif_info")
    sa.Enum(name="tagtype").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="rule_key").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="albumtype").drop(op.get_bind(), checkfirst=True)
