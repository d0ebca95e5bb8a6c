"""create initial tables

Revision ID: 4f1c2b7d9e30
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '4f1c2b7d9e30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, index=True),
        sa.Column("username", sa.String(50), nullable=False, unique=True, index=True),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("age", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
    )

    content_types = op.create_table(
        "content_types",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=False),
        sa.Column("name", sa.String(20), nullable=False),
    )
    op.bulk_insert(content_types, [
        {"id": 1, "name": "Película"},
        {"id": 2, "name": "Serie"},
    ])

    op.create_table(
        "cached_content",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=False),
        sa.Column("type_id", sa.Integer, sa.ForeignKey("content_types.id"), nullable=False),
        sa.Column("title", sa.String(255)),
        sa.Column("synced_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "viewings",
        sa.Column("id", sa.Integer, primary_key=True, index=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("content_id", sa.Integer, sa.ForeignKey("cached_content.id"), nullable=False, index=True),
        sa.Column("type_id", sa.Integer, sa.ForeignKey("content_types.id"), nullable=False),
        sa.Column("viewed_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "content_id", name="uq_viewing_user_content"),
    )
    op.create_index("idx_viewing_user_viewed", "viewings", ["user_id", "viewed_at"])

    op.create_table(
        "ratings",
        sa.Column("id", sa.Integer, primary_key=True, index=True),
        sa.Column("viewing_id", sa.Integer, sa.ForeignKey("viewings.id", ondelete="CASCADE"),
                  nullable=False, unique=True),
        sa.Column("score", sa.Numeric(3, 1), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "reviews",
        sa.Column("id", sa.Integer, primary_key=True, index=True),
        sa.Column("viewing_id", sa.Integer, sa.ForeignKey("viewings.id", ondelete="CASCADE"),
                  nullable=False, unique=True),
        sa.Column("text", sa.Text),
        sa.Column("has_spoilers", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("idx_review_created", "reviews", ["created_at"])

    op.create_table(
        "episodes_watched",
        sa.Column("id", sa.Integer, primary_key=True, index=True),
        sa.Column("viewing_id", sa.Integer, sa.ForeignKey("viewings.id", ondelete="CASCADE"), nullable=False),
        sa.Column("season_id", sa.Integer, nullable=False),
        sa.Column("episode_id", sa.Integer, nullable=False),
        sa.Column("watched_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("viewing_id", "season_id", "episode_id", name="uq_episode_viewing_season_episode"),
    )


def downgrade() -> None:
    op.drop_table("episodes_watched")
    op.drop_index("idx_review_created", table_name="reviews")
    op.drop_table("reviews")
    op.drop_table("ratings")
    op.drop_index("idx_viewing_user_viewed", table_name="viewings")
    op.drop_table("viewings")
    op.drop_table("cached_content")
    op.drop_table("content_types")
    op.drop_table("users")
