"""Create kennel tables

Revision ID: 3f6a2b1c9d0e
Revises:
Create Date: 2026-10-19
"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "3f6a2b1c9d0e"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "posts",
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("excerpt", sa.String(length=512), nullable=True),
        sa.Column("cover_image", sa.String(length=1024), nullable=True),
        sa.Column("published", sa.Boolean(), nullable=False),
        sa.Column("author_id", sa.String(length=64), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_posts_created_at"), "posts", ["created_at"])
    op.create_index(op.f("ix_posts_published"), "posts", ["published"])
    op.create_index(op.f("ix_posts_author_id"), "posts", ["author_id"])

    op.create_table(
        "members",
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("breed", sa.String(length=100), nullable=True),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("gender", sa.String(length=16), nullable=True),
        sa.Column("color", sa.String(length=64), nullable=True),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("personality_traits", sa.Text(), nullable=True),
        sa.Column("pedigree_info", sa.JSON(), nullable=False),
        sa.Column("health_records", sa.JSON(), nullable=False),
        sa.Column("achievements", sa.JSON(), nullable=False),
        sa.Column("avatar_url", sa.String(length=1024), nullable=True),
        sa.Column("album_urls", sa.JSON(), nullable=False),
        sa.Column("pedigree_urls", sa.JSON(), nullable=False),
        sa.Column("health_check_urls", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_members_created_at"), "members", ["created_at"])

    op.create_table(
        "puppies",
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("breed", sa.String(length=32), nullable=False),
        sa.Column("birth_date", sa.Date(), nullable=False),
        sa.Column("gender", sa.String(length=16), nullable=False),
        sa.Column("color", sa.String(length=16), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("personality_traits", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("price", sa.Integer(), nullable=True),
        sa.Column("currency", sa.String(length=8), nullable=False),
        sa.Column("microchip_id", sa.String(length=15), nullable=True),
        sa.Column("birth_weight", sa.Float(), nullable=True),
        sa.Column("current_weight", sa.Float(), nullable=True),
        sa.Column("expected_adult_weight", sa.Float(), nullable=True),
        sa.Column("pedigree_info", sa.JSON(), nullable=False),
        sa.Column("health_checks", sa.JSON(), nullable=False),
        sa.Column("vaccination_records", sa.JSON(), nullable=False),
        sa.Column("cover_image", sa.String(length=1024), nullable=True),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("pedigree_documents", sa.JSON(), nullable=False),
        sa.Column("health_certificates", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_puppies_created_at"), "puppies", ["created_at"])
    op.create_index(op.f("ix_puppies_breed"), "puppies", ["breed"])
    op.create_index(op.f("ix_puppies_status"), "puppies", ["status"])

    op.create_table(
        "environments",
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("cover_image", sa.String(length=1024), nullable=True),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("equipment_images", sa.JSON(), nullable=False),
        sa.Column("detail_images", sa.JSON(), nullable=False),
        sa.Column("features", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_environments_created_at"), "environments", ["created_at"])
    op.create_index(op.f("ix_environments_type"), "environments", ["type"])


def downgrade() -> None:
    op.drop_index(op.f("ix_environments_type"), table_name="environments")
    op.drop_index(op.f("ix_environments_created_at"), table_name="environments")
    op.drop_table("environments")

    op.drop_index(op.f("ix_puppies_status"), table_name="puppies")
    op.drop_index(op.f("ix_puppies_breed"), table_name="puppies")
    op.drop_index(op.f("ix_puppies_created_at"), table_name="puppies")
    op.drop_table("puppies")

    op.drop_index(op.f("ix_members_created_at"), table_name="members")
    op.drop_table("members")

    op.drop_index(op.f("ix_posts_author_id"), table_name="posts")
    op.drop_index(op.f("ix_posts_published"), table_name="posts")
    op.drop_index(op.f("ix_posts_created_at"), table_name="posts")
    op.drop_table("posts")
