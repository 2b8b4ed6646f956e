"""add competition fact tables

Revision ID: 4a7e2c91d0b3
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str | None = "4a7e2c91d0b3"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None

GEN_RANDOM_UUID = sa.text("gen_random_uuid()")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), server_default=GEN_RANDOM_UUID, nullable=False),
        sa.Column("display_name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=False)

    op.create_table(
        "competitions",
        sa.Column("id", postgresql.UUID(as_uuid=True), server_default=GEN_RANDOM_UUID, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_public", sa.Boolean(), server_default="t", nullable=False),
        sa.Column("starts_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ends_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("scoring_mode", sa.String(), server_default="TOPS_ATTEMPTS", nullable=False),
        sa.Column("rules", postgresql.ARRAY(sa.Text()), server_default="{}", nullable=False),
        sa.Column("created_by", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "divisions",
        sa.Column("id", postgresql.UUID(as_uuid=True), server_default=GEN_RANDOM_UUID, nullable=False),
        sa.Column("competition_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.ForeignKeyConstraint(["competition_id"], ["competitions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("competition_id", "name"),
    )
    op.create_index(
        op.f("ix_divisions_competition_id"), "divisions", ["competition_id"], unique=False
    )

    op.create_table(
        "competition_participants",
        sa.Column("competition_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("division_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column(
            "joined_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.ForeignKeyConstraint(["competition_id"], ["competitions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["division_id"], ["divisions.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("competition_id", "user_id"),
    )
    op.create_index(
        op.f("ix_competition_participants_division_id"),
        "competition_participants",
        ["division_id"],
        unique=False,
    )

    op.create_table(
        "problems",
        sa.Column("id", postgresql.UUID(as_uuid=True), server_default=GEN_RANDOM_UUID, nullable=False),
        sa.Column("competition_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("division_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("code", sa.Text(), nullable=False),
        sa.Column("discipline", sa.Text(), nullable=False),
        sa.Column("grade", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.ForeignKeyConstraint(["competition_id"], ["competitions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["division_id"], ["divisions.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("competition_id", "code"),
    )
    op.create_index(
        op.f("ix_problems_competition_id"), "problems", ["competition_id"], unique=False
    )

    op.create_table(
        "ascents",
        sa.Column("problem_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("topped", sa.Boolean(), server_default="f", nullable=False),
        sa.Column("top_attempts", sa.Integer(), nullable=True),
        sa.Column("zone", sa.Boolean(), server_default="f", nullable=False),
        sa.Column("zone_attempts", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["problem_id"], ["problems.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("problem_id", "user_id"),
    )
    op.create_index("ix_ascents_user_id", "ascents", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_ascents_user_id", table_name="ascents")
    op.drop_table("ascents")
    op.drop_index(op.f("ix_problems_competition_id"), table_name="problems")
    op.drop_table("problems")
    op.drop_index(
        op.f("ix_competition_participants_division_id"), table_name="competition_participants"
    )
    op.drop_table("competition_participants")
    op.drop_index(op.f("ix_divisions_competition_id"), table_name="divisions")
    op.drop_table("divisions")
    op.drop_table("competitions")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
