from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    PrimaryKeyConstraint,
    String,
    Table,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import declarative_base  # type: ignore[attr-defined]
from sqlalchemy.sql.sqltypes import Boolean, DateTime, Text

Base = declarative_base()
metadata = Base.metadata
DateTimeTZ = DateTime(timezone=True)
GEN_RANDOM_UUID = text("gen_random_uuid()")

users = Table(
    "users",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True, server_default=GEN_RANDOM_UUID),
    Column("display_name", Text, nullable=False),
    Column("email", Text, nullable=False, unique=True, index=True),
    Column("password_hash", Text, nullable=False),
    Column("created_at", DateTimeTZ, server_default=func.now()),
)

competitions = Table(
    "competitions",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True, server_default=GEN_RANDOM_UUID),
    Column("title", Text, nullable=False),
    Column("description", Text, nullable=True),
    Column("is_public", Boolean, nullable=False, server_default="t"),
    Column("starts_at", DateTimeTZ, nullable=True),
    Column("ends_at", DateTimeTZ, nullable=True),
    Column("scoring_mode", String, nullable=False, server_default="TOPS_ATTEMPTS"),
    Column("rules", ARRAY(Text), nullable=False, server_default="{}"),
    Column("created_by", UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL")),
    Column("created_at", DateTimeTZ, server_default=func.now()),
)

divisions = Table(
    "divisions",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True, server_default=GEN_RANDOM_UUID),
    Column(
        "competition_id",
        UUID(as_uuid=True),
        ForeignKey("competitions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("name", Text, nullable=False),
    Column("sort_order", Integer, nullable=True),
    Column("created_at", DateTimeTZ, server_default=func.now()),
    UniqueConstraint("competition_id", "name"),
)

competition_participants = Table(
    "competition_participants",
    metadata,
    Column(
        "competition_id",
        UUID(as_uuid=True),
        ForeignKey("competitions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "division_id",
        UUID(as_uuid=True),
        ForeignKey("divisions.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    ),
    Column("joined_at", DateTimeTZ, nullable=False, server_default=func.now()),
    PrimaryKeyConstraint("competition_id", "user_id"),
)

problems = Table(
    "problems",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True, server_default=GEN_RANDOM_UUID),
    Column(
        "competition_id",
        UUID(as_uuid=True),
        ForeignKey("competitions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column(
        "division_id",
        UUID(as_uuid=True),
        ForeignKey("divisions.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("code", Text, nullable=False),
    Column("discipline", Text, nullable=False),
    Column("grade", Text, nullable=True),
    Column("image_url", Text, nullable=True),
    Column("created_at", DateTimeTZ, server_default=func.now()),
    UniqueConstraint("competition_id", "code"),
)

ascents = Table(
    "ascents",
    metadata,
    Column("problem_id", UUID(as_uuid=True), ForeignKey("problems.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("topped", Boolean, nullable=False, server_default="f"),
    Column("top_attempts", Integer, nullable=True),
    Column("zone", Boolean, nullable=False, server_default="f"),
    Column("zone_attempts", Integer, nullable=True),
    PrimaryKeyConstraint("problem_id", "user_id"),
    Index("ix_ascents_user_id", "user_id"),
)
