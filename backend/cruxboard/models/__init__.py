"""Model registration module used by alembic autogeneration."""

from cruxboard.models.db.competition import (  # noqa: F401
    Ascent,
    Competition,
    Division,
    Participant,
    Problem,
)
