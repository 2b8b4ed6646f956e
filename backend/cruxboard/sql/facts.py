from collections.abc import Awaitable, Callable, Sequence
from functools import wraps
from typing import ParamSpec, Protocol, TypeVar

import asyncpg

from cruxboard.logic.standings.exceptions import FactSourceUnavailable
from cruxboard.models.db.competition import (
    AscentWithUser,
    Competition,
    Division,
    Participant,
    Problem,
)
from cruxboard.sql.competitions import get_divisions_for_competition, sql_get_competition
from cruxboard.sql.participants import get_participants_for_competition
from cruxboard.sql.problems import get_ascents_for_problems, get_problems_for_competition
from cruxboard.utils.id_types import CompetitionId, DivisionId, ProblemId
from cruxboard.utils.logging import logger

_FACT_SOURCE_ERRORS = (OSError, asyncpg.PostgresError, asyncpg.InterfaceError)

P = ParamSpec("P")
R = TypeVar("R")


class FactRepository(Protocol):
    """Read-only accessors for the facts a competition report is computed from."""

    async def get_competition(self, competition_id: CompetitionId) -> Competition | None: ...

    async def get_divisions(self, competition_id: CompetitionId) -> list[Division]: ...

    async def get_problems(
        self, competition_id: CompetitionId, division_id: DivisionId | None = None
    ) -> list[Problem]: ...

    async def get_ascents(self, problem_ids: Sequence[ProblemId]) -> list[AscentWithUser]: ...

    async def get_participants(
        self, competition_id: CompetitionId, division_id: DivisionId | None = None
    ) -> list[Participant]: ...


def fact_query(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await func(*args, **kwargs)
        except _FACT_SOURCE_ERRORS as exc:
            logger.error(f"Fact query {func.__name__} failed: {exc!r}")
            raise FactSourceUnavailable(func.__name__) from exc

    return wrapper


class SqlFactRepository:
    @fact_query
    async def get_competition(self, competition_id: CompetitionId) -> Competition | None:
        return await sql_get_competition(competition_id)

    @fact_query
    async def get_divisions(self, competition_id: CompetitionId) -> list[Division]:
        return await get_divisions_for_competition(competition_id)

    @fact_query
    async def get_problems(
        self, competition_id: CompetitionId, division_id: DivisionId | None = None
    ) -> list[Problem]:
        return await get_problems_for_competition(competition_id, division_id)

    @fact_query
    async def get_ascents(self, problem_ids: Sequence[ProblemId]) -> list[AscentWithUser]:
        return await get_ascents_for_problems(problem_ids)

    @fact_query
    async def get_participants(
        self, competition_id: CompetitionId, division_id: DivisionId | None = None
    ) -> list[Participant]:
        return await get_participants_for_competition(competition_id, division_id)


sql_fact_repository = SqlFactRepository()
