import asyncio
from collections.abc import Iterable, Sequence
from uuid import uuid4
from zoneinfo import ZoneInfo

from heliclockter import datetime_utc

from cruxboard.models.db.competition import (
    AscentWithUser,
    Competition,
    Division,
    Participant,
    Problem,
)
from cruxboard.models.standings import DivisionFacts, UserTally
from cruxboard.utils.id_types import CompetitionId, DivisionId, ProblemId, UserId

DUMMY_MOCK_TIME = datetime_utc(2026, 10, 17, 9, 0, 0, tzinfo=ZoneInfo("UTC"))


def make_competition(title: str = "Boulder Bash") -> Competition:
    return Competition(id=CompetitionId(uuid4()), title=title)


def make_division(
    competition: Competition, name: str, sort_order: int | None = None
) -> Division:
    return Division(
        id=DivisionId(uuid4()),
        competition_id=competition.id,
        name=name,
        sort_order=sort_order,
    )


def make_problem(
    competition: Competition, division: Division | None, code: str = "B1"
) -> Problem:
    return Problem(
        id=ProblemId(uuid4()),
        competition_id=competition.id,
        division_id=division.id if division is not None else None,
        code=code,
        discipline="boulder",
    )


def make_user() -> UserId:
    return UserId(uuid4())


def make_ascent(
    problem: Problem,
    user_id: UserId,
    name: str,
    *,
    topped: bool = False,
    top_attempts: int | None = None,
    zone: bool = False,
    zone_attempts: int | None = None,
) -> AscentWithUser:
    return AscentWithUser(
        problem_id=problem.id,
        user_id=user_id,
        user_display_name=name,
        topped=topped,
        top_attempts=top_attempts,
        zone=zone,
        zone_attempts=zone_attempts,
    )


def make_participant(
    competition: Competition, user_id: UserId, division: Division | None
) -> Participant:
    return Participant(
        competition_id=competition.id,
        user_id=user_id,
        division_id=division.id if division is not None else None,
        joined_at=DUMMY_MOCK_TIME,
    )


def make_tally(
    name: str,
    tops: int,
    zones: int,
    top_attempts: int,
    zone_attempts: int,
    division_id: DivisionId | None = None,
) -> UserTally:
    return UserTally(
        division_id=division_id or DivisionId(uuid4()),
        user_id=make_user(),
        user_display_name=name,
        total_tops=tops,
        total_zones=zones,
        total_top_attempts=top_attempts,
        total_zone_attempts=zone_attempts,
    )


def make_division_facts(
    division: Division,
    problems: Iterable[Problem] = (),
    ascents: Iterable[AscentWithUser] = (),
    participants: Iterable[Participant] = (),
) -> DivisionFacts:
    return DivisionFacts(
        division=division,
        problems=tuple(problems),
        ascents=tuple(ascents),
        participants=tuple(participants),
    )


class InMemoryFactRepository:
    """Fact source backed by plain lists, with optional per-division fetch delays."""

    def __init__(
        self,
        competitions: Iterable[Competition] = (),
        divisions: Iterable[Division] = (),
        problems: Iterable[Problem] = (),
        ascents: Iterable[AscentWithUser] = (),
        participants: Iterable[Participant] = (),
        problem_delays: dict[DivisionId, float] | None = None,
    ) -> None:
        self.competitions = list(competitions)
        self.divisions = list(divisions)
        self.problems = list(problems)
        self.ascents = list(ascents)
        self.participants = list(participants)
        self.problem_delays = problem_delays or {}
        self.calls: list[str] = []

    async def get_competition(self, competition_id: CompetitionId) -> Competition | None:
        self.calls.append("get_competition")
        return next((c for c in self.competitions if c.id == competition_id), None)

    async def get_divisions(self, competition_id: CompetitionId) -> list[Division]:
        self.calls.append("get_divisions")
        return [d for d in self.divisions if d.competition_id == competition_id]

    async def get_problems(
        self, competition_id: CompetitionId, division_id: DivisionId | None = None
    ) -> list[Problem]:
        self.calls.append("get_problems")
        if division_id is not None and division_id in self.problem_delays:
            await asyncio.sleep(self.problem_delays[division_id])
        return [
            p
            for p in self.problems
            if p.competition_id == competition_id
            and (division_id is None or p.division_id == division_id)
        ]

    async def get_ascents(self, problem_ids: Sequence[ProblemId]) -> list[AscentWithUser]:
        self.calls.append("get_ascents")
        wanted = set(problem_ids)
        return [a for a in self.ascents if a.problem_id in wanted]

    async def get_participants(
        self, competition_id: CompetitionId, division_id: DivisionId | None = None
    ) -> list[Participant]:
        self.calls.append("get_participants")
        return [
            p
            for p in self.participants
            if p.competition_id == competition_id
            and (division_id is None or p.division_id == division_id)
        ]
