import asyncio
from collections.abc import Iterable

from cruxboard.models.db.competition import Division
from cruxboard.models.standings import DivisionFacts, UserTally
from cruxboard.sql.facts import FactRepository
from cruxboard.utils.id_types import CompetitionId, DivisionId, UserId
from cruxboard.utils.logging import logger


def division_sort_key(division: Division) -> tuple[bool, int, str, str]:
    """Explicit sort order first (nulls last), then name, then id."""
    return (
        division.sort_order is None,
        division.sort_order if division.sort_order is not None else 0,
        division.name,
        str(division.id),
    )


def select_divisions(
    divisions: Iterable[Division],
    competition_id: CompetitionId,
    division_id: DivisionId | None = None,
) -> list[Division]:
    selected = [
        division
        for division in divisions
        if division.competition_id == competition_id
        and (division_id is None or division.id == division_id)
    ]
    return sorted(selected, key=division_sort_key)


async def load_single_division_facts(
    facts: FactRepository, competition_id: CompetitionId, division: Division
) -> DivisionFacts:
    problems, participants = await asyncio.gather(
        facts.get_problems(competition_id, division.id),
        facts.get_participants(competition_id, division.id),
    )
    # Only facts attached to this division count.
    division_problems = tuple(problem for problem in problems if problem.division_id == division.id)
    problem_ids = {problem.id for problem in division_problems}
    ascents = await facts.get_ascents([problem.id for problem in division_problems])
    return DivisionFacts(
        division=division,
        problems=division_problems,
        ascents=tuple(ascent for ascent in ascents if ascent.problem_id in problem_ids),
        participants=tuple(
            participant for participant in participants if participant.division_id == division.id
        ),
    )


async def load_division_facts(
    facts: FactRepository,
    competition_id: CompetitionId,
    division_id: DivisionId | None = None,
) -> list[DivisionFacts]:
    """
    Fetch a fact snapshot for every division of the competition that passes the filter.

    Divisions are fetched concurrently. The result keeps the order of `select_divisions`,
    independent of which fetch completes first. Any failing fetch fails the whole load.
    """
    divisions = select_divisions(
        await facts.get_divisions(competition_id), competition_id, division_id
    )
    if len(divisions) < 1:
        return []

    return list(
        await asyncio.gather(
            *(load_single_division_facts(facts, competition_id, division) for division in divisions)
        )
    )


def tally_division(division_facts: DivisionFacts) -> list[UserTally]:
    division_problem_ids = {
        problem.id
        for problem in division_facts.problems
        if problem.division_id == division_facts.division.id
    }
    display_names: dict[UserId, str] = {}
    totals: dict[UserId, list[int]] = {}

    for ascent in division_facts.ascents:
        if ascent.problem_id not in division_problem_ids:
            continue

        user_totals = totals.setdefault(ascent.user_id, [0, 0, 0, 0])
        display_names.setdefault(ascent.user_id, ascent.user_display_name)
        if ascent.topped:
            user_totals[0] += 1
        if ascent.zone:
            user_totals[1] += 1
        user_totals[2] += ascent.top_attempts or 0
        user_totals[3] += ascent.zone_attempts or 0

    tallies = [
        UserTally(
            division_id=division_facts.division.id,
            user_id=user_id,
            user_display_name=display_names[user_id],
            total_tops=tops,
            total_zones=zones,
            total_top_attempts=top_attempts,
            total_zone_attempts=zone_attempts,
        )
        for user_id, (tops, zones, top_attempts, zone_attempts) in totals.items()
    ]
    logger.debug(
        "Tallied division: division_id=%s users=%s ascents=%s",
        division_facts.division.id,
        len(tallies),
        len(division_facts.ascents),
    )
    return tallies
