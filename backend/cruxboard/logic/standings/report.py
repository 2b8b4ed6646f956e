import time

from cruxboard.logic.standings.aggregation import load_division_facts, tally_division
from cruxboard.logic.standings.exceptions import CompetitionNotFound, InvalidPodiumSize
from cruxboard.logic.standings.ranking import DEFAULT_PODIUM_SIZE, build_podium
from cruxboard.logic.standings.summary import build_division_summary
from cruxboard.models.standings import (
    CompetitionReport,
    CompetitionView,
    DivisionFacts,
    DivisionReport,
)
from cruxboard.sql.facts import FactRepository, sql_fact_repository
from cruxboard.utils.id_types import CompetitionId, DivisionId
from cruxboard.utils.logging import logger

_REPORT_WARN_MS = 2_000


def build_division_report(division_facts: DivisionFacts, podium_size: int) -> DivisionReport:
    summary = build_division_summary(division_facts)
    podium = build_podium(tally_division(division_facts), podium_size)
    return DivisionReport(**summary.model_dump(), podium=podium)


async def compute_competition_report(
    competition_id: CompetitionId,
    division_id: DivisionId | None = None,
    podium_size: int = DEFAULT_PODIUM_SIZE,
    facts: FactRepository = sql_fact_repository,
) -> CompetitionReport:
    """
    Compute the leaderboard report of a competition from the current facts.

    Nothing is cached or persisted: every call fetches a fresh snapshot. A division filter
    that does not belong to the competition yields a report without divisions.
    """
    if podium_size < 1:
        raise InvalidPodiumSize(podium_size)

    started_at = time.monotonic()

    competition = await facts.get_competition(competition_id)
    if competition is None:
        raise CompetitionNotFound(competition_id)

    division_facts = await load_division_facts(facts, competition_id, division_id)
    if division_id is not None and len(division_facts) < 1:
        logger.info(
            "Division filter matches no division of the competition: "
            "competition_id=%s division_id=%s",
            competition_id,
            division_id,
        )

    report = CompetitionReport(
        competition=CompetitionView(id=competition.id, title=competition.title),
        divisions=[build_division_report(snapshot, podium_size) for snapshot in division_facts],
    )

    duration_ms = int((time.monotonic() - started_at) * 1000)
    if duration_ms >= _REPORT_WARN_MS:
        logger.warning(
            "Competition report was slow: competition_id=%s duration_ms=%s",
            competition_id,
            duration_ms,
        )
    logger.info(
        "Computed competition report: competition_id=%s divisions=%s duration_ms=%s",
        competition_id,
        len(report.divisions),
        duration_ms,
    )
    return report
