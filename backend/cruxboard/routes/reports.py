from fastapi import APIRouter, Depends, HTTPException, Query
from starlette import status

from cruxboard.config import config
from cruxboard.logic.standings.exceptions import CompetitionNotFound
from cruxboard.logic.standings.report import compute_competition_report
from cruxboard.models.standings import CompetitionReport
from cruxboard.sql.facts import FactRepository, sql_fact_repository
from cruxboard.utils.id_types import CompetitionId, DivisionId

router = APIRouter(prefix=config.api_prefix)


def get_fact_repository() -> FactRepository:
    return sql_fact_repository


@router.get(
    "/reports/competitions/{competition_id}/summary",
    response_model=CompetitionReport,
)
async def get_competition_summary(
    competition_id: CompetitionId,
    division_id: DivisionId | None = Query(default=None),
    podium_size: int = Query(
        default=config.default_podium_size, ge=1, le=config.podium_size_max
    ),
    facts: FactRepository = Depends(get_fact_repository),
) -> CompetitionReport:
    try:
        return await compute_competition_report(
            competition_id, division_id=division_id, podium_size=podium_size, facts=facts
        )
    except CompetitionNotFound as exc:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Competition not found") from exc
