from cruxboard.database import database
from cruxboard.models.db.competition import Competition, Division
from cruxboard.utils.id_types import CompetitionId


async def sql_get_competition(competition_id: CompetitionId) -> Competition | None:
    query = """
        SELECT id, title, description, is_public, starts_at, ends_at
        FROM competitions
        WHERE id = :competition_id
        """
    result = await database.fetch_one(query=query, values={"competition_id": competition_id})
    return Competition.model_validate(dict(result._mapping)) if result is not None else None


async def get_divisions_for_competition(competition_id: CompetitionId) -> list[Division]:
    query = """
        SELECT id, competition_id, name, sort_order
        FROM divisions
        WHERE competition_id = :competition_id
        ORDER BY sort_order NULLS LAST, name ASC, id ASC
        """
    result = await database.fetch_all(query=query, values={"competition_id": competition_id})
    return [Division.model_validate(dict(row._mapping)) for row in result]
