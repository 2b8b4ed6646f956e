from cruxboard.database import database
from cruxboard.models.db.competition import Participant
from cruxboard.utils.id_types import CompetitionId, DivisionId, UserId
from cruxboard.utils.types import assert_some, dict_without_none


async def get_participants_for_competition(
    competition_id: CompetitionId,
    division_id: DivisionId | None = None,
) -> list[Participant]:
    division_filter = "AND cp.division_id = :division_id" if division_id is not None else ""
    query = f"""
        SELECT cp.competition_id, cp.user_id, cp.division_id, cp.joined_at
        FROM competition_participants cp
        WHERE cp.competition_id = :competition_id
        {division_filter}
        """
    result = await database.fetch_all(
        query=query,
        values=dict_without_none({"competition_id": competition_id, "division_id": division_id}),
    )
    return [Participant.model_validate(dict(row._mapping)) for row in result]


async def sql_upsert_participant(
    competition_id: CompetitionId,
    user_id: UserId,
    division_id: DivisionId | None,
) -> Participant:
    query = """
        INSERT INTO competition_participants (competition_id, user_id, division_id)
        VALUES (:competition_id, :user_id, :division_id)
        ON CONFLICT (competition_id, user_id)
        DO UPDATE SET
            division_id = EXCLUDED.division_id,
            joined_at = now()
        RETURNING competition_id, user_id, division_id, joined_at
        """
    result = await database.fetch_one(
        query=query,
        values={
            "competition_id": competition_id,
            "user_id": user_id,
            "division_id": division_id,
        },
    )
    return Participant.model_validate(dict(assert_some(result)._mapping))
