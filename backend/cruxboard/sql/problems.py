from collections.abc import Sequence

from cruxboard.database import database
from cruxboard.models.db.competition import Ascent, AscentBody, AscentWithUser, Problem
from cruxboard.utils.id_types import CompetitionId, DivisionId, ProblemId, UserId
from cruxboard.utils.types import assert_some, dict_without_none


async def get_problems_for_competition(
    competition_id: CompetitionId,
    division_id: DivisionId | None = None,
) -> list[Problem]:
    division_filter = "AND p.division_id = :division_id" if division_id is not None else ""
    query = f"""
        SELECT p.id, p.competition_id, p.division_id, p.code, p.discipline, p.grade
        FROM problems p
        WHERE p.competition_id = :competition_id
        {division_filter}
        ORDER BY p.code ASC
        """
    result = await database.fetch_all(
        query=query,
        values=dict_without_none({"competition_id": competition_id, "division_id": division_id}),
    )
    return [Problem.model_validate(dict(row._mapping)) for row in result]


async def get_ascents_for_problems(problem_ids: Sequence[ProblemId]) -> list[AscentWithUser]:
    if len(problem_ids) < 1:
        return []

    query = """
        SELECT
            a.problem_id,
            a.user_id,
            a.topped,
            a.top_attempts,
            a.zone,
            a.zone_attempts,
            u.display_name AS user_display_name
        FROM ascents a
        JOIN users u ON u.id = a.user_id
        WHERE a.problem_id = ANY(:problem_ids)
        """
    result = await database.fetch_all(query=query, values={"problem_ids": list(problem_ids)})
    return [AscentWithUser.model_validate(dict(row._mapping)) for row in result]


async def sql_upsert_ascent(problem_id: ProblemId, user_id: UserId, body: AscentBody) -> Ascent:
    query = """
        INSERT INTO ascents (problem_id, user_id, topped, top_attempts, zone, zone_attempts)
        VALUES (:problem_id, :user_id, :topped, :top_attempts, :zone, :zone_attempts)
        ON CONFLICT (problem_id, user_id)
        DO UPDATE SET
            topped = EXCLUDED.topped,
            top_attempts = EXCLUDED.top_attempts,
            zone = EXCLUDED.zone,
            zone_attempts = EXCLUDED.zone_attempts
        RETURNING *
        """
    result = await database.fetch_one(
        query=query,
        values={"problem_id": problem_id, "user_id": user_id, **body.model_dump()},
    )
    return Ascent.model_validate(dict(assert_some(result)._mapping))
