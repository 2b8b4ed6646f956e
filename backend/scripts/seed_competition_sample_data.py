#!/usr/bin/env python3
import argparse
import asyncio
import hashlib
from typing import Any
from uuid import UUID

from heliclockter import datetime_utc, timedelta
from sqlalchemy.sql import Insert

from cruxboard.database import database
from cruxboard.logic.standings.report import compute_competition_report
from cruxboard.models.db.competition import AscentBody
from cruxboard.schema import competitions, divisions, problems, users
from cruxboard.sql.participants import sql_upsert_participant
from cruxboard.sql.problems import sql_upsert_ascent
from cruxboard.utils.id_types import CompetitionId, DivisionId, ProblemId, UserId
from cruxboard.utils.logging import logger
from cruxboard.utils.types import assert_some

SAMPLE_CLIMBERS = [
    "Alex Megos",
    "Janja Garnbret",
    "Adam Ondra",
    "Brooke Raboutou",
    "Tomoa Narasaki",
    "Natalia Grossman",
    "Jakob Schubert",
    "Oriane Bertone",
]

SAMPLE_DIVISIONS = [("Open", 1), ("Masters", 2), ("Youth", None)]


def placeholder_password_hash(email: str) -> str:
    return hashlib.sha256(f"seed:{email}".encode()).hexdigest()


def determine_ascent(climber_index: int, problem_index: int) -> AscentBody | None:
    """Deterministic pseudo results so repeated seeds produce the same leaderboard."""
    outcome = (climber_index * 7 + problem_index * 3) % 5
    if outcome == 0:
        return None
    if outcome == 1:
        return AscentBody(topped=False, zone=False, top_attempts=None, zone_attempts=None)
    if outcome == 2:
        return AscentBody(topped=False, zone=True, zone_attempts=problem_index + 1)
    attempts = 1 + (climber_index + problem_index) % 4
    return AscentBody(
        topped=True,
        top_attempts=attempts,
        zone=True,
        zone_attempts=max(1, attempts - 1),
    )


async def insert_returning_id(query: Insert, values: dict[str, Any]) -> UUID:
    row = await database.fetch_one(query=query, values=values)
    return UUID(str(assert_some(row)._mapping["id"]))


async def create_sample_users() -> list[UserId]:
    user_ids: list[UserId] = []
    for name in SAMPLE_CLIMBERS:
        email = f"{name.lower().replace(' ', '.')}@example.com"
        existing = await database.fetch_one(
            "SELECT id FROM users WHERE email = :email", values={"email": email}
        )
        if existing is not None:
            user_ids.append(UserId(existing._mapping["id"]))
            continue

        user_id = await insert_returning_id(
            users.insert().returning(users.c.id),
            {
                "display_name": name,
                "email": email,
                "password_hash": placeholder_password_hash(email),
            },
        )
        user_ids.append(UserId(user_id))
    return user_ids


async def create_sample_competition(title: str, creator_id: UserId) -> CompetitionId:
    starts_at = datetime_utc.now() + timedelta(days=7)
    competition_id = await insert_returning_id(
        competitions.insert().returning(competitions.c.id),
        {
            "title": title,
            "description": "Sample bouldering competition",
            "is_public": True,
            "starts_at": starts_at,
            "ends_at": starts_at + timedelta(hours=6),
            "created_by": creator_id,
        },
    )
    return CompetitionId(competition_id)


async def create_sample_divisions(competition_id: CompetitionId) -> list[DivisionId]:
    division_ids: list[DivisionId] = []
    for name, sort_order in SAMPLE_DIVISIONS:
        division_id = await insert_returning_id(
            divisions.insert().returning(divisions.c.id),
            {"competition_id": competition_id, "name": name, "sort_order": sort_order},
        )
        division_ids.append(DivisionId(division_id))
    return division_ids


async def create_sample_problems(
    competition_id: CompetitionId, division_ids: list[DivisionId], problems_per_division: int
) -> dict[DivisionId | None, list[ProblemId]]:
    problems_by_division: dict[DivisionId | None, list[ProblemId]] = {}
    targets: list[DivisionId | None] = [*division_ids, None]
    for division_index, division_id in enumerate(targets):
        for problem_index in range(problems_per_division):
            problem_id = await insert_returning_id(
                problems.insert().returning(problems.c.id),
                {
                    "competition_id": competition_id,
                    "division_id": division_id,
                    "code": f"B{division_index + 1}{problem_index + 1:02d}",
                    "discipline": "boulder",
                    "grade": f"V{problem_index + division_index}",
                },
            )
            problems_by_division.setdefault(division_id, []).append(ProblemId(problem_id))
    return problems_by_division


async def seed_competition(title: str, problems_per_division: int) -> CompetitionId:
    user_ids = await create_sample_users()
    competition_id = await create_sample_competition(title, user_ids[0])
    division_ids = await create_sample_divisions(competition_id)
    problems_by_division = await create_sample_problems(
        competition_id, division_ids, problems_per_division
    )

    for climber_index, user_id in enumerate(user_ids):
        # The last climber never registers and only logs ascents.
        division_id = division_ids[climber_index % len(division_ids)]
        if climber_index < len(user_ids) - 1:
            await sql_upsert_participant(competition_id, user_id, division_id)

        for problem_index, problem_id in enumerate(problems_by_division.get(division_id, [])):
            ascent = determine_ascent(climber_index, problem_index)
            if ascent is not None:
                await sql_upsert_ascent(problem_id, user_id, ascent)

        # Ascents on unassigned problems count toward no division.
        for problem_id in problems_by_division.get(None, []):
            await sql_upsert_ascent(
                problem_id, user_id, AscentBody(topped=True, top_attempts=1, zone=True)
            )

    return competition_id


async def async_main() -> None:
    parser = argparse.ArgumentParser(
        description="Seed a sample climbing competition and print its leaderboard report."
    )
    parser.add_argument("--title", default="Sample Boulder Bash")
    parser.add_argument("--problems-per-division", type=int, default=5)
    parser.add_argument("--podium-size", type=int, default=3)
    args = parser.parse_args()

    await database.connect()
    try:
        async with database.transaction():
            competition_id = await seed_competition(args.title, args.problems_per_division)
        logger.info(f"Seeded competition {competition_id}")

        report = await compute_competition_report(competition_id, podium_size=args.podium_size)
        print(report.model_dump_json(indent=2))
    finally:
        await database.disconnect()


if __name__ == "__main__":
    asyncio.run(async_main())
