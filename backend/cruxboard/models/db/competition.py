from heliclockter import datetime_utc
from pydantic import BaseModel, Field

from cruxboard.models.db.shared import BaseModelORM
from cruxboard.utils.id_types import CompetitionId, DivisionId, ProblemId, UserId


class Competition(BaseModelORM):
    id: CompetitionId
    title: str
    description: str | None = None
    is_public: bool = True
    starts_at: datetime_utc | None = None
    ends_at: datetime_utc | None = None


class Division(BaseModelORM):
    id: DivisionId
    competition_id: CompetitionId
    name: str
    sort_order: int | None = None


class Problem(BaseModelORM):
    id: ProblemId
    competition_id: CompetitionId
    division_id: DivisionId | None = None
    code: str
    discipline: str
    grade: str | None = None


class Participant(BaseModelORM):
    competition_id: CompetitionId
    user_id: UserId
    division_id: DivisionId | None = None
    joined_at: datetime_utc


class AscentBody(BaseModel):
    topped: bool = False
    top_attempts: int | None = Field(default=None, ge=0)
    zone: bool = False
    zone_attempts: int | None = Field(default=None, ge=0)


class Ascent(BaseModelORM):
    problem_id: ProblemId
    user_id: UserId
    topped: bool
    top_attempts: int | None = None
    zone: bool
    zone_attempts: int | None = None


class AscentWithUser(Ascent):
    user_display_name: str
