from pydantic import BaseModel, ConfigDict, Field

from cruxboard.models.db.competition import AscentWithUser, Division, Participant, Problem
from cruxboard.utils.id_types import CompetitionId, DivisionId, UserId

ScoreTuple = tuple[int, int, int, int]


class DivisionFacts(BaseModel):
    """Snapshot of the facts a single division report is computed from."""

    model_config = ConfigDict(frozen=True)

    division: Division
    problems: tuple[Problem, ...] = ()
    ascents: tuple[AscentWithUser, ...] = ()
    participants: tuple[Participant, ...] = ()


class UserTally(BaseModel):
    model_config = ConfigDict(frozen=True)

    division_id: DivisionId
    user_id: UserId
    user_display_name: str
    total_tops: int = 0
    total_zones: int = 0
    total_top_attempts: int = 0
    total_zone_attempts: int = 0

    @property
    def score(self) -> ScoreTuple:
        return (
            self.total_tops,
            self.total_zones,
            self.total_top_attempts,
            self.total_zone_attempts,
        )


class Standing(BaseModel):
    user_id: UserId
    user_display_name: str
    rank: int
    total_tops: int
    total_zones: int
    total_top_attempts: int
    total_zone_attempts: int


class DivisionSummary(BaseModel):
    division_id: DivisionId
    division_name: str
    participant_count: int = 0
    problem_count: int = 0
    total_tops: int = 0
    total_zones: int = 0


class DivisionReport(DivisionSummary):
    podium: list[Standing] = Field(default_factory=list)


class CompetitionView(BaseModel):
    id: CompetitionId
    title: str


class CompetitionReport(BaseModel):
    competition: CompetitionView
    divisions: list[DivisionReport] = Field(default_factory=list)
