from typing import NewType
from uuid import UUID

CompetitionId = NewType("CompetitionId", UUID)
DivisionId = NewType("DivisionId", UUID)
ProblemId = NewType("ProblemId", UUID)
UserId = NewType("UserId", UUID)
