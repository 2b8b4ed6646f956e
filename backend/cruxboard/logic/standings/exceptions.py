from cruxboard.utils.id_types import CompetitionId


class StandingsError(Exception):
    pass


class CompetitionNotFound(StandingsError):
    def __init__(self, competition_id: CompetitionId) -> None:
        super().__init__(f"Competition {competition_id} not found")
        self.competition_id = competition_id


class FactSourceUnavailable(StandingsError):
    """The fact source could not answer a query. Never retried by the engine."""

    def __init__(self, query_name: str) -> None:
        super().__init__(f"Fact source failed to answer {query_name}")
        self.query_name = query_name


class InvalidPodiumSize(StandingsError, ValueError):
    def __init__(self, podium_size: int) -> None:
        super().__init__(f"Podium size should be at least 1, got {podium_size}")
        self.podium_size = podium_size
