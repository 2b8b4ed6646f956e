from cruxboard.models.standings import DivisionFacts, DivisionSummary
from cruxboard.utils.id_types import UserId


def count_division_participants(division_facts: DivisionFacts) -> int:
    """Registered participants and climbers with an ascent in the division, each counted once."""
    division_id = division_facts.division.id
    division_problem_ids = {
        problem.id for problem in division_facts.problems if problem.division_id == division_id
    }
    user_ids: set[UserId] = {
        participant.user_id
        for participant in division_facts.participants
        if participant.division_id == division_id
    }
    user_ids.update(
        ascent.user_id
        for ascent in division_facts.ascents
        if ascent.problem_id in division_problem_ids
    )
    return len(user_ids)


def build_division_summary(division_facts: DivisionFacts) -> DivisionSummary:
    division = division_facts.division
    division_problem_ids = {
        problem.id for problem in division_facts.problems if problem.division_id == division.id
    }
    division_ascents = [
        ascent for ascent in division_facts.ascents if ascent.problem_id in division_problem_ids
    ]
    return DivisionSummary(
        division_id=division.id,
        division_name=division.name,
        participant_count=count_division_participants(division_facts),
        problem_count=len(division_problem_ids),
        total_tops=sum(1 for ascent in division_ascents if ascent.topped),
        total_zones=sum(1 for ascent in division_ascents if ascent.zone),
    )
