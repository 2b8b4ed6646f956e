import pytest

from cruxboard.logic.standings.aggregation import (
    load_division_facts,
    select_divisions,
    tally_division,
)
from cruxboard.logic.standings.exceptions import FactSourceUnavailable
from cruxboard.models.db.competition import Participant
from cruxboard.utils.id_types import CompetitionId, DivisionId
from tests.unit_tests.shared import (
    InMemoryFactRepository,
    make_ascent,
    make_competition,
    make_division,
    make_division_facts,
    make_participant,
    make_problem,
    make_user,
)


def test_tally_sums_attempts_treating_null_as_zero() -> None:
    competition = make_competition()
    open_ = make_division(competition, "Open")
    b1 = make_problem(competition, open_, "B1")
    b2 = make_problem(competition, open_, "B2")
    b3 = make_problem(competition, open_, "B3")
    alice = make_user()

    tallies = tally_division(
        make_division_facts(
            open_,
            problems=[b1, b2, b3],
            ascents=[
                make_ascent(
                    b1, alice, "Alice", topped=True, top_attempts=2, zone=True, zone_attempts=1
                ),
                make_ascent(b2, alice, "Alice", zone=True, zone_attempts=None),
                make_ascent(b3, alice, "Alice", top_attempts=None, zone_attempts=4),
            ],
        )
    )

    (tally,) = tallies
    assert tally.user_id == alice
    assert tally.user_display_name == "Alice"
    assert tally.division_id == open_.id
    assert tally.score == (1, 2, 2, 5)


def test_tally_never_synthesizes_tops_or_zones() -> None:
    competition = make_competition()
    open_ = make_division(competition, "Open")
    b1 = make_problem(competition, open_)
    bob = make_user()

    (tally,) = tally_division(
        make_division_facts(
            open_,
            problems=[b1],
            ascents=[make_ascent(b1, bob, "Bob", topped=True, top_attempts=3, zone=False)],
        )
    )

    assert tally.total_tops == 1
    assert tally.total_zones == 0
    assert tally.total_top_attempts == 3


def test_tally_only_contains_users_with_ascents() -> None:
    competition = make_competition()
    open_ = make_division(competition, "Open")
    b1 = make_problem(competition, open_)
    climber = make_user()
    registered_only = make_user()

    tallies = tally_division(
        make_division_facts(
            open_,
            problems=[b1],
            ascents=[make_ascent(b1, climber, "Climber")],
            participants=[make_participant(competition, registered_only, open_)],
        )
    )

    assert [tally.user_id for tally in tallies] == [climber]


def test_tally_ignores_ascents_on_unassigned_problems() -> None:
    competition = make_competition()
    open_ = make_division(competition, "Open")
    assigned = make_problem(competition, open_, "B1")
    unassigned = make_problem(competition, None, "X1")
    alice = make_user()

    (tally,) = tally_division(
        make_division_facts(
            open_,
            problems=[assigned, unassigned],
            ascents=[
                make_ascent(assigned, alice, "Alice", zone=True, zone_attempts=1),
                make_ascent(unassigned, alice, "Alice", topped=True, top_attempts=1, zone=True),
            ],
        )
    )

    assert tally.score == (0, 1, 0, 1)


def test_select_divisions_orders_by_sort_key_nulls_last_then_name() -> None:
    competition = make_competition()
    youth = make_division(competition, "Youth", None)
    adaptive = make_division(competition, "Adaptive", None)
    masters = make_division(competition, "Masters", 2)
    open_ = make_division(competition, "Open", 1)
    other = make_division(make_competition(), "Elsewhere", 0)

    selected = select_divisions([youth, adaptive, masters, open_, other], competition.id)

    assert [division.name for division in selected] == ["Open", "Masters", "Adaptive", "Youth"]


def test_select_divisions_with_filter() -> None:
    competition = make_competition()
    open_ = make_division(competition, "Open", 1)
    masters = make_division(competition, "Masters", 2)
    foreign = make_division(make_competition(), "Foreign", 1)

    assert select_divisions([open_, masters], competition.id, masters.id) == [masters]
    assert select_divisions([open_, masters, foreign], competition.id, foreign.id) == []


@pytest.mark.asyncio
async def test_load_division_facts_keeps_order_regardless_of_fetch_completion() -> None:
    competition = make_competition()
    first = make_division(competition, "First", 1)
    second = make_division(competition, "Second", 2)
    third = make_division(competition, "Third", 3)
    facts = InMemoryFactRepository(
        competitions=[competition],
        divisions=[third, first, second],
        problems=[make_problem(competition, first, "B1"), make_problem(competition, third, "B3")],
        problem_delays={first.id: 0.03, second.id: 0.02, third.id: 0.0},
    )

    loaded = await load_division_facts(facts, competition.id)

    assert [snapshot.division.name for snapshot in loaded] == ["First", "Second", "Third"]
    assert [len(snapshot.problems) for snapshot in loaded] == [1, 0, 1]


@pytest.mark.asyncio
async def test_load_division_facts_restricts_to_filtered_division() -> None:
    competition = make_competition()
    open_ = make_division(competition, "Open", 1)
    masters = make_division(competition, "Masters", 2)
    open_problem = make_problem(competition, open_, "B1")
    masters_problem = make_problem(competition, masters, "B2")
    alice = make_user()
    facts = InMemoryFactRepository(
        competitions=[competition],
        divisions=[open_, masters],
        problems=[open_problem, masters_problem],
        ascents=[
            make_ascent(open_problem, alice, "Alice", topped=True, top_attempts=1, zone=True),
            make_ascent(masters_problem, alice, "Alice", topped=True, top_attempts=1, zone=True),
        ],
        participants=[make_participant(competition, alice, masters)],
    )

    (snapshot,) = await load_division_facts(facts, competition.id, masters.id)

    assert snapshot.division == masters
    assert snapshot.problems == (masters_problem,)
    assert [ascent.problem_id for ascent in snapshot.ascents] == [masters_problem.id]
    assert [participant.user_id for participant in snapshot.participants] == [alice]


@pytest.mark.asyncio
async def test_load_division_facts_without_divisions_skips_fetches() -> None:
    competition = make_competition()
    facts = InMemoryFactRepository(competitions=[competition])

    assert await load_division_facts(facts, competition.id) == []
    assert facts.calls == ["get_divisions"]


@pytest.mark.asyncio
async def test_load_division_facts_fails_when_any_fetch_fails() -> None:
    competition = make_competition()
    open_ = make_division(competition, "Open", 1)
    masters = make_division(competition, "Masters", 2)

    class FlakyFactRepository(InMemoryFactRepository):
        async def get_participants(
            self, competition_id: CompetitionId, division_id: DivisionId | None = None
        ) -> list[Participant]:
            if division_id == masters.id:
                raise FactSourceUnavailable("get_participants")
            return await super().get_participants(competition_id, division_id)

    facts = FlakyFactRepository(competitions=[competition], divisions=[open_, masters])

    with pytest.raises(FactSourceUnavailable):
        await load_division_facts(facts, competition.id)
