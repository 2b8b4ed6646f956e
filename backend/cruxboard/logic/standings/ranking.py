from collections.abc import Sequence

from cruxboard.logic.standings.exceptions import InvalidPodiumSize
from cruxboard.models.standings import ScoreTuple, Standing, UserTally

DEFAULT_PODIUM_SIZE = 3


def ranking_sort_key(tally: UserTally) -> tuple[int, int, int, int, str, str]:
    """
    Order tallies best first.

    More tops, then more zones, then fewer attempts to top, then fewer attempts to zone.
    Display name and user id only make the order total, they never split a rank.
    """
    return (
        -tally.total_tops,
        -tally.total_zones,
        tally.total_top_attempts,
        tally.total_zone_attempts,
        tally.user_display_name,
        str(tally.user_id),
    )


def assign_dense_ranks(tallies: Sequence[UserTally]) -> list[Standing]:
    standings: list[Standing] = []
    previous_score: ScoreTuple | None = None
    rank = 0

    for tally in sorted(tallies, key=ranking_sort_key):
        if tally.score != previous_score:
            rank += 1
            previous_score = tally.score

        standings.append(
            Standing(
                user_id=tally.user_id,
                user_display_name=tally.user_display_name,
                rank=rank,
                total_tops=tally.total_tops,
                total_zones=tally.total_zones,
                total_top_attempts=tally.total_top_attempts,
                total_zone_attempts=tally.total_zone_attempts,
            )
        )

    return standings


def build_podium(
    tallies: Sequence[UserTally], podium_size: int = DEFAULT_PODIUM_SIZE
) -> list[Standing]:
    """
    Rank the tallies and keep every standing with rank <= podium_size.

    Ties straddling the cutoff are kept whole, so the podium can be longer than podium_size.
    """
    if podium_size < 1:
        raise InvalidPodiumSize(podium_size)

    return [standing for standing in assign_dense_ranks(tallies) if standing.rank <= podium_size]
