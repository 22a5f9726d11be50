"""Service for calculating player aggregate statistics.

Stats are never stored. They are recomputed from the full session history on
every read.
"""

from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal

from loguru import logger

from pokerpal.schemas.ledger import PlayerStats, SessionRecord
from pokerpal.services.ledger_validator import is_participating

# Widget and full leaderboard sizes for the biggest-pot view
COMPACT_POT_COUNT = 3
FULL_POT_COUNT = 5


def _round_half_up(value: float, places: int = 0) -> Decimal:
    """Round like a calculator does (1.25 -> 1.3), not banker's rounding."""
    exponent = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)


def aggregate_player_stats(
    sessions: Iterable[SessionRecord], roster: Sequence[str]
) -> list[PlayerStats]:
    """Reduce the session history into one PlayerStats per roster member.

    This calculates:
    - total_winnings: Sum of results
    - sessions_won / sessions_lost: Sessions with positive / negative result
    - biggest_win / biggest_loss: Best and worst single result (loss is negative)
    - total_sessions / total_buy_ins: Participation counts
    - win_rate: Percentage of sessions won, rounded to an integer
    - average_buy_ins: Buy-ins per session, rounded to one decimal

    Players who bought in zero times in a session are skipped for that session,
    whatever their stored result says. Names in a session that are no longer on
    the roster are ignored.

    Args:
        sessions: Session history, in any order
        roster: Current roster; output follows this order

    Returns:
        One stats record per roster member, in roster order
    """
    stats = {name: PlayerStats(name=name) for name in roster}

    for record in sessions:
        for entry in record.players:
            player = stats.get(entry.name)
            if player is None or not is_participating(entry):
                continue

            result = entry.result
            player.total_winnings += result
            player.total_buy_ins += entry.buy_ins or 0
            player.total_sessions += 1

            if result > 0:
                player.sessions_won += 1
                player.biggest_win = max(player.biggest_win, result)
            elif result < 0:
                player.sessions_lost += 1
                player.biggest_loss = min(player.biggest_loss, result)

    for player in stats.values():
        if player.total_sessions > 0:
            player.win_rate = int(
                _round_half_up(100 * player.sessions_won / player.total_sessions)
            )
            player.average_buy_ins = float(
                _round_half_up(player.total_buy_ins / player.total_sessions, 1)
            )

    return list(stats.values())


def rank_players(stats: Iterable[PlayerStats]) -> list[PlayerStats]:
    """Order players by total winnings, best first. Ties keep input order."""
    return sorted(stats, key=lambda player: player.total_winnings, reverse=True)


def build_leaderboard(
    sessions: Iterable[SessionRecord], roster: Sequence[str]
) -> list[PlayerStats]:
    """Aggregate and rank in one go."""
    ranked = rank_players(aggregate_player_stats(sessions, roster))
    if ranked:
        logger.debug(
            f"Leaderboard built for {len(ranked)} players, leader: {ranked[0].name}"
        )
    return ranked


def biggest_sessions(
    sessions: Iterable[SessionRecord],
    limit: int = FULL_POT_COUNT,
    *,
    exclude_empty: bool = False,
) -> list[SessionRecord]:
    """Sessions with the largest pots, biggest first.

    Args:
        sessions: Session history
        limit: How many to keep (3 for the compact widget, 5 for the full view)
        exclude_empty: Drop sessions without a recorded pot
    """
    candidates = [
        record
        for record in sessions
        if not exclude_empty or (record.total_pot or 0) > 0
    ]
    candidates.sort(key=lambda record: record.total_pot or 0, reverse=True)
    return candidates[: max(limit, 0)]
