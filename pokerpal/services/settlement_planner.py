"""Turn a balanced session's results into debtor -> creditor payments.

The matching is greedy: the biggest remaining loser pays the biggest remaining
winner until one of them is square, then the next in line steps up. This keeps
the number of payments at ``winners + losers - 1`` or fewer, but it is not the
minimum possible. Tests pin this exact pairing order.
"""

from collections.abc import Iterable

from loguru import logger

from pokerpal.schemas.ledger import PlayerEntry, Transaction
from pokerpal.services.ledger_validator import participants

# Remainders below half a cent count as settled
SETTLEMENT_EPSILON = 0.005


def plan_settlement(entries: Iterable[PlayerEntry]) -> list[Transaction]:
    """Plan the payments that settle one session.

    Args:
        entries: Per-player results of an already validated session.
            Non-participants are ignored.

    Returns:
        The full ordered list of payments. Empty when nobody won or lost.
        If the results do not balance, matching stops when either side runs out.
    """
    playing = participants(entries)

    # Python's sort is stable, so ties keep roster order
    winners = sorted(
        ((e.name, e.result) for e in playing if e.result > 0),
        key=lambda pair: pair[1],
        reverse=True,
    )
    losers = sorted(
        ((e.name, -e.result) for e in playing if e.result < 0),
        key=lambda pair: pair[1],
        reverse=True,
    )
    owed = [amount for _, amount in winners]
    owing = [amount for _, amount in losers]

    transactions: list[Transaction] = []
    wi = 0
    li = 0
    while wi < len(winners) and li < len(losers):
        settle_amount = min(owed[wi], owing[li])

        if settle_amount > SETTLEMENT_EPSILON:
            transactions.append(
                Transaction(
                    from_player=losers[li][0],
                    to_player=winners[wi][0],
                    amount=settle_amount,
                )
            )

        owed[wi] -= settle_amount
        owing[li] -= settle_amount

        if owed[wi] < SETTLEMENT_EPSILON:
            wi += 1
        if owing[li] < SETTLEMENT_EPSILON:
            li += 1

    logger.debug(
        f"Planned {len(transactions)} payment(s) for "
        + f"{len(winners)} winner(s) and {len(losers)} loser(s)"
    )
    return transactions
