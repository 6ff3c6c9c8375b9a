from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, getcontext
from typing import Dict, Hashable, Iterable, List, Tuple, Union
from collections import deque

getcontext().prec = 28
CENTS = Decimal("0.01")
ZERO = Decimal("0")

Numeric = Union[int, float, str, Decimal]
Transfer = Tuple[Hashable, Hashable, Decimal]

def to_decimal(value: Numeric) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() first so 33.33 stays 33.33 instead of its binary expansion
    return Decimal(str(value))

def qround(d: Numeric) -> Decimal:
    return to_decimal(d).quantize(CENTS, rounding=ROUND_HALF_UP)

def money_sum(values: Iterable[Numeric]) -> Decimal:
    return sum((to_decimal(v) for v in values), ZERO)


@dataclass
class OpenPosition:
    """What one user still has to pay or receive while a plan is built."""
    user_id: Hashable
    outstanding: Decimal


def _largest_first(positions: Iterable[OpenPosition]) -> deque:
    return deque(sorted(positions, key=lambda p: p.outstanding, reverse=True))

def simplify_debts(net_map: Dict[Hashable, Decimal]) -> List[Transfer]:
    """
    Greedy settle-up: the largest debtor pays the largest creditor until
    one of them is square, then the next in line takes over.

    Positive net means the user is owed money. Each transfer is
    ``(debtor, creditor, amount)``.
    """
    creditors = _largest_first(
        OpenPosition(uid, bal) for uid, bal in net_map.items() if bal > ZERO
    )
    debtors = _largest_first(
        OpenPosition(uid, -bal) for uid, bal in net_map.items() if bal < ZERO
    )

    transfers: List[Transfer] = []

    while creditors and debtors:
        creditor = creditors[0]
        debtor = debtors[0]

        pay_amt = qround(min(creditor.outstanding, debtor.outstanding))
        transfers.append((debtor.user_id, creditor.user_id, pay_amt))

        creditor.outstanding = qround(creditor.outstanding - pay_amt)
        debtor.outstanding = qround(debtor.outstanding - pay_amt)

        # sub-cent leftovers round to zero and drop out here too
        if creditor.outstanding <= ZERO:
            creditors.popleft()
        if debtor.outstanding <= ZERO:
            debtors.popleft()

    return transfers
