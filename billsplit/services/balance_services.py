import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Hashable, List, Sequence

from billsplit.core.utils import CENTS, ZERO, Transfer, qround, simplify_debts, to_decimal
from billsplit.models.expense import ExpenseRecord, SettlementRecord
from billsplit.services.split_services import compute_net_balance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BalanceLine:
    from_user: Hashable
    to_user: Hashable
    amount: Decimal


@dataclass(frozen=True)
class BalanceBetween:
    net_balance: Decimal
    net_amount: Decimal
    direction: str
    details: List[BalanceLine] = field(default_factory=list)


@dataclass(frozen=True)
class BalanceAccuracy:
    is_valid: bool
    total_expenses: Decimal
    total_splits: Decimal
    discrepancy: Decimal


def describe_balance(
    expenses: Sequence[ExpenseRecord],
    user_a: Hashable,
    user_b: Hashable,
) -> BalanceBetween:
    net = compute_net_balance(expenses, user_a, user_b)

    details: List[BalanceLine] = []
    if user_a != user_b:
        for expense in expenses:
            if expense.paid_by == user_a:
                owed = qround(expense.share_of(user_b))
                if owed > 0:
                    details.append(BalanceLine(user_b, user_a, owed))
            elif expense.paid_by == user_b:
                owed = qround(expense.share_of(user_a))
                if owed > 0:
                    details.append(BalanceLine(user_a, user_b, owed))

    if net > 0:
        direction = f"{user_b} owes {user_a}"
    elif net < 0:
        direction = f"{user_a} owes {user_b}"
    else:
        direction = "Even"

    return BalanceBetween(
        net_balance=net,
        net_amount=abs(net),
        direction=direction,
        details=details,
    )


def compute_group_net_balances(expenses: Sequence[ExpenseRecord]) -> Dict[Hashable, Decimal]:
    """Paid minus owed for everyone who appears in ``expenses``."""
    paid_map: Dict[Hashable, Decimal] = {}
    owed_map: Dict[Hashable, Decimal] = {}

    for expense in expenses:
        paid_map[expense.paid_by] = paid_map.get(expense.paid_by, ZERO) + to_decimal(expense.amount)
        for s in expense.splits:
            owed_map[s.user_id] = owed_map.get(s.user_id, ZERO) + to_decimal(s.amount)

    user_ids = list(paid_map) + [uid for uid in owed_map if uid not in paid_map]

    net: Dict[Hashable, Decimal] = {}
    for uid in user_ids:
        p = paid_map.get(uid, ZERO)
        o = owed_map.get(uid, ZERO)
        net[uid] = qround(p - o)

    return net


def apply_settlements(
    net: Dict[Hashable, Decimal],
    settlements: Sequence[SettlementRecord],
) -> Dict[Hashable, Decimal]:
    # paying back a debt moves the payer up and the receiver down
    result = dict(net)
    for s in settlements:
        amount = to_decimal(s.amount)
        result[s.from_user] = qround(result.get(s.from_user, ZERO) + amount)
        result[s.to_user] = qround(result.get(s.to_user, ZERO) - amount)
    return result


def build_settlement_plan(net: Dict[Hashable, Decimal]) -> List[Transfer]:
    # Drop near-zero balances
    net = {
        uid: qround(amt)
        for uid, amt in net.items()
        if abs(amt) >= CENTS
    }

    transfers = simplify_debts(net)
    logger.debug("settlement plan with %d transfers for %d users", len(transfers), len(net))
    return transfers


def validate_balance_accuracy(expenses: Sequence[ExpenseRecord]) -> BalanceAccuracy:
    total_expenses = ZERO
    total_splits = ZERO

    for expense in expenses:
        total_expenses += to_decimal(expense.amount)
        for s in expense.splits:
            total_splits += to_decimal(s.amount)

    discrepancy = abs(total_expenses - total_splits)

    return BalanceAccuracy(
        is_valid=discrepancy < CENTS,
        total_expenses=qround(total_expenses),
        total_splits=qround(total_splits),
        discrepancy=qround(discrepancy),
    )
