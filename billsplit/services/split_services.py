import logging
from decimal import Decimal, ROUND_FLOOR
from typing import Hashable, List, Sequence, Tuple

from billsplit.core.exceptions import InvalidSplitError
from billsplit.core.utils import CENTS, ZERO, Numeric, money_sum, qround, to_decimal
from billsplit.models.expense import ExpenseRecord, SplitShare
from billsplit.models.split import SplitInput, SplitMethod

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")
PERCENT_TOLERANCE = Decimal("0.01")


def compute_equal_splits(total_amount: Numeric, participant_count: int) -> List[Decimal]:
    """
    Split ``total_amount`` into ``participant_count`` cent-exact shares.

    Every participant gets the floored per-head amount and the leftover cents
    go one each to the earliest participants, so the shares add up to the
    rounded total and differ by at most one cent. Callers who want the extra
    cents to land elsewhere must reorder the participants themselves.
    """
    total = to_decimal(total_amount)

    if participant_count < 1:
        raise InvalidSplitError("participant count must be at least 1")
    if total <= 0:
        raise InvalidSplitError("total amount must be positive")

    base = (total * HUNDRED / participant_count).to_integral_value(rounding=ROUND_FLOOR) / HUNDRED
    remainder = qround(total - base * participant_count)
    remainder_cents = min(int(remainder * HUNDRED), participant_count)

    splits = [base + CENTS if i < remainder_cents else base for i in range(participant_count)]
    splits = [qround(s) for s in splits]

    logger.debug(
        "equal split of %s over %d participants, %d remainder cents",
        total, participant_count, remainder_cents,
    )
    return splits


def compute_percentage_splits(
    total_amount: Numeric,
    percentages: Sequence[Numeric],
    redistribute_remainder: bool = False,
) -> List[Decimal]:
    """
    Split ``total_amount`` by percentage, rounding every share to cents.

    Shares are rounded independently, so their sum can be off from the total
    by a few cents. With ``redistribute_remainder`` the difference is moved
    one cent at a time onto the first participants that have a non-zero
    percentage, the same way equal splits hand out their remainder. Cents
    are only taken back from shares that still hold at least one cent.
    """
    total = to_decimal(total_amount)
    pcts = [to_decimal(p) for p in percentages]

    if not pcts:
        raise InvalidSplitError("at least one percentage is required")
    if total < 0:
        raise InvalidSplitError("total amount cannot be negative")
    if any(p < 0 or p > HUNDRED for p in pcts):
        raise InvalidSplitError("percentages must be between 0 and 100")
    if abs(money_sum(pcts) - HUNDRED) > PERCENT_TOLERANCE:
        raise InvalidSplitError("percentages must sum to 100")

    splits = [qround(total * p / HUNDRED) for p in pcts]

    if redistribute_remainder:
        splits = _redistribute(splits, pcts, qround(total))

    return splits


def _redistribute(splits: List[Decimal], pcts: List[Decimal], target: Decimal) -> List[Decimal]:
    drift_cents = int((target - money_sum(splits)) / CENTS)
    if drift_cents == 0:
        return splits

    step = CENTS if drift_cents > 0 else -CENTS
    result = list(splits)

    def can_take(i: int) -> bool:
        if pcts[i] <= 0:
            return False
        # never push a share below zero
        return step > 0 or result[i] >= CENTS

    idx = 0
    for _ in range(abs(drift_cents)):
        # the shares sum above target when drift is negative, so one is always positive
        while not can_take(idx % len(result)):
            idx += 1
        pos = idx % len(result)
        result[pos] = qround(result[pos] + step)
        idx += 1

    logger.debug("moved %d cents of percentage rounding drift", drift_cents)
    return result


def validate_split_amounts(total_amount: Numeric, split_amounts: Sequence[Numeric]) -> bool:
    return abs(qround(money_sum(split_amounts)) - qround(total_amount)) < CENTS


def compute_exact_splits(
    total_amount: Numeric,
    entries: Sequence[Tuple[Hashable, Numeric]],
) -> List[SplitShare]:
    if not entries:
        raise InvalidSplitError("at least one split is required")

    if any(to_decimal(amount) < 0 for _, amount in entries):
        raise InvalidSplitError("split amounts cannot be negative")

    # check what gets stored, not what was sent
    shares = [SplitShare(user_id=uid, amount=qround(amount)) for uid, amount in entries]
    if not validate_split_amounts(total_amount, [s.amount for s in shares]):
        raise InvalidSplitError("split amounts must equal the total amount")

    return shares


def calculate_splits(split_input: SplitInput, redistribute_remainder: bool = False) -> List[SplitShare]:
    """Run the calculator matching the split variant and pair amounts with user ids."""
    method = getattr(split_input, "method", None)

    if method == SplitMethod.EQUAL:
        ids = list(split_input.participant_ids)
        amounts = compute_equal_splits(split_input.total_amount, len(ids))
        return [SplitShare(user_id=uid, amount=amt) for uid, amt in zip(ids, amounts)]

    if method == SplitMethod.PERCENTAGE:
        ids = [uid for uid, _ in split_input.entries]
        amounts = compute_percentage_splits(
            split_input.total_amount,
            [pct for _, pct in split_input.entries],
            redistribute_remainder=redistribute_remainder,
        )
        return [SplitShare(user_id=uid, amount=amt) for uid, amt in zip(ids, amounts)]

    if method == SplitMethod.EXACT:
        return compute_exact_splits(split_input.total_amount, split_input.entries)

    raise InvalidSplitError(f"unsupported split type: {type(split_input).__name__}")


def compute_net_balance(
    expenses: Sequence[ExpenseRecord],
    user_a: Hashable,
    user_b: Hashable,
) -> Decimal:
    """
    Net amount between two users over ``expenses``.

    Positive means ``user_b`` owes ``user_a``, negative the reverse. Only
    expenses paid by one of the two count; other participants are ignored.
    """
    if user_a == user_b:
        return qround(ZERO)

    balance = ZERO
    for expense in expenses:
        if expense.paid_by == user_a:
            balance += to_decimal(expense.share_of(user_b))
        elif expense.paid_by == user_b:
            balance -= to_decimal(expense.share_of(user_a))

    return qround(balance)
