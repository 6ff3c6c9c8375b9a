from dataclasses import dataclass, field
from decimal import Decimal
from typing import Hashable, Sequence


@dataclass(frozen=True)
class SplitShare:
    user_id: Hashable
    amount: Decimal


@dataclass(frozen=True)
class ExpenseRecord:
    amount: Decimal
    paid_by: Hashable
    splits: Sequence[SplitShare] = field(default_factory=tuple)

    def share_of(self, user_id: Hashable) -> Decimal:
        # first matching entry wins; absent users owe nothing
        for s in self.splits:
            if s.user_id == user_id:
                return s.amount
        return Decimal("0")


@dataclass(frozen=True)
class SettlementRecord:
    from_user: Hashable
    to_user: Hashable
    amount: Decimal
