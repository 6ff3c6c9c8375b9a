from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field

from billsplit.models.expense import ExpenseRecord, SettlementRecord, SplitShare


class ExpenseSplitIn(BaseModel):
    user_id: str
    amount: Decimal = Field(ge=0)


class ExpenseIn(BaseModel):
    amount: Decimal = Field(gt=0)
    paid_by: str
    description: str | None = None
    splits: List[ExpenseSplitIn] = []

    def to_record(self) -> ExpenseRecord:
        return ExpenseRecord(
            amount=self.amount,
            paid_by=self.paid_by,
            splits=tuple(SplitShare(user_id=s.user_id, amount=s.amount) for s in self.splits),
        )


class SettlementIn(BaseModel):
    from_user: str
    to_user: str
    amount: Decimal = Field(gt=0)

    def to_record(self) -> SettlementRecord:
        return SettlementRecord(from_user=self.from_user, to_user=self.to_user, amount=self.amount)


class NetBalanceRequest(BaseModel):
    expenses: List[ExpenseIn]
    user_a: str
    user_b: str


class BalanceLineOut(BaseModel):
    from_user: str
    to_user: str
    amount: Decimal

    class Config:
        from_attributes = True


class NetBalanceOut(BaseModel):
    user_a: str
    user_b: str
    net_balance: Decimal
    net_amount: Decimal
    direction: str
    details: List[BalanceLineOut]


class GroupBalanceRequest(BaseModel):
    expenses: List[ExpenseIn]
    settlements: List[SettlementIn] = []


class Settlement(BaseModel):
    from_id: str
    to_id: str
    amount: Decimal


class GroupBalanceOut(BaseModel):
    net: dict[str, Decimal]
    settlements: list[Settlement]


class AccuracyRequest(BaseModel):
    expenses: List[ExpenseIn]


class BalanceAccuracyOut(BaseModel):
    is_valid: bool
    total_expenses: Decimal
    total_splits: Decimal
    discrepancy: Decimal

    class Config:
        from_attributes = True
