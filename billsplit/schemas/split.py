from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field

from billsplit.core.exceptions import InvalidSplitError
from billsplit.models.split import EqualSplit, ExactSplit, PercentageSplit, SplitInput, SplitMethod


class SplitEntry(BaseModel):
    user_id: str
    amount: Decimal | None = Field(default=None, ge=0, decimal_places=2)
    percentage: Decimal | None = Field(default=None, ge=0, le=100)


class SplitCreate(BaseModel):
    method: SplitMethod
    total_amount: Decimal = Field(gt=0)
    splits: List[SplitEntry] = Field(min_length=1)

    def to_split_input(self) -> SplitInput:
        if self.method == SplitMethod.EQUAL:
            return EqualSplit(
                total_amount=self.total_amount,
                participant_ids=tuple(s.user_id for s in self.splits),
            )

        if self.method == SplitMethod.EXACT:
            if any(s.amount is None for s in self.splits):
                raise InvalidSplitError("every split needs an amount for exact splits")
            return ExactSplit(
                total_amount=self.total_amount,
                entries=tuple((s.user_id, s.amount) for s in self.splits),
            )

        if any(s.percentage is None for s in self.splits):
            raise InvalidSplitError("every split needs a percentage for percentage splits")
        return PercentageSplit(
            total_amount=self.total_amount,
            entries=tuple((s.user_id, s.percentage) for s in self.splits),
        )


class SplitOut(BaseModel):
    user_id: str
    amount: Decimal

    class Config:
        from_attributes = True


class SplitResultOut(BaseModel):
    method: SplitMethod
    total_amount: Decimal
    splits: List[SplitOut]


class SplitValidate(BaseModel):
    total_amount: Decimal
    amounts: List[Decimal]


class SplitValidateOut(BaseModel):
    valid: bool
