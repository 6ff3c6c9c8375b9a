from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Hashable, Sequence, Tuple, Union


class SplitMethod(str, Enum):
    EQUAL = "equal"
    EXACT = "exact"
    PERCENTAGE = "percentage"


@dataclass(frozen=True)
class EqualSplit:
    total_amount: Decimal
    participant_ids: Sequence[Hashable] = field(default_factory=tuple)

    method = SplitMethod.EQUAL


@dataclass(frozen=True)
class ExactSplit:
    total_amount: Decimal
    entries: Sequence[Tuple[Hashable, Decimal]] = field(default_factory=tuple)

    method = SplitMethod.EXACT


@dataclass(frozen=True)
class PercentageSplit:
    total_amount: Decimal
    entries: Sequence[Tuple[Hashable, Decimal]] = field(default_factory=tuple)

    method = SplitMethod.PERCENTAGE


SplitInput = Union[EqualSplit, ExactSplit, PercentageSplit]
