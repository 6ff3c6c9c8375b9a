from fastapi import APIRouter, Depends

from billsplit.core.config import Settings
from billsplit.core.dependencies import get_app_settings
from billsplit.core.utils import qround
from billsplit.schemas.split import SplitCreate, SplitOut, SplitResultOut, SplitValidate, SplitValidateOut
from billsplit.services.split_services import calculate_splits, validate_split_amounts

router = APIRouter()

@router.post("/", response_model=SplitResultOut, description="compute per-user amounts for an expense")
async def split_expense(data: SplitCreate, settings: Settings = Depends(get_app_settings)):
    shares = calculate_splits(
        data.to_split_input(),
        redistribute_remainder=settings.REDISTRIBUTE_PERCENTAGE_REMAINDER,
    )
    return SplitResultOut(
        method=data.method,
        total_amount=qround(data.total_amount),
        splits=[SplitOut.model_validate(s) for s in shares],
    )

@router.post("/validate", response_model=SplitValidateOut, description="check that amounts add up to the total")
async def validate_splits(data: SplitValidate):
    return SplitValidateOut(valid=validate_split_amounts(data.total_amount, data.amounts))
