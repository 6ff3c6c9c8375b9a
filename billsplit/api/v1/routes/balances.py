from fastapi import APIRouter

from billsplit.schemas.balances import (
    AccuracyRequest,
    BalanceAccuracyOut,
    BalanceLineOut,
    GroupBalanceOut,
    GroupBalanceRequest,
    NetBalanceOut,
    NetBalanceRequest,
    Settlement,
)
from billsplit.services.balance_services import (
    apply_settlements,
    build_settlement_plan,
    compute_group_net_balances,
    describe_balance,
    validate_balance_accuracy,
)

router = APIRouter()


@router.post("/net", response_model=NetBalanceOut, description="net balance between two users")
async def net_balance(data: NetBalanceRequest):
    expenses = [e.to_record() for e in data.expenses]
    balance = describe_balance(expenses, data.user_a, data.user_b)

    return NetBalanceOut(
        user_a=data.user_a,
        user_b=data.user_b,
        net_balance=balance.net_balance,
        net_amount=balance.net_amount,
        direction=balance.direction,
        details=[BalanceLineOut.model_validate(line) for line in balance.details],
    )


@router.post("/group", response_model=GroupBalanceOut, description="group net positions and settle-up plan")
async def group_balances(data: GroupBalanceRequest):
    net = compute_group_net_balances([e.to_record() for e in data.expenses])
    net = apply_settlements(net, [s.to_record() for s in data.settlements])

    transfers = build_settlement_plan(net)

    return GroupBalanceOut(
        net={uid: amt for uid, amt in net.items() if amt != 0},
        settlements=[
            Settlement(from_id=f, to_id=t, amount=a)
            for f, t, a in transfers
        ],
    )


@router.post("/accuracy", response_model=BalanceAccuracyOut, description="check that splits add up to expense totals")
async def balance_accuracy(data: AccuracyRequest):
    report = validate_balance_accuracy([e.to_record() for e in data.expenses])
    return BalanceAccuracyOut.model_validate(report)
