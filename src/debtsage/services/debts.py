"""Debt payoff calculators (snowball and avalanche)."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal, localcontext
from typing import Any, Iterable

from ..config import DEFAULT_EPSILON, DEFAULT_HORIZON_MONTHS
from ..errors import InvalidAccountError, InvalidPaymentError
from ..logging_config import get_logger
from ..models.account import DebtAccount, to_decimal
from ..models.results import (
    AccountPayment,
    MonthlyRow,
    RepaymentPolicy,
    SimulationResult,
    TrajectoryPoint,
)

logger = get_logger(__name__)

_ZERO = Decimal(0)
_PRECISION = 28


@dataclass(slots=True)
class _Position:
    """Mutable per-run balance for one account; never shared between runs."""

    account: DebtAccount
    balance: Decimal


def snapshot_accounts(accounts: Iterable[Any]) -> list[DebtAccount]:
    """Validate ``accounts`` and return immutable snapshots in caller order."""

    snapshots: list[DebtAccount] = []
    seen: set[Any] = set()
    for source in accounts:
        account = DebtAccount.from_object(source)
        if account.id in seen:
            raise InvalidAccountError(
                f"duplicate account id {account.id!r}", field="id", account_id=account.id
            )
        seen.add(account.id)
        snapshots.append(account)
    return snapshots


def validate_extra_payment(value: Any) -> Decimal:
    """Return the extra payment as ``Decimal`` or raise ``InvalidPaymentError``."""

    try:
        return to_decimal(value, field="extra_monthly_payment")
    except InvalidAccountError as exc:
        raise InvalidPaymentError(str(exc)) from exc


def sort_accounts(
    accounts: Iterable[DebtAccount], policy: RepaymentPolicy | str
) -> list[DebtAccount]:
    """Return accounts with a positive balance in payoff priority order.

    Avalanche: highest APR first, ties broken by larger balance.
    Snowball: smallest balance first, ties broken by higher APR.
    Remaining ties keep the caller's order.
    """

    policy = RepaymentPolicy.parse(policy)
    active = [account for account in accounts if account.balance > 0]
    if policy is RepaymentPolicy.AVALANCHE:
        return sorted(active, key=lambda a: (-a.apr, -a.balance))
    return sorted(active, key=lambda a: (a.balance, -a.apr))


def simulate(
    accounts: Iterable[Any],
    extra_monthly_payment: Any = 0,
    policy: RepaymentPolicy | str = RepaymentPolicy.AVALANCHE,
    *,
    horizon: int = DEFAULT_HORIZON_MONTHS,
    epsilon: Decimal = DEFAULT_EPSILON,
) -> SimulationResult:
    """Simulate month-by-month payoff of ``accounts`` under ``policy``.

    Each month interest accrues on every open balance first. The payment pool
    is then rebuilt from the extra payment plus the minimums of the accounts
    still open, so a cleared account stops contributing. Every open account
    pays its own minimum, then whatever is left of the pool goes to accounts
    in priority order, capped at each balance. The priority order is fixed
    when the run starts.

    The run stops once the aggregate balance is at or below ``epsilon``;
    accounts left holding a sub-epsilon balance at that point count as paid
    off in the final month. When ``horizon`` months pass without that
    happening the result is flagged ``converged=False`` and ``payoff_months``
    equals ``horizon``.

    Raises:
        InvalidAccountError: an account has a negative or non-numeric field.
        InvalidPaymentError: ``extra_monthly_payment`` is negative.
        ValueError: ``policy`` is not avalanche or snowball, or ``horizon`` is not positive.
    """

    policy = RepaymentPolicy.parse(policy)
    snapshots = snapshot_accounts(accounts)
    extra = validate_extra_payment(extra_monthly_payment)
    epsilon = Decimal(str(epsilon))
    if horizon <= 0:
        raise ValueError("horizon must be a positive number of months")

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        ctx.rounding = ROUND_HALF_EVEN
        return _run(snapshots, extra, policy, horizon=horizon, epsilon=epsilon)


def _run(
    snapshots: list[DebtAccount],
    extra: Decimal,
    policy: RepaymentPolicy,
    *,
    horizon: int,
    epsilon: Decimal,
) -> SimulationResult:
    positions = [
        _Position(account=account, balance=account.balance)
        for account in sort_accounts(snapshots, policy)
    ]
    starting_balance = sum((p.balance for p in positions), _ZERO)

    total_interest = _ZERO
    total_paid = _ZERO
    trajectory: list[TrajectoryPoint] = []
    schedule: list[MonthlyRow] = []
    payoff_order: list[Any] = []
    payoff_months: dict[Any, int] = {}

    month = 0
    remaining = starting_balance
    while positions and remaining > epsilon and month < horizon:
        month += 1
        interest_by_id: dict[Any, Decimal] = {}
        paid_by_id: dict[Any, Decimal] = {}

        for pos in positions:
            if pos.balance <= 0:
                continue
            interest = pos.balance * pos.account.monthly_rate
            pos.balance += interest
            total_interest += interest
            interest_by_id[pos.account.id] = interest

        pool = extra + sum(
            (p.account.minimum_payment for p in positions if p.balance > 0), _ZERO
        )
        # Minimums first, each capped at its own balance.
        for pos in positions:
            if pos.balance <= 0:
                continue
            payment = min(pos.account.minimum_payment, pos.balance)
            pos.balance -= payment
            pool -= payment
            paid_by_id[pos.account.id] = payment

        # Extra and unspent minimums cascade in priority order.
        for pos in positions:
            if pool <= epsilon:
                break
            if pos.balance <= 0:
                continue
            payment = min(pos.balance, pool)
            pos.balance -= payment
            pool -= payment
            paid_by_id[pos.account.id] = paid_by_id.get(pos.account.id, _ZERO) + payment

        payments: dict[Any, AccountPayment] = {}
        for pos in positions:
            account_id = pos.account.id
            if account_id not in interest_by_id:
                continue
            paid = paid_by_id.get(account_id, _ZERO)
            total_paid += paid
            payments[account_id] = AccountPayment(
                payment=paid,
                interest=interest_by_id[account_id],
                remaining_balance=pos.balance,
            )
            if pos.balance <= 0 and account_id not in payoff_months:
                payoff_months[account_id] = month
                payoff_order.append(account_id)

        remaining = sum((p.balance for p in positions), _ZERO)
        trajectory.append(TrajectoryPoint(month=month, balance=remaining))
        schedule.append(MonthlyRow(month=month, payments=payments, total_balance=remaining))

    converged = remaining <= epsilon
    if converged:
        for pos in positions:
            if pos.account.id not in payoff_months:
                payoff_months[pos.account.id] = month
                payoff_order.append(pos.account.id)

    result = SimulationResult(
        policy_name=policy,
        extra_monthly_payment=extra,
        payoff_months=month,
        total_interest_paid=total_interest,
        total_paid=total_paid,
        starting_balance=starting_balance,
        converged=converged,
        monthly_trajectory=tuple(trajectory),
        schedule=tuple(schedule),
        payoff_order=tuple(payoff_order),
        account_payoff_months=payoff_months,
    )

    if not converged:
        logger.warning(
            "Payoff simulation did not converge within horizon",
            extra={
                "policy": policy.value,
                "horizon_months": horizon,
                "remaining_balance": remaining,
                "accounts": len(positions),
            },
        )
    else:
        logger.debug(
            "Payoff simulation finished",
            extra={
                "policy": policy.value,
                "months": month,
                "total_interest": total_interest,
                "accounts": len(positions),
            },
        )
    return result


def schedule_summary(result: SimulationResult) -> tuple[int, Decimal, bool]:
    """Return (payoff_months, total_interest, converged)."""

    return result.payoff_months, result.total_interest_paid, result.converged


def snowball_schedule(
    *, debts: Iterable[Any], surplus: Any = 0, **options: Any
) -> SimulationResult:
    """Return payoff simulation prioritizing smallest balances first."""
    return simulate(debts, surplus, RepaymentPolicy.SNOWBALL, **options)


def avalanche_schedule(
    *, debts: Iterable[Any], surplus: Any = 0, **options: Any
) -> SimulationResult:
    """Return payoff simulation prioritizing highest APR first."""
    return simulate(debts, surplus, RepaymentPolicy.AVALANCHE, **options)


__all__ = [
    "avalanche_schedule",
    "schedule_summary",
    "simulate",
    "snapshot_accounts",
    "snowball_schedule",
    "sort_accounts",
    "validate_extra_payment",
]
