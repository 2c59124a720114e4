"""Compare avalanche and snowball plans and derive a recommendation."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, Sequence

from ..config import DEFAULT_EPSILON, DEFAULT_HORIZON_MONTHS, DEFAULT_WHAT_IF_INCREMENTS
from ..logging_config import get_logger
from ..models.account import DebtAccount
from ..models.results import ComparisonResult, RepaymentPolicy, SimulationResult, WhatIfScenario
from .debts import simulate, snapshot_accounts, validate_extra_payment

logger = get_logger(__name__)

DEFAULT_POLICY = RepaymentPolicy.AVALANCHE


def recommend_policy(avalanche: SimulationResult, snowball: SimulationResult) -> RepaymentPolicy:
    """Pick the cheaper plan.

    Convergence is ranked before anything else: a plan that does not pay off
    within the horizon never beats one that does, whatever its interest, since
    its interest stops counting at the horizon. Between plans that agree on
    convergence, lower total interest wins, then the shorter payoff, and
    identical schedules fall back to avalanche.
    """

    def rank(result: SimulationResult) -> tuple[bool, Decimal, int]:
        return (not result.converged, result.total_interest_paid, result.payoff_months)

    if rank(snowball) < rank(avalanche):
        return RepaymentPolicy.SNOWBALL
    return RepaymentPolicy.AVALANCHE


def what_if_sweep(
    accounts: Iterable[Any],
    extra_monthly_payment: Any,
    policy: RepaymentPolicy | str,
    increments: Sequence[Any] | None = None,
    *,
    reference: SimulationResult | None = None,
    horizon: int = DEFAULT_HORIZON_MONTHS,
    epsilon: Decimal = DEFAULT_EPSILON,
) -> tuple[WhatIfScenario, ...]:
    """Re-run ``simulate`` with larger extra payments and report the savings.

    ``months_saved`` and ``interest_saved`` are measured against ``reference``
    (the plan at the current extra payment), which is simulated when omitted.
    """

    policy = RepaymentPolicy.parse(policy)
    snapshots = snapshot_accounts(accounts)
    extra = validate_extra_payment(extra_monthly_payment)
    steps = DEFAULT_WHAT_IF_INCREMENTS if increments is None else increments
    if reference is None:
        reference = simulate(snapshots, extra, policy, horizon=horizon, epsilon=epsilon)

    scenarios: list[WhatIfScenario] = []
    for raw_step in steps:
        step = validate_extra_payment(raw_step)
        faster = simulate(snapshots, extra + step, policy, horizon=horizon, epsilon=epsilon)
        scenarios.append(
            WhatIfScenario(
                increment=step,
                extra_monthly_payment=extra + step,
                payoff_months=faster.payoff_months,
                total_interest_paid=faster.total_interest_paid,
                months_saved=max(0, reference.payoff_months - faster.payoff_months),
                interest_saved=max(
                    Decimal(0), reference.total_interest_paid - faster.total_interest_paid
                ),
                converged=faster.converged,
            )
        )
    return tuple(scenarios)


def compare(
    accounts: Iterable[Any],
    extra_monthly_payment: Any = 0,
    *,
    increments: Sequence[Any] | None = None,
    horizon: int = DEFAULT_HORIZON_MONTHS,
    epsilon: Decimal = DEFAULT_EPSILON,
) -> ComparisonResult:
    """Run both policies plus a zero-extra baseline and recommend one.

    ``interest_delta`` is the interest the extra payment saves against the
    minimums-only baseline, clamped at zero. The baseline runs under the
    recommended policy; without an extra payment the order only decides where
    an unspent minimum lands in an account's final month. Empty input yields
    all-zero results with avalanche as the neutral recommendation.
    """

    snapshots: list[DebtAccount] = snapshot_accounts(accounts)
    extra = validate_extra_payment(extra_monthly_payment)
    options = {"horizon": horizon, "epsilon": epsilon}

    avalanche = simulate(snapshots, extra, RepaymentPolicy.AVALANCHE, **options)
    snowball = simulate(snapshots, extra, RepaymentPolicy.SNOWBALL, **options)

    if not any(account.balance > 0 for account in snapshots):
        recommended_policy = DEFAULT_POLICY
    else:
        recommended_policy = recommend_policy(avalanche, snowball)
    recommended = avalanche if recommended_policy is RepaymentPolicy.AVALANCHE else snowball

    baseline = simulate(snapshots, 0, recommended_policy, **options)
    interest_delta = max(
        Decimal(0), baseline.total_interest_paid - recommended.total_interest_paid
    )

    what_if: tuple[WhatIfScenario, ...] = ()
    if snapshots and recommended.starting_balance > 0:
        what_if = what_if_sweep(
            snapshots,
            extra,
            recommended_policy,
            increments,
            reference=recommended,
            **options,
        )

    logger.info(
        "Compared repayment policies",
        extra={
            "accounts": len(snapshots),
            "extra_monthly_payment": extra,
            "recommended_policy": recommended_policy.value,
            "interest_delta": interest_delta,
            "avalanche_months": avalanche.payoff_months,
            "snowball_months": snowball.payoff_months,
        },
    )

    return ComparisonResult(
        avalanche=avalanche,
        snowball=snowball,
        baseline=baseline,
        recommended_policy=recommended_policy,
        interest_delta=interest_delta,
        what_if=what_if,
    )


__all__ = ["DEFAULT_POLICY", "compare", "recommend_policy", "what_if_sweep"]
