"""Result records produced by the simulator and the comparator."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Mapping

from .account import AccountId


class RepaymentPolicy(str, Enum):
    """Order in which surplus payment is directed across accounts."""

    AVALANCHE = "avalanche"
    SNOWBALL = "snowball"

    @classmethod
    def parse(cls, value: "RepaymentPolicy | str") -> "RepaymentPolicy":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ValueError(f"Invalid debt payoff strategy: {value!r}")

    @property
    def label(self) -> str:
        return "Debt Avalanche" if self is RepaymentPolicy.AVALANCHE else "Debt Snowball"


@dataclass(frozen=True, slots=True)
class AccountPayment:
    """Money movement on one account during one simulated month."""

    payment: Decimal
    interest: Decimal
    remaining_balance: Decimal


@dataclass(frozen=True, slots=True)
class MonthlyRow:
    """Per-account detail for a single simulated month."""

    month: int
    payments: Mapping[AccountId, AccountPayment]
    total_balance: Decimal


@dataclass(frozen=True, slots=True)
class TrajectoryPoint:
    month: int
    balance: Decimal


@dataclass(frozen=True, slots=True)
class SimulationResult:
    """Outcome of a single payoff simulation.

    ``payoff_months`` equals the safety horizon when ``converged`` is false;
    callers must check the flag before presenting it as a payoff date.
    """

    policy_name: RepaymentPolicy
    extra_monthly_payment: Decimal
    payoff_months: int
    total_interest_paid: Decimal
    total_paid: Decimal
    starting_balance: Decimal
    converged: bool
    monthly_trajectory: tuple[TrajectoryPoint, ...] = ()
    schedule: tuple[MonthlyRow, ...] = ()
    payoff_order: tuple[AccountId, ...] = ()
    account_payoff_months: Mapping[AccountId, int] = field(default_factory=dict)

    @property
    def remaining_balance(self) -> Decimal:
        if not self.monthly_trajectory:
            return Decimal(0)
        return self.monthly_trajectory[-1].balance

    @property
    def non_convergent(self) -> bool:
        return not self.converged


@dataclass(frozen=True, slots=True)
class WhatIfScenario:
    """Effect of raising the extra payment by ``increment`` each month."""

    increment: Decimal
    extra_monthly_payment: Decimal
    payoff_months: int
    total_interest_paid: Decimal
    months_saved: int
    interest_saved: Decimal
    converged: bool


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Avalanche versus snowball, measured against a zero-extra baseline."""

    avalanche: SimulationResult
    snowball: SimulationResult
    baseline: SimulationResult
    recommended_policy: RepaymentPolicy
    interest_delta: Decimal
    what_if: tuple[WhatIfScenario, ...] = ()

    @property
    def recommended(self) -> SimulationResult:
        if self.recommended_policy is RepaymentPolicy.SNOWBALL:
            return self.snowball
        return self.avalanche

    @property
    def policy_interest_difference(self) -> Decimal:
        """Absolute interest gap between the two policies."""
        return abs(self.avalanche.total_interest_paid - self.snowball.total_interest_paid)

    def result_for(self, policy: RepaymentPolicy | str) -> SimulationResult:
        parsed = RepaymentPolicy.parse(policy)
        return self.avalanche if parsed is RepaymentPolicy.AVALANCHE else self.snowball


__all__ = [
    "AccountPayment",
    "ComparisonResult",
    "MonthlyRow",
    "RepaymentPolicy",
    "SimulationResult",
    "TrajectoryPoint",
    "WhatIfScenario",
]
