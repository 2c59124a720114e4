"""Account snapshots and simulation result records."""

from .account import DebtAccount, to_decimal
from .results import (
    AccountPayment,
    ComparisonResult,
    MonthlyRow,
    RepaymentPolicy,
    SimulationResult,
    TrajectoryPoint,
    WhatIfScenario,
)

__all__ = [
    "AccountPayment",
    "ComparisonResult",
    "DebtAccount",
    "MonthlyRow",
    "RepaymentPolicy",
    "SimulationResult",
    "TrajectoryPoint",
    "WhatIfScenario",
    "to_decimal",
]
