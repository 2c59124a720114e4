"""DebtSage debt-repayment strategy simulation package."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .errors import DebtSageError, InvalidAccountError, InvalidPaymentError
from .models import ComparisonResult, DebtAccount, RepaymentPolicy, SimulationResult
from .services.comparison import compare, recommend_policy, what_if_sweep
from .services.debts import simulate

__all__ = [
    "BaseConfig",
    "ComparisonResult",
    "DebtAccount",
    "DebtSageError",
    "DevConfig",
    "InvalidAccountError",
    "InvalidPaymentError",
    "RepaymentPolicy",
    "SimulationResult",
    "compare",
    "recommend_policy",
    "simulate",
    "what_if_sweep",
]
