from __future__ import annotations

from takehome.wizard.estimator import (
    BenefitOverrideRequest,
    BenefitsRequest,
    BreakevenRequest,
    ComparisonRequest,
    ContractorRequest,
    EmployeeRequest,
    estimate_benefits,
    estimate_breakeven,
    estimate_comparison,
    estimate_contractor,
    estimate_employee,
    price_benefits,
    round_cents,
)

__all__ = [
    "BenefitOverrideRequest",
    "BenefitsRequest",
    "BreakevenRequest",
    "ComparisonRequest",
    "ContractorRequest",
    "EmployeeRequest",
    "estimate_benefits",
    "estimate_breakeven",
    "estimate_comparison",
    "estimate_contractor",
    "estimate_employee",
    "price_benefits",
    "round_cents",
]
