"""Pure calculation engine: tax tables, scenario computations and the solver."""
from __future__ import annotations

from takehome.core.benefits import (
    BenefitOverride,
    build_benefit_items,
    reset_overrides,
    resolve_benefit_items,
    update_override,
)
from takehome.core.comparison import build_comparison_rows, summarize_difference
from takehome.core.errors import InvalidArgumentError, UnknownFilingStatusError
from takehome.core.tax_years import (
    TAX_YEAR,
    compute_contractor_scenario,
    compute_employee_scenario,
    federal_tax,
    solve_breakeven_rate,
    state_tax,
)

__all__ = [
    "BenefitOverride",
    "InvalidArgumentError",
    "TAX_YEAR",
    "UnknownFilingStatusError",
    "build_benefit_items",
    "build_comparison_rows",
    "compute_contractor_scenario",
    "compute_employee_scenario",
    "federal_tax",
    "reset_overrides",
    "resolve_benefit_items",
    "solve_breakeven_rate",
    "state_tax",
    "summarize_difference",
    "update_override",
]
