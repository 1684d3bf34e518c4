from __future__ import annotations

from takehome.core.tax_years.y2025.calc import (
    breakeven_saturated,
    compute_contractor_scenario,
    compute_employee_scenario,
    solve_breakeven_rate,
)
from takehome.core.tax_years.y2025.california import california_tax_2025
from takehome.core.tax_years.y2025.federal import federal_tax_2025
from takehome.core.validate import require_finite

TAX_YEAR = 2025


def federal_tax(taxable: float, filing: str) -> float:
    require_finite("taxable", taxable)
    return federal_tax_2025(taxable, filing)


def state_tax(taxable: float, filing: str) -> float:
    require_finite("taxable", taxable)
    return california_tax_2025(taxable, filing)


__all__ = [
    "TAX_YEAR",
    "breakeven_saturated",
    "compute_contractor_scenario",
    "compute_employee_scenario",
    "federal_tax",
    "solve_breakeven_rate",
    "state_tax",
]
