from __future__ import annotations

import logging
from typing import Iterable

from takehome.core.benefits import benefits_value
from takehome.core.la_city import la_business_tax
from takehome.core.models import BenefitItem, ContractResult, W2Result
from takehome.core.payroll.limits_2025 import employee_fica_2025, self_employment_tax_2025
from takehome.core.qbi import qbi_deduction_2025, qualified_business_income
from takehome.core.tax_years.y2025.california import (
    california_sdi_2025,
    california_std_deduction_2025,
    california_tax_2025,
)
from takehome.core.tax_years.y2025.federal import federal_std_deduction_2025, federal_tax_2025
from takehome.core.validate import require_finite, require_valid

logger = logging.getLogger("takehome.calc")

BREAKEVEN_MAX_RATE = 500.0
BREAKEVEN_ITERATIONS = 80
MIN_BREAKEVEN_ITERATIONS = 40
# distance from a bound at which the solver result counts as saturated
_SATURATION_MARGIN = 0.01


def _percent_of(part: float, whole: float) -> float:
    return part / whole * 100 if whole > 0 else 0.0


def compute_employee_scenario(
    rate: float,
    hours: float,
    filing: str,
    benefits: Iterable[BenefitItem] = (),
) -> W2Result:
    require_valid(rate=rate, hours=hours)
    gross = rate * hours

    fica = employee_fica_2025(gross, filing)
    sdi = california_sdi_2025(gross)

    taxable_fed = max(0.0, gross - federal_std_deduction_2025(filing))
    taxable_ca = max(0.0, gross - california_std_deduction_2025(filing))
    fed_tax = federal_tax_2025(taxable_fed, filing)
    ca_tax = california_tax_2025(taxable_ca, filing)

    # benefits are a post-tax value add; they never reduce taxable wages
    value = benefits_value(benefits)

    total_tax = (
        fed_tax
        + ca_tax
        + fica["social_security"]
        + fica["medicare"]
        + fica["additional_medicare"]
        + sdi
    )
    net = gross - total_tax + value
    return W2Result(
        gross=gross,
        fed_tax=fed_tax,
        state_tax=ca_tax,
        fica_ss=fica["social_security"],
        fica_medicare=fica["medicare"],
        fica_additional_medicare=fica["additional_medicare"],
        state_sdi=sdi,
        total_tax=total_tax,
        benefits_value=value,
        net=net,
        effective_rate=_percent_of(total_tax, gross),
        monthly=net / 12,
    )


def compute_contractor_scenario(
    rate: float,
    hours: float,
    filing: str,
    health_insurance_cost: float = 0.0,
    business_expenses: float = 0.0,
    local_tax_class: str = "multimedia",
    is_service_trade: bool = True,
) -> ContractResult:
    """Net income for a 1099 contractor billing ``rate`` for ``hours``.

    Half of self-employment tax, self-employed health insurance and business
    expenses come off gross before income tax. The QBI deduction applies to
    federal tax only; California does not recognise it. Health insurance and
    business expenses are also subtracted from net because they are cash paid
    out, not only deductions.
    """
    require_valid(
        rate=rate,
        hours=hours,
        health_insurance_cost=health_insurance_cost,
        business_expenses=business_expenses,
    )
    gross = rate * hours

    se = self_employment_tax_2025(gross, filing)
    se_deduction_half = se["total"] / 2

    agi = gross - se_deduction_half - health_insurance_cost - business_expenses

    qbi = qualified_business_income(gross, business_expenses, se_deduction_half)
    qbi_deduction = qbi_deduction_2025(qbi, agi, filing, is_service_trade)

    taxable_fed = max(0.0, agi - federal_std_deduction_2025(filing) - qbi_deduction)
    fed_tax = federal_tax_2025(taxable_fed, filing)

    taxable_ca = max(0.0, agi - california_std_deduction_2025(filing))
    ca_tax = california_tax_2025(taxable_ca, filing)

    local_tax = la_business_tax(gross, local_tax_class)

    total_tax = fed_tax + ca_tax + se["total"] + local_tax
    net = gross - total_tax - health_insurance_cost - business_expenses
    return ContractResult(
        gross=gross,
        fed_tax=fed_tax,
        state_tax=ca_tax,
        se_tax_ss=se["social_security"],
        se_tax_medicare=se["medicare"],
        se_tax_additional_medicare=se["additional_medicare"],
        se_tax_total=se["total"],
        se_deduction_half=se_deduction_half,
        health_insurance_deduction=health_insurance_cost,
        business_expense_deduction=business_expenses,
        qbi_deduction=qbi_deduction,
        local_business_tax=local_tax,
        total_tax=total_tax,
        net=net,
        effective_rate=_percent_of(total_tax + health_insurance_cost + business_expenses, gross),
        monthly=net / 12,
    )


def breakeven_saturated(rate: float, max_rate: float = BREAKEVEN_MAX_RATE) -> bool:
    return max_rate - rate < _SATURATION_MARGIN


def solve_breakeven_rate(
    target_net: float,
    hours: float,
    filing: str,
    health_insurance_cost: float = 0.0,
    business_expenses: float = 0.0,
    local_tax_class: str = "multimedia",
    is_service_trade: bool = True,
    *,
    max_rate: float = BREAKEVEN_MAX_RATE,
    iterations: int = BREAKEVEN_ITERATIONS,
) -> float:
    """Bisect for the contractor hourly rate whose net matches ``target_net``.

    Contractor net never falls as the rate rises, so a fixed number of halvings
    of ``[0, max_rate]`` converges. Targets outside the reachable range come back
    pinned near 0 or ``max_rate`` rather than raising.
    """
    require_finite("target_net", target_net)
    require_valid(max_rate=max_rate)
    iterations = max(MIN_BREAKEVEN_ITERATIONS, iterations)

    low, high = 0.0, max_rate
    for _ in range(iterations):
        mid = (low + high) / 2
        result = compute_contractor_scenario(
            mid,
            hours,
            filing,
            health_insurance_cost,
            business_expenses,
            local_tax_class,
            is_service_trade,
        )
        if result.net >= target_net:
            high = mid
        else:
            low = mid
    rate = (low + high) / 2

    if breakeven_saturated(rate, max_rate):
        logger.warning(
            "Break-even rate saturated at upper bound %.2f for target net %.2f", max_rate, target_net
        )
    else:
        logger.debug("Break-even rate %.4f for target net %.2f", rate, target_net)
    return rate


__all__ = [
    "BREAKEVEN_ITERATIONS",
    "BREAKEVEN_MAX_RATE",
    "MIN_BREAKEVEN_ITERATIONS",
    "breakeven_saturated",
    "compute_contractor_scenario",
    "compute_employee_scenario",
    "solve_breakeven_rate",
]
