from dataclasses import asdict, replace

import pytest

from takehome.core.benefits import build_benefit_items
from takehome.core.errors import InvalidArgumentError
from takehome.core.la_city import la_business_tax
from takehome.core.payroll.limits_2025 import employee_fica_2025, self_employment_tax_2025
from takehome.core.tax_years import compute_contractor_scenario, compute_employee_scenario
from tests.fixtures.scenarios import (
    REFERENCE_CONTRACT,
    REFERENCE_CONTRACT_RATE,
    REFERENCE_HOURS,
    REFERENCE_W2,
    REFERENCE_W2_RATE,
)


def _reference_w2():
    items = build_benefit_items("individual", REFERENCE_W2_RATE, REFERENCE_HOURS)
    return compute_employee_scenario(REFERENCE_W2_RATE, REFERENCE_HOURS, "single", items)


def test_w2_reference_scenario():
    result = asdict(_reference_w2())
    for key, expected in REFERENCE_W2.items():
        assert result[key] == pytest.approx(expected, abs=0.005), key
    assert result["effective_rate"] == pytest.approx(31.369, abs=0.001)
    assert result["monthly"] == pytest.approx(REFERENCE_W2["net"] / 12)


def test_contract_reference_scenario():
    result = asdict(
        compute_contractor_scenario(
            REFERENCE_CONTRACT_RATE, REFERENCE_HOURS, "single", local_tax_class="exempt"
        )
    )
    for key, expected in REFERENCE_CONTRACT.items():
        assert result[key] == pytest.approx(expected, abs=1e-4), key
    assert result["se_tax_additional_medicare"] == 0


def test_benefits_never_reduce_taxable_wages():
    items = build_benefit_items("family", REFERENCE_W2_RATE, REFERENCE_HOURS)
    with_benefits = compute_employee_scenario(REFERENCE_W2_RATE, REFERENCE_HOURS, "single", items)
    without = compute_employee_scenario(REFERENCE_W2_RATE, REFERENCE_HOURS, "single")
    assert with_benefits.total_tax == without.total_tax
    assert with_benefits.net - without.net == pytest.approx(with_benefits.benefits_value)


def test_disabled_benefits_are_ignored():
    items = [
        replace(item, enabled=False) if item.key == "health" else item
        for item in build_benefit_items("individual", REFERENCE_W2_RATE, REFERENCE_HOURS)
    ]
    result = compute_employee_scenario(REFERENCE_W2_RATE, REFERENCE_HOURS, "single", items)
    assert result.benefits_value == pytest.approx(REFERENCE_W2["benefits_value"] - 8_400)


@pytest.mark.parametrize("filing", ["single", "mfj"])
def test_zero_hours_is_all_zero(filing):
    w2 = compute_employee_scenario(REFERENCE_W2_RATE, 0, filing)
    contract = compute_contractor_scenario(REFERENCE_CONTRACT_RATE, 0, filing)
    assert w2.gross == w2.total_tax == w2.net == w2.effective_rate == 0
    assert contract.gross == contract.total_tax == contract.net == contract.effective_rate == 0


def test_contract_costs_come_out_of_net():
    bare = compute_contractor_scenario(100, REFERENCE_HOURS, "single", local_tax_class="exempt")
    costed = compute_contractor_scenario(
        100,
        REFERENCE_HOURS,
        "single",
        health_insurance_cost=6_000,
        business_expenses=4_000,
        local_tax_class="exempt",
    )
    assert costed.health_insurance_deduction == 6_000
    assert costed.business_expense_deduction == 4_000
    assert costed.total_tax < bare.total_tax
    assert costed.net < bare.net
    assert costed.net == pytest.approx(costed.gross - costed.total_tax - 10_000)


def test_mfj_pays_less_than_single():
    single = compute_employee_scenario(120, REFERENCE_HOURS, "single")
    joint = compute_employee_scenario(120, REFERENCE_HOURS, "mfj")
    assert joint.total_tax < single.total_tax


@pytest.mark.parametrize(
    "kwargs",
    [
        {"rate": -1, "hours": 2080},
        {"rate": 50, "hours": float("nan")},
        {"rate": float("inf"), "hours": 2080},
    ],
)
def test_invalid_scenario_inputs_raise(kwargs):
    with pytest.raises(InvalidArgumentError):
        compute_employee_scenario(kwargs["rate"], kwargs["hours"], "single")
    with pytest.raises(InvalidArgumentError):
        compute_contractor_scenario(kwargs["rate"], kwargs["hours"], "single")


def test_negative_contract_costs_raise():
    with pytest.raises(InvalidArgumentError, match="health_insurance_cost"):
        compute_contractor_scenario(75, 2080, "single", health_insurance_cost=-1)


def test_social_security_capped_at_wage_base():
    fica = employee_fica_2025(300_000, "single")
    assert fica["social_security"] == pytest.approx(176_100 * 0.062)
    assert fica["additional_medicare"] == pytest.approx(100_000 * 0.009)
    assert employee_fica_2025(300_000, "mfj")["additional_medicare"] == pytest.approx(50_000 * 0.009)


def test_self_employment_tax_uses_adjusted_base():
    se = self_employment_tax_2025(100_000, "single")
    assert se["base"] == pytest.approx(92_350)
    assert se["total"] == pytest.approx(92_350 * 0.153)
    assert se["additional_medicare"] == 0


@pytest.mark.parametrize(
    "gross, tax_class, expected",
    [
        (100_000, "professions", 0.0),
        (156_000, "multimedia", 157.56),
        (156_000, "professions", 663.0),
        (156_000, "exempt", 0.0),
    ],
)
def test_la_business_tax(gross, tax_class, expected):
    assert la_business_tax(gross, tax_class) == pytest.approx(expected)


def test_la_business_tax_unknown_class():
    with pytest.raises(InvalidArgumentError):
        la_business_tax(200_000, "retail")
