from __future__ import annotations

from dataclasses import asdict
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from takehome.config import Settings, get_settings
from takehome.core.benefits import BenefitOverride, resolve_benefit_items
from takehome.core.comparison import (
    build_comparison_rows,
    row_visible,
    row_winner,
    summarize_difference,
)
from takehome.core.models import (
    BenefitItem,
    BenefitMode,
    ContractResult,
    CoverageType,
    FilingStatus,
    LocalTaxClass,
    W2Result,
)
from takehome.core.tax_years import (
    TAX_YEAR,
    breakeven_saturated,
    compute_contractor_scenario,
    compute_employee_scenario,
    solve_breakeven_rate,
)

_CENT = Decimal("0.01")

_REQUEST_CONFIG = ConfigDict(populate_by_name=True, extra="forbid", allow_inf_nan=False)


def _default_filing() -> str:
    return get_settings().default_filing_status


class BenefitOverrideRequest(BaseModel):
    enabled: bool | None = None
    amount: float | None = Field(None, ge=0, description="Annual dollar value (fixed items)")
    days: float | None = Field(None, ge=0, description="Paid days (PTO / holidays)")

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    def to_override(self) -> BenefitOverride:
        return BenefitOverride(enabled=self.enabled, amount=self.amount, days=self.days)


class _ScenarioTerms(BaseModel):
    filing_status: FilingStatus = Field(
        default_factory=_default_filing,
        validation_alias=AliasChoices("filing_status", "filingStatus", "filing"),
    )
    hours: float = Field(2080.0, ge=0, description="Annual hours worked")

    model_config = _REQUEST_CONFIG


class BenefitsRequest(BaseModel):
    benefit_mode: BenefitMode = Field(
        "averages", validation_alias=AliasChoices("benefit_mode", "benefitMode")
    )
    coverage_type: CoverageType = Field(
        "individual", validation_alias=AliasChoices("coverage_type", "coverageType")
    )
    benefit_overrides: dict[str, BenefitOverrideRequest] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("benefit_overrides", "benefitOverrides", "customBenefits"),
    )
    rate: float = Field(
        67.0, ge=0, description="W-2 hourly rate", validation_alias=AliasChoices("rate", "w2Rate")
    )
    hours: float = Field(2080.0, ge=0, description="Annual hours worked")

    model_config = _REQUEST_CONFIG

    def overrides(self) -> dict[str, BenefitOverride]:
        return {key: value.to_override() for key, value in self.benefit_overrides.items()}


class EmployeeRequest(BenefitsRequest):
    filing_status: FilingStatus = Field(
        default_factory=_default_filing,
        validation_alias=AliasChoices("filing_status", "filingStatus", "filing"),
    )


class _ContractorTerms(_ScenarioTerms):
    health_insurance_cost: float = Field(
        0.0,
        ge=0,
        description="Annual self-paid health insurance premiums",
        validation_alias=AliasChoices("health_insurance_cost", "healthInsuranceCost"),
    )
    business_expenses: float = Field(
        0.0,
        ge=0,
        description="Annual deductible business expenses",
        validation_alias=AliasChoices("business_expenses", "bizExpenses"),
    )
    local_tax_class: LocalTaxClass = Field(
        "multimedia", validation_alias=AliasChoices("local_tax_class", "laBizTaxClass")
    )
    is_service_trade: bool = Field(
        True, validation_alias=AliasChoices("is_service_trade", "isServiceTrade")
    )


class ContractorRequest(_ContractorTerms):
    rate: float = Field(
        75.0,
        ge=0,
        description="1099 hourly rate",
        validation_alias=AliasChoices("rate", "contractRate"),
    )


class BreakevenRequest(_ContractorTerms):
    target_net: float = Field(
        ..., description="Annual net to match", validation_alias=AliasChoices("target_net", "targetNet")
    )


class ComparisonRequest(_ContractorTerms):
    w2_rate: float = Field(
        67.0, ge=0, description="W-2 hourly rate", validation_alias=AliasChoices("w2_rate", "w2Rate")
    )
    contract_rate: float = Field(
        75.0,
        ge=0,
        description="1099 hourly rate",
        validation_alias=AliasChoices("contract_rate", "contractRate"),
    )
    benefit_mode: BenefitMode = Field(
        "averages", validation_alias=AliasChoices("benefit_mode", "benefitMode")
    )
    coverage_type: CoverageType = Field(
        "individual", validation_alias=AliasChoices("coverage_type", "coverageType")
    )
    benefit_overrides: dict[str, BenefitOverrideRequest] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("benefit_overrides", "benefitOverrides", "customBenefits"),
    )

    def benefits(self) -> BenefitsRequest:
        return BenefitsRequest(
            benefit_mode=self.benefit_mode,
            coverage_type=self.coverage_type,
            benefit_overrides=self.benefit_overrides,
            rate=self.w2_rate,
            hours=self.hours,
        )

    def contractor(self) -> ContractorRequest:
        return ContractorRequest(
            filing_status=self.filing_status,
            hours=self.hours,
            health_insurance_cost=self.health_insurance_cost,
            business_expenses=self.business_expenses,
            local_tax_class=self.local_tax_class,
            is_service_trade=self.is_service_trade,
            rate=self.contract_rate,
        )


def to_decimal(value: float | Decimal) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def round_cents(value: float | Decimal) -> float:
    return float(to_decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP))


def _rounded(record: W2Result | ContractResult) -> dict[str, float]:
    return {name: round_cents(value) for name, value in asdict(record).items()}


def _benefit_payload(items: list[BenefitItem]) -> list[dict[str, Any]]:
    return [{**asdict(item), "amount": round_cents(item.amount)} for item in items]


def price_benefits(payload: BenefitsRequest) -> list[BenefitItem]:
    return resolve_benefit_items(
        payload.benefit_mode,
        payload.coverage_type,
        payload.rate,
        payload.hours,
        payload.overrides(),
    )


def _contractor_result(payload: ContractorRequest) -> ContractResult:
    return compute_contractor_scenario(
        payload.rate,
        payload.hours,
        payload.filing_status,
        payload.health_insurance_cost,
        payload.business_expenses,
        payload.local_tax_class,
        payload.is_service_trade,
    )


def _breakeven(payload: _ContractorTerms, target_net: float, settings: Settings) -> float:
    return solve_breakeven_rate(
        target_net,
        payload.hours,
        payload.filing_status,
        payload.health_insurance_cost,
        payload.business_expenses,
        payload.local_tax_class,
        payload.is_service_trade,
        max_rate=settings.breakeven_max_rate,
        iterations=settings.breakeven_iterations,
    )


def estimate_benefits(payload: BenefitsRequest) -> dict[str, Any]:
    items = price_benefits(payload)
    return {
        "mode": payload.benefit_mode,
        "coverage_type": payload.coverage_type,
        "items": _benefit_payload(items),
        "total_enabled": round_cents(sum((i.amount for i in items if i.enabled), 0.0)),
    }


def estimate_employee(payload: EmployeeRequest) -> dict[str, Any]:
    items = price_benefits(payload)
    result = compute_employee_scenario(payload.rate, payload.hours, payload.filing_status, items)
    return {"tax_year": TAX_YEAR, "benefits": _benefit_payload(items), "w2": _rounded(result)}


def estimate_contractor(payload: ContractorRequest) -> dict[str, Any]:
    return {"tax_year": TAX_YEAR, "contract": _rounded(_contractor_result(payload))}


def estimate_breakeven(payload: BreakevenRequest, settings: Settings | None = None) -> dict[str, Any]:
    settings = settings or get_settings()
    rate = _breakeven(payload, payload.target_net, settings)
    return {
        "tax_year": TAX_YEAR,
        "target_net": payload.target_net,
        "breakeven_rate": round_cents(rate),
        "saturated": breakeven_saturated(rate, settings.breakeven_max_rate),
    }


def estimate_comparison(payload: ComparisonRequest, settings: Settings | None = None) -> dict[str, Any]:
    """Run both scenarios and the break-even search for one set of inputs."""
    settings = settings or get_settings()
    items = price_benefits(payload.benefits())
    w2 = compute_employee_scenario(payload.w2_rate, payload.hours, payload.filing_status, items)
    contract = _contractor_result(payload.contractor())
    breakeven_rate = _breakeven(payload, w2.net, settings)
    summary = summarize_difference(w2, contract)

    rows = []
    for row in build_comparison_rows(w2, contract):
        rows.append(
            {
                **asdict(row),
                "w2_value": round_cents(row.w2_value),
                "contract_value": round_cents(row.contract_value),
                "visible": row_visible(row),
                "winner": row_winner(row),
            }
        )

    return {
        "tax_year": TAX_YEAR,
        "inputs": payload.model_dump(mode="json"),
        "benefits": _benefit_payload(items),
        "w2": _rounded(w2),
        "contract": _rounded(contract),
        "breakeven_rate": round_cents(breakeven_rate),
        "rows": rows,
        "summary": {
            "difference": round_cents(summary.difference),
            "winner": summary.winner,
        },
    }


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
    "to_decimal",
]
