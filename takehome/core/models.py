from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

FilingStatus = Literal["single", "mfj"]
CoverageType = Literal["individual", "family"]
BenefitMode = Literal["off", "averages", "custom"]
LocalTaxClass = Literal["multimedia", "professions", "exempt"]

FILING_STATUSES: tuple[str, ...] = ("single", "mfj")
FILING_LABELS: dict[str, str] = {
    "single": "Single",
    "mfj": "Married Filing Jointly",
}


@dataclass(frozen=True)
class BenefitItem:
    key: str
    label: str
    enabled: bool
    amount: float
    # only set for day-based items; amount is derived from it
    days: float | None = None


@dataclass(frozen=True)
class W2Result:
    gross: float
    fed_tax: float
    state_tax: float
    fica_ss: float
    fica_medicare: float
    fica_additional_medicare: float
    state_sdi: float
    total_tax: float
    benefits_value: float
    net: float
    effective_rate: float
    monthly: float


@dataclass(frozen=True)
class ContractResult:
    gross: float
    fed_tax: float
    state_tax: float
    se_tax_ss: float
    se_tax_medicare: float
    se_tax_additional_medicare: float
    se_tax_total: float
    se_deduction_half: float
    health_insurance_deduction: float
    business_expense_deduction: float
    qbi_deduction: float
    local_business_tax: float
    total_tax: float
    net: float
    effective_rate: float
    monthly: float


@dataclass(frozen=True)
class ComparisonRow:
    label: str
    w2_value: float
    contract_value: float
    is_highlight: bool = False
    is_deduction: bool = False
    is_addition: bool = False
    is_percent: bool = False


__all__ = [
    "BenefitItem",
    "BenefitMode",
    "ComparisonRow",
    "ContractResult",
    "CoverageType",
    "FILING_LABELS",
    "FILING_STATUSES",
    "FilingStatus",
    "LocalTaxClass",
    "W2Result",
]
