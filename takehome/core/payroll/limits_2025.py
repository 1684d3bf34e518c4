from __future__ import annotations

from takehome.core.errors import select_for_status

SS_WAGE_BASE_2025 = 176_100.0
SS_RATE_EMPLOYEE = 0.062
SS_RATE_SELF = 0.124  # both halves

MEDICARE_RATE_EMPLOYEE = 0.0145
MEDICARE_RATE_SELF = 0.029  # both halves

ADDITIONAL_MEDICARE_RATE = 0.009
ADDITIONAL_MEDICARE_THRESHOLD: dict[str, float] = {
    "single": 200_000.0,
    "mfj": 250_000.0,
}

# share of net self-employment earnings subject to SE tax
SE_ADJUSTMENT = 0.9235


def additional_medicare_2025(earnings: float, filing: str) -> float:
    threshold = select_for_status(ADDITIONAL_MEDICARE_THRESHOLD, filing)
    return max(0.0, earnings - threshold) * ADDITIONAL_MEDICARE_RATE


def employee_fica_2025(wages: float, filing: str) -> dict[str, float]:
    return {
        "social_security": min(wages, SS_WAGE_BASE_2025) * SS_RATE_EMPLOYEE,
        "medicare": wages * MEDICARE_RATE_EMPLOYEE,
        "additional_medicare": additional_medicare_2025(wages, filing),
    }


def self_employment_tax_2025(net_earnings: float, filing: str) -> dict[str, float]:
    se_base = net_earnings * SE_ADJUSTMENT
    social_security = min(se_base, SS_WAGE_BASE_2025) * SS_RATE_SELF
    medicare = se_base * MEDICARE_RATE_SELF
    additional = additional_medicare_2025(se_base, filing)
    return {
        "base": se_base,
        "social_security": social_security,
        "medicare": medicare,
        "additional_medicare": additional,
        "total": social_security + medicare + additional,
    }


__all__ = [
    "ADDITIONAL_MEDICARE_RATE",
    "ADDITIONAL_MEDICARE_THRESHOLD",
    "MEDICARE_RATE_EMPLOYEE",
    "MEDICARE_RATE_SELF",
    "SE_ADJUSTMENT",
    "SS_RATE_EMPLOYEE",
    "SS_RATE_SELF",
    "SS_WAGE_BASE_2025",
    "additional_medicare_2025",
    "employee_fica_2025",
    "self_employment_tax_2025",
]
