from __future__ import annotations

from takehome.core.brackets import Bracket, check_progressive_schedule, tax_from_brackets
from takehome.core.errors import select_for_status

FEDERAL_BRACKETS_SINGLE_2025 = (
    Bracket(11_925, 0.10),
    Bracket(48_475, 0.12),
    Bracket(103_350, 0.22),
    Bracket(197_300, 0.24),
    Bracket(250_525, 0.32),
    Bracket(626_350, 0.35),
    Bracket(None, 0.37),
)

FEDERAL_BRACKETS_MFJ_2025 = (
    Bracket(23_850, 0.10),
    Bracket(96_950, 0.12),
    Bracket(206_700, 0.22),
    Bracket(394_600, 0.24),
    Bracket(501_050, 0.32),
    Bracket(751_600, 0.35),
    Bracket(None, 0.37),
)

FEDERAL_BRACKETS_2025: dict[str, tuple[Bracket, ...]] = {
    "single": FEDERAL_BRACKETS_SINGLE_2025,
    "mfj": FEDERAL_BRACKETS_MFJ_2025,
}

FEDERAL_STD_DEDUCTION_2025: dict[str, float] = {
    "single": 15_750.0,
    "mfj": 31_500.0,
}

for _schedule in FEDERAL_BRACKETS_2025.values():
    check_progressive_schedule(_schedule)


def federal_std_deduction_2025(filing: str) -> float:
    return select_for_status(FEDERAL_STD_DEDUCTION_2025, filing)


def federal_tax_2025(taxable: float, filing: str) -> float:
    brackets = select_for_status(FEDERAL_BRACKETS_2025, filing)
    return tax_from_brackets(taxable, brackets)


__all__ = [
    "FEDERAL_BRACKETS_2025",
    "FEDERAL_BRACKETS_MFJ_2025",
    "FEDERAL_BRACKETS_SINGLE_2025",
    "FEDERAL_STD_DEDUCTION_2025",
    "federal_std_deduction_2025",
    "federal_tax_2025",
]
