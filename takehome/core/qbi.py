"""Section 199A qualified business income deduction (2025 parameters)."""
from __future__ import annotations

from takehome.core.errors import select_for_status

QBI_DEDUCTION_RATE = 0.20
QBI_PHASE_OUT_START_2025: dict[str, float] = {
    "single": 191_950.0,
    "mfj": 383_900.0,
}
QBI_PHASE_OUT_RANGE_2025: dict[str, float] = {
    "single": 50_000.0,
    "mfj": 100_000.0,
}


def qualified_business_income(gross: float, business_expenses: float, se_deduction_half: float) -> float:
    return max(0.0, gross - business_expenses - se_deduction_half)


def qbi_deduction_2025(qbi: float, agi: float, filing: str, is_service_trade: bool) -> float:
    """20% of QBI; for a specified service trade, phased out linearly over AGI.

    Below the phase-out start the full amount applies, at or above start + range
    nothing does, and in between the deduction shrinks in proportion to how far
    AGI has moved through the range.
    """
    start = select_for_status(QBI_PHASE_OUT_START_2025, filing)
    span = select_for_status(QBI_PHASE_OUT_RANGE_2025, filing)
    if qbi <= 0:
        return 0.0
    full = qbi * QBI_DEDUCTION_RATE
    if not is_service_trade or agi <= start:
        return full
    if agi >= start + span:
        return 0.0
    reduction = (agi - start) / span
    return full * (1 - reduction)


__all__ = [
    "QBI_DEDUCTION_RATE",
    "QBI_PHASE_OUT_RANGE_2025",
    "QBI_PHASE_OUT_START_2025",
    "qbi_deduction_2025",
    "qualified_business_income",
]
