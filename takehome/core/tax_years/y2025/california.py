"""California personal income tax and SDI for 2025.

Bracket bases are derived from the marginal rates rather than copied from the
FTB rate schedule; the published base column is kept so the derivation can be
checked against it (the FTB figures are rounded and drift by about a dollar in
the top brackets).
"""
from __future__ import annotations

from takehome.core.brackets import (
    StateBracket,
    build_state_schedule,
    check_state_schedule,
    published_base_drift,
    tax_from_base_table,
)
from takehome.core.errors import select_for_status

# (lower, upper, rate); the top rate includes the 1% Mental Health Services tax
_CA_ROWS_SINGLE_2025 = (
    (0.0, 11_079.0, 0.01),
    (11_079.0, 26_264.0, 0.02),
    (26_264.0, 41_452.0, 0.04),
    (41_452.0, 57_542.0, 0.06),
    (57_542.0, 72_724.0, 0.08),
    (72_724.0, 371_479.0, 0.093),
    (371_479.0, 445_771.0, 0.103),
    (445_771.0, 742_953.0, 0.113),
    (742_953.0, 1_000_000.0, 0.123),
    (1_000_000.0, None, 0.133),
)

_CA_ROWS_MFJ_2025 = (
    (0.0, 22_158.0, 0.01),
    (22_158.0, 52_528.0, 0.02),
    (52_528.0, 82_904.0, 0.04),
    (82_904.0, 115_084.0, 0.06),
    (115_084.0, 145_448.0, 0.08),
    (145_448.0, 742_958.0, 0.093),
    (742_958.0, 891_542.0, 0.103),
    (891_542.0, 1_485_906.0, 0.113),
    (1_485_906.0, 2_000_000.0, 0.123),
    (2_000_000.0, None, 0.133),
)

CA_PUBLISHED_BASES_2025: dict[str, tuple[float, ...]] = {
    "single": (
        0.0, 110.79, 414.49, 1_022.01, 1_987.41,
        3_201.97, 30_986.26, 38_638.27, 72_220.84, 103_837.62,
    ),
    "mfj": (
        0.0, 221.58, 828.98, 2_044.02, 3_974.82,
        6_403.94, 61_972.37, 77_276.52, 144_439.65, 207_674.21,
    ),
}
PUBLISHED_BASE_TOLERANCE = 1.50

CA_BRACKETS_2025: dict[str, tuple[StateBracket, ...]] = {
    "single": build_state_schedule(_CA_ROWS_SINGLE_2025),
    "mfj": build_state_schedule(_CA_ROWS_MFJ_2025),
}

CA_STD_DEDUCTION_2025: dict[str, float] = {
    "single": 5_706.0,
    "mfj": 11_412.0,
}

# no wage cap since 2024
CA_SDI_RATE_2025 = 0.012

for _schedule in CA_BRACKETS_2025.values():
    check_state_schedule(_schedule)


def california_std_deduction_2025(filing: str) -> float:
    return select_for_status(CA_STD_DEDUCTION_2025, filing)


def california_tax_2025(taxable: float, filing: str) -> float:
    brackets = select_for_status(CA_BRACKETS_2025, filing)
    return tax_from_base_table(taxable, brackets)


def california_sdi_2025(wages: float) -> float:
    return wages * CA_SDI_RATE_2025


def check_published_bases() -> dict[str, float]:
    """Return the base drift per filing status, raising if any exceeds tolerance."""
    drift: dict[str, float] = {}
    for filing, brackets in CA_BRACKETS_2025.items():
        gap = published_base_drift(brackets, CA_PUBLISHED_BASES_2025[filing])
        if gap > PUBLISHED_BASE_TOLERANCE:
            raise ValueError(
                f"Derived CA bases for {filing} drift {gap:.2f} from the published schedule"
            )
        drift[filing] = gap
    return drift


__all__ = [
    "CA_BRACKETS_2025",
    "CA_PUBLISHED_BASES_2025",
    "CA_SDI_RATE_2025",
    "CA_STD_DEDUCTION_2025",
    "PUBLISHED_BASE_TOLERANCE",
    "california_sdi_2025",
    "california_std_deduction_2025",
    "california_tax_2025",
    "check_published_bases",
]
