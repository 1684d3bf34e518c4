from __future__ import annotations

from takehome.core.errors import select_option

# gross receipts rates: $1.01 and $4.25 per $1,000
LA_BIZ_TAX_RATES: dict[str, float] = {
    "multimedia": 0.00101,
    "professions": 0.00425,
    "exempt": 0.0,
}
LA_BIZ_TAX_EXEMPTION_THRESHOLD = 100_000.0


def la_business_tax(gross_receipts: float, tax_class: str) -> float:
    rate = select_option(LA_BIZ_TAX_RATES, tax_class, "LA business tax class")
    if tax_class == "exempt" or gross_receipts <= LA_BIZ_TAX_EXEMPTION_THRESHOLD:
        return 0.0
    return gross_receipts * rate


__all__ = ["LA_BIZ_TAX_EXEMPTION_THRESHOLD", "LA_BIZ_TAX_RATES", "la_business_tax"]
