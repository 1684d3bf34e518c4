from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

from takehome.core.models import ComparisonRow, ContractResult, W2Result

Side = Literal["w2", "contract"]


@dataclass(frozen=True)
class DifferenceSummary:
    difference: float
    winner: str


def build_comparison_rows(w2: W2Result, contract: ContractResult) -> list[ComparisonRow]:
    """Side-by-side line items; taxes and costs are carried as negative values."""
    return [
        ComparisonRow("Gross Annual", w2.gross, contract.gross),
        ComparisonRow("Federal Income Tax", -w2.fed_tax, -contract.fed_tax, is_deduction=True),
        ComparisonRow("CA State Income Tax", -w2.state_tax, -contract.state_tax, is_deduction=True),
        ComparisonRow(
            "FICA / SE Tax",
            -(w2.fica_ss + w2.fica_medicare + w2.fica_additional_medicare),
            -contract.se_tax_total,
            is_deduction=True,
        ),
        ComparisonRow("CA SDI", -w2.state_sdi, 0.0, is_deduction=True),
        ComparisonRow("LA City Business Tax", 0.0, -contract.local_business_tax, is_deduction=True),
        ComparisonRow(
            "Health Ins. Cost", 0.0, -contract.health_insurance_deduction, is_deduction=True
        ),
        ComparisonRow(
            "Business Expenses", 0.0, -contract.business_expense_deduction, is_deduction=True
        ),
        ComparisonRow(
            "QBI Deduction (tax savings)",
            0.0,
            max(contract.qbi_deduction, 0.0),
            is_addition=True,
        ),
        ComparisonRow("W-2 Benefits Value", w2.benefits_value, 0.0, is_addition=True),
        ComparisonRow("Net Take-Home", w2.net, contract.net, is_highlight=True),
        ComparisonRow(
            "Effective Tax Rate", w2.effective_rate, contract.effective_rate, is_percent=True
        ),
        ComparisonRow("Monthly Take-Home", w2.monthly, contract.monthly),
    ]


def row_visible(row: ComparisonRow) -> bool:
    return not (row.w2_value == 0 and row.contract_value == 0)


def row_winner(row: ComparisonRow) -> Side | None:
    """Which side comes out ahead on ``row``; a lower rate wins percent rows."""
    if row.w2_value == row.contract_value:
        return None
    if row.is_percent:
        return "w2" if row.w2_value < row.contract_value else "contract"
    # deductions are negative, so the larger value is the smaller cost
    return "w2" if row.w2_value > row.contract_value else "contract"


def summarize_difference(w2: W2Result, contract: ContractResult) -> DifferenceSummary:
    diff = w2.net - contract.net
    if diff > 0:
        winner = "W-2 wins"
    elif diff == 0:
        winner = "Even"
    else:
        winner = "1099 wins"
    return DifferenceSummary(difference=diff, winner=winner)


def _whole_dollars(value: float) -> Decimal:
    return Decimal(str(abs(value))).quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def format_currency(value: float) -> str:
    text = f"${_whole_dollars(value):,}"
    return f"-{text}" if value < 0 else text


def format_percent(value: float) -> str:
    return f"{value:.1f}%"


def format_rate(value: float) -> str:
    return f"${value:,.2f}/hr"


def format_row_value(row: ComparisonRow, value: float) -> str:
    if value == 0 and not row.is_highlight:
        return "-"
    return format_percent(value) if row.is_percent else format_currency(value)


__all__ = [
    "DifferenceSummary",
    "build_comparison_rows",
    "format_currency",
    "format_percent",
    "format_rate",
    "format_row_value",
    "row_visible",
    "row_winner",
    "summarize_difference",
]
