from __future__ import annotations

from pathlib import Path
from typing import Any

from reportlab.lib.pagesizes import LETTER
from reportlab.pdfgen import canvas

from takehome.config import get_settings
from takehome.core.comparison import format_rate
from takehome.core.models import FILING_LABELS
from takehome.wizard.estimator import ComparisonRequest

PAGE_WIDTH, PAGE_HEIGHT = LETTER
LEFT_MARGIN = 54
RIGHT_MARGIN = PAGE_WIDTH - LEFT_MARGIN
W2_COLUMN = RIGHT_MARGIN - 130
LINE_HEIGHT = 16

HEADER_FONT = "Helvetica-Bold"
BODY_FONT = "Helvetica"
SMALL_FONT = "Helvetica"

INPUT_ROWS = (
    ("w2_rate", "W-2 hourly rate"),
    ("contract_rate", "1099 hourly rate"),
    ("hours", "Annual hours"),
    ("health_insurance_cost", "1099 health insurance"),
    ("business_expenses", "1099 business expenses"),
)


def _format_money(value: float) -> str:
    text = f"${abs(value):,.2f}"
    return f"-{text}" if value < 0 else text


def _format_cell(row: dict[str, Any], value: float) -> str:
    if value == 0 and not row["is_highlight"]:
        return "-"
    if row["is_percent"]:
        return f"{value:.1f}%"
    return _format_money(value)


def _build_artifact_name(request: ComparisonRequest, report: dict[str, Any]) -> str:
    w2_rate = f"{request.w2_rate:g}".replace(".", "_")
    contract_rate = f"{request.contract_rate:g}".replace(".", "_")
    return f"takehome_{report['tax_year']}_{request.filing_status}_{w2_rate}_vs_{contract_rate}.pdf"


def _resolve_output_path(out_path: str, request: ComparisonRequest, report: dict[str, Any]) -> Path:
    requested = Path(out_path)
    artifact_root = Path(get_settings().artifact_root)
    if not artifact_root.is_absolute():
        artifact_root = Path.cwd() / artifact_root

    if requested.suffix.lower() == ".pdf":
        final_path = requested if requested.is_absolute() else artifact_root / requested
    else:
        base_dir = requested if requested.is_absolute() else artifact_root / requested
        if requested.suffix:
            base_dir = base_dir.parent
        final_path = base_dir / _build_artifact_name(request, report)

    final_path.parent.mkdir(parents=True, exist_ok=True)
    return final_path


def _set_metadata(pdf: canvas.Canvas, report: dict[str, Any]) -> None:
    pdf.setTitle(f"W-2 vs 1099 Take-Home ({report['tax_year']})")
    pdf.setSubject("Los Angeles, California take-home pay comparison")
    pdf.setCreator("takehome")


def _draw_header(pdf: canvas.Canvas, request: ComparisonRequest, report: dict[str, Any]) -> float:
    pdf.setFont(HEADER_FONT, 16)
    pdf.drawString(LEFT_MARGIN, PAGE_HEIGHT - 72, f"W-2 vs 1099 Take-Home - {report['tax_year']}")
    pdf.setFont(SMALL_FONT, 9)
    pdf.drawString(
        LEFT_MARGIN,
        PAGE_HEIGHT - 88,
        f"{FILING_LABELS[request.filing_status]}, Los Angeles CA, benefits: {request.benefit_mode}",
    )

    pdf.setFont(HEADER_FONT, 11)
    y = PAGE_HEIGHT - 116
    pdf.drawString(LEFT_MARGIN, y, "Inputs")
    y -= LINE_HEIGHT
    pdf.setFont(BODY_FONT, 10)
    for key, label in INPUT_ROWS:
        value = getattr(request, key)
        text = f"{value:,.0f}" if key == "hours" else _format_money(value)
        pdf.drawString(LEFT_MARGIN, y, label)
        pdf.drawRightString(RIGHT_MARGIN, y, text)
        y -= LINE_HEIGHT
    return y - LINE_HEIGHT


def _draw_rows(pdf: canvas.Canvas, report: dict[str, Any], y: float) -> float:
    pdf.setFont(HEADER_FONT, 11)
    pdf.drawString(LEFT_MARGIN, y, "Annual comparison")
    pdf.drawRightString(W2_COLUMN, y, "W-2")
    pdf.drawRightString(RIGHT_MARGIN, y, "1099")
    y -= LINE_HEIGHT + 2

    for row in report["rows"]:
        if not row["visible"]:
            continue
        pdf.setFont(HEADER_FONT if row["is_highlight"] else BODY_FONT, 10)
        pdf.drawString(LEFT_MARGIN, y, row["label"])
        pdf.drawRightString(W2_COLUMN, y, _format_cell(row, row["w2_value"]))
        pdf.drawRightString(RIGHT_MARGIN, y, _format_cell(row, row["contract_value"]))
        y -= LINE_HEIGHT
    return y - LINE_HEIGHT


def _draw_summary(pdf: canvas.Canvas, report: dict[str, Any], y: float) -> None:
    summary = report["summary"]
    pdf.setFont(HEADER_FONT, 11)
    pdf.drawString(LEFT_MARGIN, y, "Break-even 1099 rate")
    pdf.drawRightString(RIGHT_MARGIN, y, format_rate(report["breakeven_rate"]))
    y -= LINE_HEIGHT
    pdf.drawString(LEFT_MARGIN, y, summary["winner"])
    if summary["winner"] != "Even":
        pdf.setFont(BODY_FONT, 10)
        pdf.drawRightString(RIGHT_MARGIN, y, f"{_format_money(abs(summary['difference']))}/yr")


def _draw_page_number(pdf: canvas.Canvas, total_pages: int) -> None:
    pdf.setFont(SMALL_FONT, 9)
    pdf.drawRightString(RIGHT_MARGIN, 36, f"Page {pdf.getPageNumber()} of {total_pages}")


def render_comparison_pdf(out_path: str, request: ComparisonRequest, report: dict[str, Any]) -> str:
    """Render the comparison report from ``estimate_comparison`` and return the PDF path."""

    output_path = _resolve_output_path(out_path, request, report)
    pdf = canvas.Canvas(str(output_path), pagesize=LETTER)

    _set_metadata(pdf, report)
    y = _draw_header(pdf, request, report)
    y = _draw_rows(pdf, report, y)
    _draw_summary(pdf, report, y)
    _draw_page_number(pdf, 1)

    pdf.showPage()
    pdf.save()
    return str(output_path)
