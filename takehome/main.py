from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Literal

if __package__ in (None, ""):
    sys.path.append(str(Path(__file__).resolve().parent.parent))

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from takehome import __version__
from takehome.config import get_settings
from takehome.core.comparison import format_rate, format_row_value
from takehome.core.errors import InvalidArgumentError
from takehome.core.models import ComparisonRow
from takehome.core.tax_years import TAX_YEAR, federal_tax, state_tax
from takehome.lifespan import build_application_lifespan
from takehome.printout.comparison_render import render_comparison_pdf
from takehome.wizard import (
    BenefitsRequest,
    BreakevenRequest,
    ComparisonRequest,
    ContractorRequest,
    EmployeeRequest,
    estimate_benefits,
    estimate_breakeven,
    estimate_comparison,
    estimate_contractor,
    estimate_employee,
    round_cents,
)

logger = logging.getLogger("takehome")


async def _announce_defaults(_: FastAPI) -> None:
    settings = get_settings()
    logger.info(
        "Take-home comparison ready; tax_year=%s build=%s sha=%s",
        TAX_YEAR,
        settings.build_version,
        settings.build_sha,
    )


app = FastAPI(
    title="W-2 vs 1099 Take-Home",
    description="Compare 2025 California W-2 and 1099 take-home pay for the same hours.",
    version=__version__,
    lifespan=build_application_lifespan("api", startup_hook=_announce_defaults),
)


@app.exception_handler(InvalidArgumentError)
async def _invalid_argument(_: Request, exc: InvalidArgumentError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.get("/health")
def health():
    settings = getattr(app.state, "settings", get_settings())
    drift = getattr(app.state, "table_drift", {})
    return {
        "status": "ok",
        "tax_year": TAX_YEAR,
        "build": {"version": settings.build_version, "sha": settings.build_sha},
        "tables": {filing: round_cents(gap) for filing, gap in drift.items()},
    }


def _table_lookup(taxable: float, filing: str | None, table: str) -> dict[str, Any]:
    filing = (filing or get_settings().default_filing_status).lower()
    tax = federal_tax(taxable, filing) if table == "federal" else state_tax(taxable, filing)
    return {
        "tax_year": TAX_YEAR,
        "filing_status": filing,
        "taxable": taxable,
        "tax": round_cents(tax),
    }


@app.get("/tax/federal")
def federal(taxable: float, filing: str | None = None):
    return _table_lookup(taxable, filing, "federal")


@app.get("/tax/state")
def california(taxable: float, filing: str | None = None):
    return _table_lookup(taxable, filing, "state")


@app.post("/compare")
def compare(payload: ComparisonRequest):
    return estimate_comparison(payload, getattr(app.state, "settings", None))


@app.post("/w2")
def employee(payload: EmployeeRequest):
    return estimate_employee(payload)


@app.post("/1099")
def contractor(payload: ContractorRequest):
    return estimate_contractor(payload)


@app.post("/breakeven")
def breakeven(payload: BreakevenRequest):
    return estimate_breakeven(payload, getattr(app.state, "settings", None))


@app.post("/benefits")
def benefits(payload: BenefitsRequest):
    return estimate_benefits(payload)


ColorPreference = Literal["auto", "always", "never"]


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )


def _get_console(pref: ColorPreference) -> Console:
    if pref == "auto" and os.getenv("NO_COLOR"):
        pref = "never"
    if pref == "never":
        return Console(no_color=True, highlight=False)
    return Console(force_terminal=pref == "always" or None)


def _comparison_table(report: dict[str, Any]) -> Table:
    table = Table(title=f"W-2 vs 1099 take-home ({report['tax_year']})", expand=False)
    table.add_column("")
    table.add_column("W-2", justify="right")
    table.add_column("1099", justify="right")
    for data in report["rows"]:
        if not data["visible"]:
            continue
        row = ComparisonRow(
            label=data["label"],
            w2_value=data["w2_value"],
            contract_value=data["contract_value"],
            is_highlight=data["is_highlight"],
            is_deduction=data["is_deduction"],
            is_addition=data["is_addition"],
            is_percent=data["is_percent"],
        )
        w2_text = format_row_value(row, row.w2_value)
        contract_text = format_row_value(row, row.contract_value)
        if data["winner"] == "w2":
            w2_text = f"[green]{w2_text}[/green]"
        elif data["winner"] == "contract":
            contract_text = f"[green]{contract_text}[/green]"
        label = f"[bold]{row.label}[/bold]" if row.is_highlight else row.label
        table.add_row(label, w2_text, contract_text)
    return table


def _comparison_payload(args: argparse.Namespace) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "w2_rate": args.w2_rate,
        "contract_rate": args.contract_rate,
        "hours": args.hours,
        "health_insurance_cost": args.health,
        "business_expenses": args.expenses,
        "local_tax_class": args.local_class,
        "is_service_trade": not args.not_service_trade,
        "benefit_mode": args.benefits,
        "coverage_type": args.coverage,
    }
    if args.filing:
        payload["filing_status"] = args.filing
    return payload


def _run_compare(args: argparse.Namespace, console: Console) -> int:
    try:
        request = ComparisonRequest.model_validate(_comparison_payload(args))
        report = estimate_comparison(request)
    except ValidationError as exc:
        console.print("There was a problem with the inputs provided:")
        for error in exc.errors():
            location = " -> ".join(str(part) for part in error.get("loc", ("value",)))
            console.print(f"  - {location}: {error.get('msg')}")
        return 1
    except InvalidArgumentError as exc:
        console.print(f"Invalid input: {exc}")
        return 1

    if args.json:
        print(json.dumps(report, indent=2))
    else:
        console.print(_comparison_table(report))
        console.print(f"Break-even 1099 rate: {format_rate(report['breakeven_rate'])}")
        summary = report["summary"]
        console.print(
            f"{summary['winner']} by ${abs(summary['difference']):,.0f}/yr"
            if summary["winner"] != "Even"
            else "Even"
        )
    if args.pdf:
        path = render_comparison_pdf(args.pdf, request, report)
        if not args.json:
            console.print(f"Saved PDF to {path}")
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("takehome.main:app", host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="takehome",
        description="Compare W-2 and 1099 take-home pay in Los Angeles, California.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: LOG_LEVEL or INFO).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    compare_cmd = sub.add_parser("compare", help="Print the side-by-side comparison.")
    compare_cmd.add_argument("--w2-rate", type=float, default=67.0, help="W-2 hourly rate.")
    compare_cmd.add_argument("--contract-rate", type=float, default=75.0, help="1099 hourly rate.")
    compare_cmd.add_argument("--hours", type=float, default=2080.0, help="Annual hours worked.")
    compare_cmd.add_argument("--filing", choices=["single", "mfj"], help="Filing status.")
    compare_cmd.add_argument("--health", type=float, default=0.0, help="Annual 1099 health premiums.")
    compare_cmd.add_argument("--expenses", type=float, default=0.0, help="Annual business expenses.")
    compare_cmd.add_argument(
        "--local-class",
        choices=["multimedia", "professions", "exempt"],
        default="multimedia",
        help="LA city business tax classification.",
    )
    compare_cmd.add_argument(
        "--not-service-trade",
        action="store_true",
        help="Treat the contractor as outside a specified service trade for QBI.",
    )
    compare_cmd.add_argument(
        "--benefits", choices=["off", "averages", "custom"], default="averages", help="Benefit mode."
    )
    compare_cmd.add_argument(
        "--coverage", choices=["individual", "family"], default="individual", help="Coverage type."
    )
    compare_cmd.add_argument("--json", action="store_true", help="Print the raw report as JSON.")
    compare_cmd.add_argument("--pdf", help="Also write a PDF summary to this path.")
    compare_cmd.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Color output preference (default: auto).",
    )

    serve_cmd = sub.add_parser("serve", help="Run the HTTP API with uvicorn.")
    serve_cmd.add_argument("--host", default="127.0.0.1")
    serve_cmd.add_argument("--port", type=int, default=8000)
    return parser.parse_args(argv)


def cli(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    args.log_level = args.log_level or get_settings().log_level
    _configure_logging(args.log_level)
    if args.command == "serve":
        return _run_serve(args)
    return _run_compare(args, _get_console(args.color))


if __name__ == "__main__":
    sys.exit(cli())
