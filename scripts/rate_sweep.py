#!/usr/bin/env python
from __future__ import annotations

import argparse
import csv
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from takehome.config import get_settings  # noqa: E402
from takehome.core.tax_years import compute_employee_scenario, solve_breakeven_rate  # noqa: E402
from takehome.wizard import BenefitsRequest, price_benefits, round_cents  # noqa: E402

LOGGER = logging.getLogger("rate_sweep")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Tabulate break-even 1099 rates for a range of W-2 rates")
    parser.add_argument("--start", type=float, default=40.0, help="First W-2 hourly rate")
    parser.add_argument("--stop", type=float, default=150.0, help="Last W-2 hourly rate (inclusive)")
    parser.add_argument("--step", type=float, default=10.0, help="Rate increment")
    parser.add_argument("--hours", type=float, default=2080.0, help="Annual hours worked")
    parser.add_argument("--filing", choices=["single", "mfj"], default=None, help="Filing status")
    parser.add_argument(
        "--benefits", choices=["off", "averages"], default="averages", help="W-2 benefit mode"
    )
    parser.add_argument(
        "--coverage", choices=["individual", "family"], default="individual", help="Coverage type"
    )
    parser.add_argument("--health", type=float, default=0.0, help="Annual 1099 health premiums")
    parser.add_argument("--expenses", type=float, default=0.0, help="Annual 1099 business expenses")
    parser.add_argument(
        "--local-class", choices=["multimedia", "professions", "exempt"], default="multimedia"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices={"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"},
        help="Logging verbosity",
    )
    return parser.parse_args()


def _rates(start: float, stop: float, step: float) -> list[float]:
    if step <= 0:
        raise SystemExit("--step must be positive")
    rates = []
    rate = start
    while rate <= stop + 1e-9:
        rates.append(round(rate, 2))
        rate += step
    return rates


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    settings = get_settings()
    filing = args.filing or settings.default_filing_status

    writer = csv.writer(sys.stdout)
    writer.writerow(["w2_rate", "w2_net", "breakeven_rate"])
    for rate in _rates(args.start, args.stop, args.step):
        items = price_benefits(
            BenefitsRequest(
                benefit_mode=args.benefits,
                coverage_type=args.coverage,
                rate=rate,
                hours=args.hours,
            )
        )
        w2 = compute_employee_scenario(rate, args.hours, filing, items)
        breakeven = solve_breakeven_rate(
            w2.net,
            args.hours,
            filing,
            args.health,
            args.expenses,
            args.local_class,
            max_rate=settings.breakeven_max_rate,
            iterations=settings.breakeven_iterations,
        )
        LOGGER.debug("w2_rate=%s net=%.2f breakeven=%.4f", rate, w2.net, breakeven)
        writer.writerow([f"{rate:.2f}", f"{round_cents(w2.net):.2f}", f"{round_cents(breakeven):.2f}"])


if __name__ == "__main__":
    main()
