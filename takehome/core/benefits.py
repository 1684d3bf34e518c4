"""Dollar value of W-2 benefits (LA tech employer averages, 2025).

Benefits are valued three ways: a fixed annual amount that depends on coverage
(scaled for part-time hours), a percent of gross pay, or a number of paid days
at the hourly rate. In ``custom`` mode the caller keeps a mapping of per-key
overrides that is merged over freshly priced defaults on every call.
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Literal, Mapping

from takehome.core.errors import InvalidArgumentError, require_choice, select_option
from takehome.core.models import BenefitItem
from takehome.core.validate import require_valid

FULL_TIME_HOURS = 2080
HOURS_PER_DAY = 8

COVERAGE_TYPES: tuple[str, ...] = ("individual", "family")
BENEFIT_MODES: tuple[str, ...] = ("off", "averages", "custom")

Valuation = Literal["fixed_by_coverage", "percent_of_gross", "days_of_pay"]


@dataclass(frozen=True)
class BenefitDefinition:
    key: str
    label: str
    valuation: Valuation = "fixed_by_coverage"
    individual: float = 0.0
    family: float = 0.0
    percent: float = 0.0
    individual_days: float = 0.0
    family_days: float = 0.0


BENEFIT_DEFAULTS_2025: tuple[BenefitDefinition, ...] = (
    BenefitDefinition("health", "Health Insurance", individual=8_400.0, family=20_000.0),
    BenefitDefinition("dental", "Dental Insurance", individual=700.0, family=1_800.0),
    BenefitDefinition("vision", "Vision Insurance", individual=150.0, family=350.0),
    BenefitDefinition("401k", "401(k) Match", valuation="percent_of_gross", percent=0.04),
    BenefitDefinition(
        "pto", "PTO", valuation="days_of_pay", individual_days=15, family_days=15
    ),
    BenefitDefinition(
        "holidays", "Paid Holidays", valuation="days_of_pay", individual_days=10, family_days=10
    ),
    BenefitDefinition("life", "Life / Disability Ins.", individual=1_000.0, family=1_000.0),
    BenefitDefinition("hsa", "HSA / FSA", individual=750.0, family=750.0),
)

_DEFINITIONS: dict[str, BenefitDefinition] = {d.key: d for d in BENEFIT_DEFAULTS_2025}


@dataclass(frozen=True)
class BenefitOverride:
    enabled: bool | None = None
    # honoured for fixed-by-coverage items only
    amount: float | None = None
    # honoured for day-based items only
    days: float | None = None


_OVERRIDE_FIELDS = frozenset(f.name for f in fields(BenefitOverride))


def _round_dollars(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _days_value(days: float, rate: float, hours: float) -> float:
    return days * rate * HOURS_PER_DAY * (hours / FULL_TIME_HOURS)


def _price(defn: BenefitDefinition, coverage: str, rate: float, hours: float) -> BenefitItem:
    scale = hours / FULL_TIME_HOURS
    days: float | None = None
    if defn.valuation == "days_of_pay":
        days = select_option(
            {"individual": defn.individual_days, "family": defn.family_days},
            coverage,
            "coverage type",
        )
        amount = _days_value(days, rate, hours)
    elif defn.valuation == "percent_of_gross":
        amount = defn.percent * rate * hours
    else:
        fixed = select_option(
            {"individual": defn.individual, "family": defn.family},
            coverage,
            "coverage type",
        )
        amount = fixed * scale
    return BenefitItem(
        key=defn.key,
        label=defn.label,
        enabled=True,
        amount=_round_dollars(amount),
        days=days,
    )


def build_benefit_items(coverage: str, rate: float, hours: float) -> list[BenefitItem]:
    """Price every default benefit for ``coverage`` at the given rate and hours."""
    require_choice(coverage, COVERAGE_TYPES, "coverage type")
    require_valid(rate=rate, hours=hours)
    return [_price(defn, coverage, rate, hours) for defn in BENEFIT_DEFAULTS_2025]


def _check_override(key: str, override: BenefitOverride) -> None:
    if key not in _DEFINITIONS:
        raise InvalidArgumentError(f"Unknown benefit key {key!r}")
    values = {
        name: value
        for name, value in (("amount", override.amount), ("days", override.days))
        if value is not None
    }
    require_valid(**values)


def _apply_override(
    item: BenefitItem, override: BenefitOverride | None, rate: float, hours: float
) -> BenefitItem:
    if override is None:
        return item
    defn = _DEFINITIONS[item.key]
    enabled = item.enabled if override.enabled is None else override.enabled
    if defn.valuation == "days_of_pay":
        days = item.days if override.days is None else override.days
        amount = _round_dollars(_days_value(days or 0.0, rate, hours))
        return replace(item, enabled=enabled, days=days, amount=amount)
    if defn.valuation == "percent_of_gross":
        return replace(item, enabled=enabled)
    amount = item.amount if override.amount is None else override.amount
    return replace(item, enabled=enabled, amount=amount)


def resolve_benefit_items(
    mode: str,
    coverage: str,
    rate: float,
    hours: float,
    overrides: Mapping[str, BenefitOverride] | None = None,
) -> list[BenefitItem]:
    """Active benefit list for ``mode``.

    ``off`` yields nothing, ``averages`` the priced defaults, and ``custom`` the
    priced defaults with ``overrides`` merged over them. Day and percent based
    amounts always follow the current rate and hours; a custom amount on a
    fixed item is kept as entered.
    """
    require_choice(mode, BENEFIT_MODES, "benefit mode")
    if mode == "off":
        return []
    items = build_benefit_items(coverage, rate, hours)
    if mode == "averages":
        return items
    overrides = overrides or {}
    for key, override in overrides.items():
        _check_override(key, override)
    return [_apply_override(item, overrides.get(item.key), rate, hours) for item in items]


def update_override(
    overrides: Mapping[str, BenefitOverride], key: str, **patch: object
) -> dict[str, BenefitOverride]:
    """Return a copy of ``overrides`` with ``patch`` merged into ``key``'s entry."""
    unknown = set(patch) - _OVERRIDE_FIELDS
    if unknown:
        raise InvalidArgumentError(f"Unknown benefit override fields: {sorted(unknown)}")
    current = overrides.get(key, BenefitOverride())
    updated = replace(current, **patch)  # type: ignore[arg-type]
    _check_override(key, updated)
    merged = dict(overrides)
    merged[key] = updated
    return merged


def reset_overrides() -> dict[str, BenefitOverride]:
    return {}


def benefits_value(items: Iterable[BenefitItem]) -> float:
    return sum((item.amount for item in items if item.enabled), 0.0)


__all__ = [
    "BENEFIT_DEFAULTS_2025",
    "BENEFIT_MODES",
    "COVERAGE_TYPES",
    "FULL_TIME_HOURS",
    "HOURS_PER_DAY",
    "BenefitDefinition",
    "BenefitOverride",
    "benefits_value",
    "build_benefit_items",
    "reset_overrides",
    "resolve_benefit_items",
    "update_override",
]
