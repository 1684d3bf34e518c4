from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence


@dataclass(frozen=True)
class Bracket:
    up_to: float | None
    rate: float


@dataclass(frozen=True)
class StateBracket:
    lower: float
    upper: float | None
    base: float
    rate: float


def tax_from_brackets(taxable: float, brackets: Iterable[Bracket]) -> float:
    """Integrate marginal rates over ``brackets`` up to ``taxable``.

    Each dollar is taxed only at the rate of the bracket it falls in. An amount
    exactly on a limit belongs to that bracket. Non-positive income owes nothing.
    """
    if taxable <= 0:
        return 0.0
    tax, prev = 0.0, 0.0
    for b in brackets:
        cap = taxable if b.up_to is None else min(taxable, b.up_to)
        span = cap - prev
        if span > 0:
            tax += span * b.rate
        if b.up_to is None or taxable <= b.up_to:
            break
        prev = b.up_to
    return tax


def tax_from_base_table(taxable: float, brackets: Sequence[StateBracket]) -> float:
    """Look up the single bracket holding ``taxable`` and apply base + marginal."""
    if taxable <= 0:
        return 0.0
    for b in brackets:
        if b.upper is None or taxable <= b.upper:
            return b.base + b.rate * (taxable - b.lower)
    raise ValueError(f"State schedule does not cover taxable income {taxable}")


def build_state_schedule(
    rows: Iterable[tuple[float, float | None, float]],
) -> tuple[StateBracket, ...]:
    """Derive base-tax-at-lower for each ``(lower, upper, rate)`` row."""
    brackets: list[StateBracket] = []
    base = 0.0
    for lower, upper, rate in rows:
        brackets.append(StateBracket(lower=lower, upper=upper, base=base, rate=rate))
        if upper is not None:
            base += rate * (upper - lower)
    return tuple(brackets)


def check_progressive_schedule(brackets: Sequence[Bracket]) -> None:
    if not brackets:
        raise ValueError("Bracket schedule is empty")
    if brackets[-1].up_to is not None:
        raise ValueError("Last bracket must be open ended")
    prev_limit = 0.0
    prev_rate = 0.0
    for b in brackets[:-1]:
        if b.up_to is None or b.up_to <= prev_limit:
            raise ValueError(f"Bracket limits must strictly increase (at {b.up_to})")
        prev_limit = b.up_to
    for b in brackets:
        if b.rate < prev_rate:
            raise ValueError(f"Bracket rates must not decrease (at {b.rate})")
        prev_rate = b.rate


def check_state_schedule(brackets: Sequence[StateBracket], tolerance: float = 1e-6) -> None:
    if not brackets:
        raise ValueError("State schedule is empty")
    if brackets[0].lower != 0:
        raise ValueError("State schedule must start at zero")
    if brackets[-1].upper is not None:
        raise ValueError("Last state bracket must be open ended")
    for current, following in zip(brackets, brackets[1:]):
        if current.upper != following.lower:
            raise ValueError(
                f"Gap between state brackets at {current.upper} / {following.lower}"
            )
        expected = current.base + current.rate * (following.lower - current.lower)
        if abs(expected - following.base) > tolerance:
            raise ValueError(
                f"State bracket base {following.base} at {following.lower} "
                f"does not chain from previous bracket ({expected})"
            )


def published_base_drift(
    brackets: Sequence[StateBracket], published: Sequence[float]
) -> float:
    """Largest absolute gap between derived bases and a published base column."""
    if len(brackets) != len(published):
        raise ValueError("Published base column does not match schedule length")
    return max(abs(b.base - p) for b, p in zip(brackets, published))


__all__ = [
    "Bracket",
    "StateBracket",
    "build_state_schedule",
    "check_progressive_schedule",
    "check_state_schedule",
    "published_base_drift",
    "tax_from_base_table",
    "tax_from_brackets",
]
