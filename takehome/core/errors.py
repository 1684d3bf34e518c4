from __future__ import annotations

from typing import Iterable, Mapping, TypeVar

T = TypeVar("T")


class InvalidArgumentError(ValueError):
    pass


class UnknownFilingStatusError(InvalidArgumentError):
    pass


def select_for_status(table: Mapping[str, T], filing: str) -> T:
    try:
        return table[filing]
    except KeyError as exc:
        raise UnknownFilingStatusError(
            f"Unsupported filing status {filing!r}; expected one of {sorted(table)}"
        ) from exc


def require_choice(value: str, choices: Iterable[str], what: str) -> None:
    allowed = tuple(choices)
    if value not in allowed:
        raise InvalidArgumentError(f"Unsupported {what} {value!r}; expected one of {sorted(allowed)}")


def select_option(table: Mapping[str, T], value: str, what: str) -> T:
    try:
        return table[value]
    except KeyError as exc:
        raise InvalidArgumentError(
            f"Unsupported {what} {value!r}; expected one of {sorted(table)}"
        ) from exc


__all__ = [
    "InvalidArgumentError",
    "UnknownFilingStatusError",
    "require_choice",
    "select_for_status",
    "select_option",
]
