from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from takehome.core.errors import InvalidArgumentError


@dataclass
class ValidationIssue:
    code: str
    message: str
    field: Optional[str] = None
    severity: str = "error"


@dataclass(frozen=True)
class IssueTemplate:
    code: str
    message: str


ISSUE_NOT_NUMERIC = IssueTemplate("not_numeric", "{field} must be a number.")
ISSUE_NOT_FINITE = IssueTemplate("not_finite", "{field} must be a finite number.")
ISSUE_NEGATIVE = IssueTemplate("negative_amount", "{field} must be zero or positive.")


def _issue(template: IssueTemplate, field: str) -> ValidationIssue:
    return ValidationIssue(template.code, template.message.format(field=field), field)


def validate_scenario_inputs(**values: object) -> list[ValidationIssue]:
    """Check that every keyword value is a finite, non-negative number."""
    issues: list[ValidationIssue] = []
    for field, value in values.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            issues.append(_issue(ISSUE_NOT_NUMERIC, field))
        elif not math.isfinite(value):
            issues.append(_issue(ISSUE_NOT_FINITE, field))
        elif value < 0:
            issues.append(_issue(ISSUE_NEGATIVE, field))
    return issues


def require_valid(**values: object) -> None:
    issues = validate_scenario_inputs(**values)
    if issues:
        raise InvalidArgumentError("; ".join(issue.message for issue in issues))


def require_finite(field: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidArgumentError(_issue(ISSUE_NOT_FINITE, field).message)


__all__ = [
    "ISSUE_NEGATIVE",
    "ISSUE_NOT_FINITE",
    "ISSUE_NOT_NUMERIC",
    "IssueTemplate",
    "ValidationIssue",
    "require_finite",
    "require_valid",
    "validate_scenario_inputs",
]
