from __future__ import annotations

import os
from functools import lru_cache
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, field_validator

from takehome.core.models import FILING_STATUSES, FilingStatus
from takehome.core.tax_years.y2025.calc import (
    BREAKEVEN_ITERATIONS,
    BREAKEVEN_MAX_RATE,
    MIN_BREAKEVEN_ITERATIONS,
)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _env_filing() -> FilingStatus:
    value = os.getenv("TAKEHOME_FILING_STATUS", "single").lower()
    return cast(FilingStatus, value)


class Settings(BaseModel):
    default_filing_status: FilingStatus = Field(default_factory=_env_filing)
    breakeven_max_rate: float = Field(
        default_factory=lambda: float(os.getenv("BREAKEVEN_MAX_RATE", str(BREAKEVEN_MAX_RATE)))
    )
    breakeven_iterations: int = Field(
        default_factory=lambda: int(os.getenv("BREAKEVEN_ITERATIONS", str(BREAKEVEN_ITERATIONS)))
    )
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    artifact_root: str = Field(default_factory=lambda: os.getenv("ARTIFACT_ROOT", "artifacts"))
    build_version: str = Field(default_factory=lambda: os.getenv("BUILD_VERSION", "dev"))
    build_sha: str = Field(default_factory=lambda: os.getenv("BUILD_SHA", "local"))

    model_config = ConfigDict(frozen=True, validate_default=True)

    @field_validator("default_filing_status", mode="before")
    @classmethod
    def _normalize_filing(cls, value: str) -> str:
        lowered = (value or "single").lower()
        if lowered not in FILING_STATUSES:
            raise ValueError(f"TAKEHOME_FILING_STATUS must be single or mfj, got {value}")
        return lowered

    @field_validator("breakeven_max_rate")
    @classmethod
    def _validate_max_rate(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("BREAKEVEN_MAX_RATE must be positive")
        return value

    @field_validator("breakeven_iterations")
    @classmethod
    def _validate_iterations(cls, value: int) -> int:
        return max(MIN_BREAKEVEN_ITERATIONS, value)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        upper = (value or "INFO").upper()
        return upper if upper in _LOG_LEVELS else "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
