"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, logrange.toml only contains
overrides.  A fresh install needs no config file at all.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from logrange.domain.grammar import DEFAULT_SEPARATOR


class SearchConfig(BaseModel):
    """[search] section."""

    model_config = {"frozen": True}

    range_separator: str = DEFAULT_SEPARATOR
    default_window_minutes: int = Field(default=60, gt=0)
    timestamp_field: str = "@timestamp"


class TimeConfig(BaseModel):
    """[time] section.

    ``timezone`` is an IANA name; empty means the local timezone of the
    reference instant.
    """

    model_config = {"frozen": True}

    timezone: str = ""
    prefer_dates_from: Literal["past", "future", "current_period"] = "past"
    languages: list[str] = Field(default_factory=lambda: ["en"])

    @field_validator("timezone")
    @classmethod
    def _strip_timezone(cls, value: str) -> str:
        return value.strip()
