"""ConfigService — read back effective configuration values."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from logrange.services.result import ServiceResult

if TYPE_CHECKING:
    from logrange.config.settings import LograngeSettings

_OP = "config_get"


def _flatten(settings: LograngeSettings) -> dict[str, Any]:
    """Dash-case key -> effective value, section prefixes dropped."""
    values: dict[str, Any] = {}
    for section in (settings.search, settings.time):
        for name, value in section.model_dump().items():
            values[name.replace("_", "-")] = value
    values["config-path"] = str(settings.config_path) if settings.config_path else None
    return values


class ConfigService:
    """Expose configuration parameters by their CLI names."""

    def __init__(self, settings: LograngeSettings) -> None:
        self._settings = settings

    def available_keys(self) -> list[str]:
        return sorted(_flatten(self._settings))

    def get(self, key: str | None = None) -> ServiceResult:
        """Return one parameter, or all of them when *key* is None."""
        values = _flatten(self._settings)
        if key is None:
            return ServiceResult(ok=True, op=_OP, data=values)

        normalized = key.strip().lower().replace("_", "-")
        if normalized not in values:
            return ServiceResult.failure(
                _OP,
                "UnknownConfigKey",
                f"Unknown configuration parameter: {key}",
                detail={"key": key, "available": sorted(values)},
            )
        return ServiceResult(ok=True, op=_OP, data={normalized: values[normalized]})
