"""Cosmetic dashboard settings and their validation rules."""

from __future__ import annotations

import math
from typing import Any, Callable, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

AccentColor = Literal["green", "blue", "purple", "orange", "red", "cyan", "amber", "pink"]

ACCENT_PRESETS: dict[str, dict[str, str]] = {
    "green": {"primary": "#46a758", "primaryLight": "rgba(70,167,88,0.1)", "glow": "rgba(70,167,88,0.6)"},
    "blue": {"primary": "#3e63dd", "primaryLight": "rgba(62,99,221,0.1)", "glow": "rgba(62,99,221,0.6)"},
    "purple": {"primary": "#8e4ec6", "primaryLight": "rgba(142,78,198,0.1)", "glow": "rgba(142,78,198,0.6)"},
    "orange": {"primary": "#f76b15", "primaryLight": "rgba(247,107,21,0.1)", "glow": "rgba(247,107,21,0.6)"},
    "red": {"primary": "#e54d2e", "primaryLight": "rgba(229,77,46,0.1)", "glow": "rgba(229,77,46,0.6)"},
    "cyan": {"primary": "#00a2c7", "primaryLight": "rgba(0,162,199,0.1)", "glow": "rgba(0,162,199,0.6)"},
    "amber": {"primary": "#ffb224", "primaryLight": "rgba(255,178,36,0.1)", "glow": "rgba(255,178,36,0.6)"},
    "pink": {"primary": "#e879a4", "primaryLight": "rgba(232,121,164,0.1)", "glow": "rgba(232,121,164,0.6)"},
}

MIN_REFRESH_INTERVAL_MS = 5000


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _one_of(*choices: str) -> Callable[[Any], bool]:
    return lambda value: value in choices


def _is_refresh_interval(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    return math.isfinite(value) and value >= MIN_REFRESH_INTERVAL_MS


def _keep_valid(data: Any, rules: dict[str, Callable[[Any], bool]]) -> dict[str, Any]:
    if not isinstance(data, dict):
        return {}
    return {key: data[key] for key, ok in rules.items() if key in data and ok(data[key])}


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, frozen=True)


class BackgroundGradient(_CamelModel):
    """CSS colors for the two corner glows behind the board."""

    top_left: str = "rgba(70,167,88,0.05)"
    bottom_right: str = "rgba(62,99,221,0.05)"

    @model_validator(mode="before")
    @classmethod
    def _drop_invalid(cls, data: Any) -> dict[str, Any]:
        return _keep_valid(data, {"topLeft": _is_str, "bottomRight": _is_str})


class DashboardSettings(_CamelModel):
    """User-editable dashboard settings.

    Any field with a value of the wrong type or outside its allowed set falls
    back to its own default; the rest of the document is still honoured.
    """

    name: str = "OpenClaw"
    subtitle: str = "Mission Control"
    repo_url: Optional[str] = None
    logo_icon: str = "zap"
    theme: Literal["dark", "light"] = "dark"
    accent_color: AccentColor = "green"
    background_gradient: BackgroundGradient = Field(default_factory=BackgroundGradient)
    card_density: Literal["compact", "comfortable"] = "comfortable"
    show_metrics_panel: bool = True
    show_token_panel: bool = True
    refresh_interval: int = 30000
    time_display: Literal["utc", "local"] = "utc"

    @model_validator(mode="before")
    @classmethod
    def _drop_invalid(cls, data: Any) -> dict[str, Any]:
        kept = _keep_valid(
            data,
            {
                "name": _is_str,
                "subtitle": _is_str,
                "repoUrl": _is_str,
                "logoIcon": _is_str,
                "theme": _one_of("dark", "light"),
                "accentColor": _one_of(*ACCENT_PRESETS),
                "backgroundGradient": lambda value: True,
                "cardDensity": _one_of("compact", "comfortable"),
                "refreshInterval": _is_refresh_interval,
                "timeDisplay": _one_of("utc", "local"),
            },
        )
        if "refreshInterval" in kept:
            kept["refreshInterval"] = int(kept["refreshInterval"])
        if isinstance(data, dict):
            # Panels are shown unless explicitly switched off.
            kept["showMetricsPanel"] = data.get("showMetricsPanel") is not False
            kept["showTokenPanel"] = data.get("showTokenPanel") is not False
        return kept

    def accent(self) -> dict[str, str]:
        return dict(ACCENT_PRESETS.get(self.accent_color, ACCENT_PRESETS["green"]))


def dashboard_config(settings: DashboardSettings, version: str) -> dict[str, Any]:
    """Identity block shown in the dashboard header."""
    return {
        "name": settings.name,
        "subtitle": settings.subtitle,
        "repoUrl": settings.repo_url,
        "version": version,
    }


def client_settings(settings: DashboardSettings) -> dict[str, Any]:
    """Display settings sent to the client, with the accent preset resolved."""
    payload = settings.model_dump(by_alias=True)
    payload["accent"] = settings.accent()
    return payload
