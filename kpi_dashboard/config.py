"""
Application-wide configuration constants and settings resolution.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

import streamlit as st


@dataclass(frozen=True)
class TabConfig:
    key: str
    label: str


@dataclass(frozen=True)
class KpiConfig:
    value: str
    label: str


@dataclass(frozen=True)
class ColorPolicy:
    """Three ordered colour bands for KPI percentages.

    low:  value <  low_below
    mid:  mid_min <= value <= mid_max
    high: everything else, including ``low_below`` itself, the gaps between
          the bands and NaN.
    """

    low_below: float = 84.0
    mid_min: float = 85.0
    mid_max: float = 91.0
    low_color: str = "#FF0000"
    mid_color: str = "#FFA500"
    high_color: str = "#00FF00"


# Ordered tab definitions for the dashboard
TABS: List[TabConfig] = [
    TabConfig("regions", "Regions"),
    TabConfig("paralegals", "Paralegals"),
    TabConfig("attorneys", "Attorneys"),
]

KPIS: List[KpiConfig] = [
    KpiConfig("ProjectedRate", "Projected"),
    KpiConfig("ClientExperienceRate", "Client Experience"),
    KpiConfig("NextStepsRate", "Next Steps"),
    KpiConfig("NextTriggerRate", "Next Trigger"),
    KpiConfig("CleanDashboardRate", "Clean Dashboard"),
]

KPI_FIELDS: List[str] = [kpi.value for kpi in KPIS]
KPI_LABELS = {kpi.value: kpi.label for kpi in KPIS}

UNDERPERFORMING_THRESHOLD = 84.0
DEFAULT_COLOR_POLICY = ColorPolicy()


@dataclass(frozen=True)
class Settings:
    data_url: str
    request_timeout: Optional[float] = None
    log_level: str = "INFO"


def _get_secret(name: str, default: str | None = None) -> str | None:
    """Try env first, then st.secrets (if available)."""
    val = os.getenv(name)
    if val:
        return val
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            v = sec.get(name)  # type: ignore[index]
            return str(v) if v is not None else default
    except Exception:
        # st.secrets raises when no secrets.toml exists outside Streamlit Cloud
        pass
    return default


def _available_secret_keys() -> list[str]:
    keys: list[str] = []
    try:
        sec = getattr(st, "secrets", None)
        if isinstance(sec, dict):
            keys = list(sec.keys())
        else:
            keys = list(sec.to_dict().keys())  # type: ignore[attr-defined, union-attr]
    except Exception:
        pass
    return sorted(set(str(k) for k in keys))


def _parse_timeout(raw: str | None) -> Optional[float]:
    if raw is None or not str(raw).strip():
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise RuntimeError(f"KPI_REQUEST_TIMEOUT must be a number of seconds, got {raw!r}") from None
    return value if value > 0 else None


def get_settings() -> Settings:
    """Resolve settings from env vars, then Streamlit secrets, then defaults."""
    data_url = _get_secret("KPI_DATA_URL")
    if not data_url:
        keys = _available_secret_keys()
        env_flag = bool(os.getenv("KPI_DATA_URL"))
        raise RuntimeError(
            "KPI_DATA_URL env var missing (env or secrets). "
            f"Env present? {env_flag}. Secrets keys: {keys}"
        )

    return Settings(
        data_url=data_url.strip(),
        request_timeout=_parse_timeout(_get_secret("KPI_REQUEST_TIMEOUT")),
        log_level=(_get_secret("LOG_LEVEL", "INFO") or "INFO").upper(),
    )
