from __future__ import annotations

"""
Derive headline values and risk scores for the tracked macro indicators.

Design intent:
- Each indicator is a closed MetricKind carrying its own series, derivation and risk transform.
- Risk is a clamped affine distance from a neutral value, scaled to 0-100.
- Short histories fail explicitly instead of indexing out of range.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Sequence

from backend.atlas.errors import InsufficientDataError, MetricComputationError


Derivation = Literal["level", "change"]


class MetricKind(str, Enum):
    UNEMPLOYMENT = "unemployment"
    INFLATION = "inflation"
    INTEREST_RATE = "interest_rate"
    GDP_GROWTH = "gdp_growth"


@dataclass(frozen=True)
class RiskTransform:
    """risk = clamp((value - neutral) / tolerance, 0, 1) * 100.

    With ``symmetric`` the distance is taken as ``abs(value - neutral)`` so
    deviations on either side of the neutral value count as risk.
    """

    neutral: float
    tolerance: float
    symmetric: bool = False

    def __call__(self, value: float) -> float:
        distance = value - self.neutral
        if self.symmetric:
            distance = abs(distance)
        return _clamp(distance / self.tolerance, 0.0, 1.0) * 100.0


@dataclass(frozen=True)
class MetricSpec:
    kind: MetricKind
    label: str
    series_id: str
    description: str
    derivation: Derivation
    risk: RiskTransform
    periods: int = 0

    @property
    def min_observations(self) -> int:
        return self.periods + 1 if self.derivation == "change" else 1


METRIC_SPECS: dict[MetricKind, MetricSpec] = {
    MetricKind.UNEMPLOYMENT: MetricSpec(
        kind=MetricKind.UNEMPLOYMENT,
        label="Unemployment Rate",
        series_id="UNRATE",
        description="unemployment rate",
        derivation="level",
        risk=RiskTransform(neutral=4.0, tolerance=6.0),
    ),
    MetricKind.INFLATION: MetricSpec(
        kind=MetricKind.INFLATION,
        label="Inflation Rate",
        series_id="CPIAUCSL",
        description="inflation rate",
        derivation="change",
        periods=12,
        risk=RiskTransform(neutral=2.0, tolerance=3.0),
    ),
    MetricKind.INTEREST_RATE: MetricSpec(
        kind=MetricKind.INTEREST_RATE,
        label="Interest Rate",
        series_id="FEDFUNDS",
        description="interest rate",
        derivation="level",
        risk=RiskTransform(neutral=2.75, tolerance=2.25, symmetric=True),
    ),
    MetricKind.GDP_GROWTH: MetricSpec(
        kind=MetricKind.GDP_GROWTH,
        label="GDP Growth Rate",
        series_id="GDPC1",
        description="GDP growth",
        derivation="change",
        periods=4,
        risk=RiskTransform(neutral=2.5, tolerance=2.5, symmetric=True),
    ),
}


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def round_to_two_decimals(value: float) -> float:
    """Round to two decimals with ties away from zero (2.125 -> 2.13, -2.125 -> -2.13)."""
    if not math.isfinite(value):
        return value
    scaled = value * 100.0
    whole = math.trunc(scaled)
    if abs(scaled - whole) >= 0.5:
        whole += int(math.copysign(1, scaled))
    return whole / 100.0


def get_metric_spec(kind: MetricKind | str) -> MetricSpec:
    return METRIC_SPECS[MetricKind(kind)]


def latest_level(observations: Sequence[float]) -> float:
    if not observations:
        raise InsufficientDataError("No observations available.", required=1, available=0)
    latest = float(observations[-1])
    if not math.isfinite(latest):
        raise MetricComputationError(f"Latest observation is not finite: {latest!r}.")
    return latest


def percent_change(observations: Sequence[float], periods: int) -> float:
    """Percentage change between the latest observation and the one ``periods`` earlier."""
    required = periods + 1
    if len(observations) < required:
        raise InsufficientDataError(
            f"Need at least {required} observations, got {len(observations)}.",
            required=required,
            available=len(observations),
        )
    latest = float(observations[-1])
    baseline = float(observations[-required])
    if baseline == 0.0:
        raise MetricComputationError(f"Baseline observation {periods} periods back is zero.")
    change = (latest - baseline) / baseline * 100.0
    if not math.isfinite(change):
        raise MetricComputationError(
            f"Change over {periods} periods is not finite (baseline={baseline!r}, latest={latest!r})."
        )
    return change


def compute_metric_value(kind: MetricKind | str, observations: Sequence[float]) -> float:
    spec = get_metric_spec(kind)
    if spec.derivation == "change":
        value = percent_change(observations, spec.periods)
    else:
        value = latest_level(observations)
    return round_to_two_decimals(value)


def compute_risk(kind: MetricKind | str, value: float) -> float:
    spec = get_metric_spec(kind)
    return round_to_two_decimals(spec.risk(value))
