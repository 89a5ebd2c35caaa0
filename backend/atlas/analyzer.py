from __future__ import annotations

"""
Fetch -> compute -> classify for one macro indicator per call.

Design intent:
- Keep the analyzer stateless apart from its injected fetcher and read-only table.
- Let domain errors propagate; the API layer decides how to report them.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from backend.atlas.errors import FetchError
from backend.atlas.metrics import MetricKind, compute_metric_value, compute_risk, get_metric_spec
from backend.atlas.recommendations import (
    DEFAULT_RECOMMENDATIONS,
    RecommendationTable,
    select_recommendation,
)


logger = logging.getLogger(__name__)

SeriesFetcher = Callable[[str], Sequence[float]]


@dataclass(frozen=True)
class MetricResult:
    metric: MetricKind
    label: str
    value: float
    risk: float
    recommendation: str


class MetricAnalyzer:
    def __init__(
        self,
        fetch_series: SeriesFetcher,
        recommendations: RecommendationTable = DEFAULT_RECOMMENDATIONS,
    ) -> None:
        self._fetch_series = fetch_series
        self._recommendations = recommendations

    def analyze(self, kind: MetricKind | str) -> MetricResult:
        spec = get_metric_spec(kind)
        observations = list(self._fetch_series(spec.series_id))
        if not observations:
            raise FetchError(f"Series {spec.series_id} returned no observations.")

        value = compute_metric_value(spec.kind, observations)
        risk = compute_risk(spec.kind, value)
        recommendation = select_recommendation(spec.kind, risk, self._recommendations)
        logger.debug(
            "atlas_analyze metric=%s series=%s observations=%s value=%s risk=%s",
            spec.kind.value,
            spec.series_id,
            len(observations),
            value,
            risk,
        )
        return MetricResult(
            metric=spec.kind,
            label=spec.label,
            value=value,
            risk=risk,
            recommendation=recommendation,
        )
