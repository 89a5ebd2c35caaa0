from __future__ import annotations

"""
Static recommendation text selected by risk bucket.

Design intent:
- Buckets are ordered, non-overlapping and cover the whole 0-100 risk range.
- The table is validated once at construction and never mutated afterwards.
- An out-of-range risk fails loudly instead of producing empty text.
"""

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal, Mapping, Sequence

from backend.atlas.errors import UnmappedRiskBucketError
from backend.atlas.metrics import MetricKind


RiskBucket = Literal[
    "low",
    "moderate",
    "medium",
    "balanced",
    "elevated",
    "high",
    "very_high",
    "extreme",
]

# Ascending exclusive upper bounds; the last bucket closes at 100 inclusive.
RISK_BUCKETS: tuple[tuple[RiskBucket, float], ...] = (
    ("low", 10.0),
    ("moderate", 20.0),
    ("medium", 30.0),
    ("balanced", 40.0),
    ("elevated", 50.0),
    ("high", 60.0),
    ("very_high", 70.0),
    ("extreme", 100.0),
)

GENERIC_RECOMMENDATION = (
    "No specific recommendation available. Further analysis and data collection "
    "may be necessary to provide a comprehensive assessment."
)


def bucket_names() -> Sequence[RiskBucket]:
    return [name for name, _upper in RISK_BUCKETS]


def risk_bucket(risk: float) -> RiskBucket:
    if math.isnan(risk) or risk < 0.0 or risk > 100.0:
        raise UnmappedRiskBucketError(f"Risk {risk!r} is outside the 0-100 bucket range.")
    for name, upper in RISK_BUCKETS[:-1]:
        if risk < upper:
            return name
    return RISK_BUCKETS[-1][0]


def _table_key(key: MetricKind | str) -> MetricKind:
    try:
        return MetricKind(key)
    except ValueError as exc:
        raise ValueError(f"Recommendation table has unknown metric {key!r}.") from exc


@dataclass(frozen=True)
class RecommendationTable:
    texts: Mapping[MetricKind | str, tuple[str, ...]]

    def __post_init__(self) -> None:
        texts = {_table_key(key): entries for key, entries in self.texts.items()}
        missing = [kind.value for kind in MetricKind if kind not in texts]
        if missing:
            raise ValueError(f"Recommendation table is missing metrics: {missing}")
        for kind, entries in texts.items():
            if len(entries) != len(RISK_BUCKETS):
                raise ValueError(
                    f"Recommendation table for {kind.value} has {len(entries)} entries, "
                    f"expected {len(RISK_BUCKETS)}."
                )
            if any(not str(text).strip() for text in entries):
                raise ValueError(f"Recommendation table for {kind.value} has empty text.")
        frozen = {kind: tuple(entries) for kind, entries in texts.items()}
        object.__setattr__(self, "texts", MappingProxyType(frozen))

    @classmethod
    def from_buckets(cls, texts: Mapping[MetricKind | str, Mapping[str, str]]) -> "RecommendationTable":
        ordered: dict[MetricKind, tuple[str, ...]] = {}
        for key, by_bucket in texts.items():
            kind = _table_key(key)
            missing = [name for name, _upper in RISK_BUCKETS if name not in by_bucket]
            if missing:
                raise ValueError(f"Recommendation table for {kind.value} is missing buckets: {missing}")
            ordered[kind] = tuple(by_bucket[name] for name, _upper in RISK_BUCKETS)
        return cls(texts=ordered)

    def text_for(self, kind: MetricKind, bucket: RiskBucket) -> str:
        return self.texts[kind][list(bucket_names()).index(bucket)]


def _build_default_table() -> RecommendationTable:
    unemployment = {
        "low": (
            "Unemployment is significantly below the natural rate, potentially leading to upward wage "
            "pressures and inflationary concerns due to a tight labor market."
        ),
        "moderate": (
            "The unemployment rate is below the natural rate, indicating a strong labor market with "
            "minimal slack. Wage growth may accelerate, contributing to inflationary pressures."
        ),
        "medium": (
            "Unemployment is slightly below equilibrium, suggesting a healthy labor market. However, "
            "watch for early signs of labor shortages in key sectors."
        ),
        "balanced": (
            "Unemployment is near equilibrium, reflecting a balanced labor market. Any significant "
            "policy shifts could tip the balance, requiring careful monitoring."
        ),
        "elevated": (
            "Elevated unemployment levels indicate significant labor market slack, which could "
            "necessitate expansionary fiscal or monetary policy interventions."
        ),
        "high": (
            "Critically high unemployment risk, indicative of severe labor market weakness. Immediate "
            "stimulus measures may be required to prevent deflationary spirals."
        ),
        "very_high": (
            "Unemployment is critically high, indicating a severe economic downturn. Immediate "
            "intervention is necessary to avoid a prolonged recession."
        ),
        "extreme": (
            "Extremely high unemployment, signifying a major economic crisis. Comprehensive and "
            "aggressive policy measures are urgently required."
        ),
    }
    inflation = {
        "low": (
            "Inflation is well within the target range, indicating stable prices. This environment "
            "supports sustained economic growth and long-term planning."
        ),
        "moderate": (
            "Inflation remains under control, though slight upward pressures may be emerging. Policy "
            "vigilance is recommended to maintain price stability."
        ),
        "medium": (
            "Moderate inflationary pressures are beginning to surface, likely due to supply chain "
            "constraints or external shocks. A preemptive policy response may be warranted."
        ),
        "balanced": (
            "Inflation is rising but remains manageable. Continued monitoring and potential "
            "fine-tuning of monetary policy could be required to avert further escalation."
        ),
        "elevated": (
            "High inflation risk, reflecting overheating in the economy. Aggressive monetary "
            "tightening may be needed to rein in price growth and anchor expectations."
        ),
        "high": (
            "Severe inflationary pressures are eroding purchasing power and could destabilize the "
            "economy. Coordinated fiscal and monetary actions are urgently required."
        ),
        "very_high": (
            "Hyperinflation risk is imminent, threatening economic stability. Extreme measures, "
            "including potential currency reforms, may be necessary to restore confidence."
        ),
        "extreme": (
            "Hyperinflation is underway, causing rapid erosion of the currency's value. Immediate and "
            "drastic measures are required to stabilize the economy."
        ),
    }
    interest_rate = {
        "low": (
            "Interest rates are at historically low levels, fostering an environment conducive to "
            "borrowing and investment. This supports expansionary economic activity."
        ),
        "moderate": (
            "Interest rates are low, encouraging credit growth and investment. However, potential "
            "asset bubbles should be monitored as low rates persist."
        ),
        "medium": (
            "Interest rates are slightly above the floor, signaling a potential shift towards "
            "neutrality. Stakeholders should prepare for possible rate hikes in the near future."
        ),
        "balanced": (
            "Interest rates are approaching neutrality, suggesting a balanced approach to managing "
            "inflation and growth. Market participants should anticipate gradual adjustments."
        ),
        "elevated": (
            "Elevated interest rates reflect restrictive monetary policy aimed at curbing inflation. "
            "The high cost of capital may suppress economic expansion and increase default risks."
        ),
        "high": (
            "Interest rates are significantly high, suggesting aggressive monetary tightening. The "
            "economy could face contractionary pressures as borrowing becomes prohibitively expensive."
        ),
        "very_high": (
            "Exceptionally high interest rates, likely in response to hyperinflationary threats, could "
            "trigger severe economic contraction and destabilize financial markets."
        ),
        "extreme": (
            "Extremely high interest rates, likely in response to a financial crisis, could lead to a "
            "severe economic downturn. Immediate policy intervention is needed."
        ),
    }
    gdp_growth = {
        "low": (
            "GDP growth is steady and in line with potential output, reflecting a well-balanced "
            "economy. Continued prudent policy management is recommended."
        ),
        "moderate": (
            "GDP growth is moderate, aligning closely with potential output. This suggests stability, "
            "though the economy remains vulnerable to external shocks."
        ),
        "medium": (
            "GDP growth is healthy, slightly above potential output. The economy is performing well, "
            "but policymakers should be wary of signs of imbalances."
        ),
        "balanced": (
            "Strong GDP growth, supported by both domestic and international demand. This growth phase "
            "is likely sustainable, though inflationary pressures should be monitored."
        ),
        "elevated": (
            "GDP growth is exceeding long-term potential, driven by robust demand and favorable "
            "external conditions. However, there is a risk of overheating if growth continues unchecked."
        ),
        "high": (
            "GDP growth is slowing, raising concerns about underlying economic strength. Stimulative "
            "measures may be needed to prevent further deceleration."
        ),
        "very_high": (
            "GDP growth is weak, indicating a decelerating economy. The risk of recession is "
            "increasing, requiring proactive counter-cyclical policies."
        ),
        "extreme": (
            "Critically low GDP growth, signaling a high probability of recession or stagnation. "
            "Immediate and significant fiscal and monetary intervention is required to avert a "
            "prolonged downturn."
        ),
    }
    return RecommendationTable.from_buckets(
        {
            MetricKind.UNEMPLOYMENT: unemployment,
            MetricKind.INFLATION: inflation,
            MetricKind.INTEREST_RATE: interest_rate,
            MetricKind.GDP_GROWTH: gdp_growth,
        }
    )


DEFAULT_RECOMMENDATIONS = _build_default_table()


def _resolve_metric_kind(metric: MetricKind | str) -> MetricKind | None:
    if isinstance(metric, MetricKind):
        return metric
    try:
        return MetricKind(metric)
    except ValueError:
        return None


def select_recommendation(
    metric: MetricKind | str,
    risk: float,
    table: RecommendationTable = DEFAULT_RECOMMENDATIONS,
) -> str:
    kind = _resolve_metric_kind(metric)
    if kind is None:
        return GENERIC_RECOMMENDATION
    return table.text_for(kind, risk_bucket(risk))
