from __future__ import annotations

"""
HTTP API surface for the Atlas backend.

Design intent:
- Keep API orchestration thin and typed.
- Delegate fetch/compute/classify to the atlas analyzer.
- Map domain failures to predictable 500 responses with static per-metric messages.
"""

import logging
import threading

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from backend.atlas.analyzer import MetricAnalyzer, MetricResult
from backend.atlas.errors import AtlasError, FetchError, InsufficientDataError
from backend.atlas.fred_client import FredClient
from backend.atlas.metrics import MetricKind, get_metric_spec
from backend.internal_core.config import ConfigError, load_config, load_cors_origins


class EconomicDataResponse(BaseModel):
    label: str
    value: float
    risk: float = Field(ge=0.0, le=100.0)
    recommendation: str = Field(min_length=1)


class AtlasOverviewResponse(BaseModel):
    metrics: list[EconomicDataResponse] = Field(default_factory=list)


app = FastAPI(title="atlas backend service")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=load_cors_origins(),
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)

_ANALYZER_LOCK = threading.Lock()


def _get_metric_analyzer() -> MetricAnalyzer:
    existing = getattr(app.state, "atlas_analyzer", None)
    if isinstance(existing, MetricAnalyzer):
        return existing
    with _ANALYZER_LOCK:
        existing = getattr(app.state, "atlas_analyzer", None)
        if isinstance(existing, MetricAnalyzer):
            return existing
        try:
            cfg = load_config()
        except ConfigError as exc:
            logger.error("atlas_config_invalid reason=%s", exc)
            raise HTTPException(status_code=500, detail="Atlas service is not configured.") from exc
        created = MetricAnalyzer(FredClient.from_config(cfg).fetch_series)
        setattr(app.state, "atlas_analyzer", created)
        return created


def fetch_failure_message(kind: MetricKind) -> str:
    return f"Failed to fetch {get_metric_spec(kind).description} data"


def insufficient_data_message(kind: MetricKind) -> str:
    return f"Insufficient data to compute {get_metric_spec(kind).description}"


def analysis_failure_message(kind: MetricKind) -> str:
    return f"Failed to analyse {get_metric_spec(kind).description} data"


def _to_response(result: MetricResult) -> EconomicDataResponse:
    return EconomicDataResponse(
        label=result.label,
        value=result.value,
        risk=result.risk,
        recommendation=result.recommendation,
    )


def _analyze_or_500(analyzer: MetricAnalyzer, kind: MetricKind) -> MetricResult:
    spec = get_metric_spec(kind)
    try:
        return analyzer.analyze(kind)
    except FetchError as exc:
        logger.warning(
            "atlas_fetch_failed metric=%s series=%s reason=%s", kind.value, spec.series_id, exc
        )
        raise HTTPException(status_code=500, detail=fetch_failure_message(kind)) from exc
    except InsufficientDataError as exc:
        logger.warning(
            "atlas_insufficient_data metric=%s series=%s required=%s available=%s",
            kind.value,
            spec.series_id,
            exc.required,
            exc.available,
        )
        raise HTTPException(status_code=500, detail=insufficient_data_message(kind)) from exc
    except AtlasError as exc:
        logger.warning(
            "atlas_analysis_failed metric=%s series=%s reason=%s", kind.value, spec.series_id, exc
        )
        raise HTTPException(status_code=500, detail=analysis_failure_message(kind)) from exc


def analyze_metric(kind: MetricKind) -> EconomicDataResponse:
    return _to_response(_analyze_or_500(_get_metric_analyzer(), kind))


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


# Handlers stay sync: the upstream fetch blocks.
@app.get("/atlas/unemployment", response_model=EconomicDataResponse)
def atlas_unemployment() -> EconomicDataResponse:
    return analyze_metric(MetricKind.UNEMPLOYMENT)


@app.get("/atlas/inflation", response_model=EconomicDataResponse)
def atlas_inflation() -> EconomicDataResponse:
    return analyze_metric(MetricKind.INFLATION)


@app.get("/atlas/interest_rate", response_model=EconomicDataResponse)
def atlas_interest_rate() -> EconomicDataResponse:
    return analyze_metric(MetricKind.INTEREST_RATE)


@app.get("/atlas/gdp_growth", response_model=EconomicDataResponse)
def atlas_gdp_growth() -> EconomicDataResponse:
    return analyze_metric(MetricKind.GDP_GROWTH)


@app.get("/atlas/overview", response_model=AtlasOverviewResponse)
def atlas_overview() -> AtlasOverviewResponse:
    analyzer = _get_metric_analyzer()
    return AtlasOverviewResponse(
        metrics=[_to_response(_analyze_or_500(analyzer, kind)) for kind in MetricKind]
    )
