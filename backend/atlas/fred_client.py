from __future__ import annotations

"""
FRED observations client.

Design intent:
- One GET per series, no retries; failures surface as FetchError.
- Validate the upstream payload shape before trusting any value.
- Preserve source order (oldest first) so callers can index from the end.
"""

import logging
import math
from dataclasses import dataclass

import httpx
from pydantic import BaseModel, ValidationError

from backend.atlas.errors import FetchError
from backend.internal_core.config import FRED_OBSERVATIONS_URL, AtlasConfig


logger = logging.getLogger(__name__)


class FredObservation(BaseModel):
    value: str


class FredObservationsPayload(BaseModel):
    observations: list[FredObservation]


def parse_observation_values(payload: object) -> list[float]:
    try:
        parsed = FredObservationsPayload.model_validate(payload)
    except ValidationError as exc:
        raise FetchError(f"Unexpected observations payload: {exc}") from exc

    values: list[float] = []
    for idx, item in enumerate(parsed.observations):
        raw = item.value.strip()
        try:
            number = float(raw)
        except ValueError as exc:
            raise FetchError(f"Observation {idx} is not numeric: {raw!r}") from exc
        if not math.isfinite(number):
            raise FetchError(f"Observation {idx} is not finite: {raw!r}")
        values.append(number)
    return values


@dataclass(frozen=True)
class FredClient:
    api_key: str
    base_url: str = FRED_OBSERVATIONS_URL
    timeout_sec: float = 5.0
    transport: httpx.BaseTransport | None = None

    @classmethod
    def from_config(cls, cfg: AtlasConfig) -> "FredClient":
        return cls(
            api_key=cfg.FRED_API_KEY,
            base_url=cfg.FRED_API_BASE_URL,
            timeout_sec=cfg.FRED_TIMEOUT_SECONDS,
        )

    def fetch_series(self, series_id: str) -> list[float]:
        """Return every observation of ``series_id`` as floats, oldest first.

        Raises:
            FetchError: On transport failure, non-2xx status, malformed JSON,
                or a non-numeric observation value.
        """
        params = {
            "series_id": series_id,
            "api_key": self.api_key,
            "file_type": "json",
        }
        try:
            with httpx.Client(timeout=self.timeout_sec, transport=self.transport) as client:
                resp = client.get(self.base_url, params=params)
                resp.raise_for_status()
                payload = resp.json()
        except httpx.HTTPStatusError as exc:
            # The request URL carries the API key; report only the status.
            raise FetchError(
                f"FRED returned HTTP {exc.response.status_code} for series {series_id}"
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"FRED request failed for series {series_id}: {type(exc).__name__}") from exc
        except ValueError as exc:
            raise FetchError(f"FRED response for series {series_id} is not JSON") from exc

        values = parse_observation_values(payload)
        logger.debug("fred_fetch series=%s observations=%s", series_id, len(values))
        return values
