from __future__ import annotations

"""
Process entrypoint: ``python -m backend``.

Refuses to serve when FRED_API_KEY is missing.
"""

import logging
import sys

import uvicorn

from backend.api.main import app
from backend.atlas.analyzer import MetricAnalyzer
from backend.atlas.fred_client import FredClient
from backend.internal_core.config import ConfigError, load_config, load_log_level


logger = logging.getLogger("backend")


def main() -> int:
    logging.basicConfig(
        level=load_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        cfg = load_config()
    except ConfigError as exc:
        logger.error("atlas_startup_aborted reason=%s", exc)
        return 1

    app.state.atlas_analyzer = MetricAnalyzer(FredClient.from_config(cfg).fetch_series)
    logger.info("atlas_startup host=%s port=%s", cfg.ATLAS_HOST, cfg.ATLAS_PORT)
    uvicorn.run(app, host=cfg.ATLAS_HOST, port=cfg.ATLAS_PORT, log_level=cfg.ATLAS_LOG_LEVEL.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
