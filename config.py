"""
Constants and configuration for the Observatory engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import List

from pydantic_settings import BaseSettings


OBSERVATORY_MAX_EVENTS: int = int(os.getenv("OBSERVATORY_MAX_EVENTS", "1000"))
OBSERVATORY_CORRELATION_WINDOW: float = float(os.getenv("OBSERVATORY_CORRELATION_WINDOW", "3600"))
OBSERVATORY_METRICS_MAX_SIZE: int = int(os.getenv("OBSERVATORY_METRICS_MAX_SIZE", "10000"))
OBSERVATORY_METRICS_TTL: int = int(os.getenv("OBSERVATORY_METRICS_TTL", "3600"))

DEFAULT_METRIC_SOURCE = "unknown"

SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400

# hours ahead of "now" that a plain trend forecast extrapolates to
TREND_HORIZON_HOURS = 24


class Settings(BaseSettings):
    # event log / correlator
    correlator_max_events: int = OBSERVATORY_MAX_EVENTS
    correlation_window_seconds: float = OBSERVATORY_CORRELATION_WINDOW

    # correlation confidence: base grows per related change up to a cap,
    # the closest change adds a bonus that decays linearly across the window
    correlation_count_weight: float = 0.2
    correlation_count_cap: float = 0.6
    correlation_proximity_weight: float = 0.3

    # neither correlations nor forecasts may claim certainty
    confidence_ceiling: float = 0.95

    # metric store
    metrics_max_size: int = OBSERVATORY_METRICS_MAX_SIZE
    metrics_default_ttl_seconds: int = OBSERVATORY_METRICS_TTL

    # regression / forecasting
    forecast_min_samples: int = 3
    # absolute bound on the OLS denominator in hours squared, so it depends on
    # the sampling interval: samples seconds apart fall under it and read as flat
    regression_epsilon: float = 1e-4
    forecast_trend_band: float = 0.01
    forecast_confidence_base: float = 0.2
    forecast_data_weight: float = 0.05
    forecast_data_cap: float = 0.4
    forecast_slope_weight: float = 0.1
    forecast_slope_cap: float = 0.4
    forecast_exhaustion_threshold: float = 100.0
    forecast_breach_threshold: float = 85.0

    # naming convention for bounded-percentage metrics
    forecast_usage_markers: List[str] = ["usage", "percent", "used"]
    forecast_usage_suffixes: List[str] = ["_pct", "_percent"]

    model_config = {
        "env_prefix": "OBSERVATORY_",
        "extra": "ignore",
    }


settings = Settings()
