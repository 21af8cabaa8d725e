"""
Enumerations for Event Kinds, Forecast Types, Trend Directions and Forecast Errors

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum


class EventKind(str, Enum):
    change = "change"
    anomaly = "anomaly"
    metric = "metric"


class ForecastType(str, Enum):
    exhaustion = "exhaustion"
    threshold = "threshold"
    trend = "trend"


class TrendDirection(str, Enum):
    increasing = "increasing"
    decreasing = "decreasing"
    stable = "stable"

    @classmethod
    def from_slope(cls, slope: float, band: float | None = None) -> TrendDirection:
        # slopes inside the band are treated as numerical noise around zero
        if band is None:
            from config import settings

            band = settings.forecast_trend_band
        if slope > band:
            return cls.increasing
        if slope < -band:
            return cls.decreasing
        return cls.stable


class ForecastError(str, Enum):
    insufficient_data = "insufficient_data"
    not_trending = "not_trending"
    already_breached = "already_breached"
