"""
Trend fitting for metric series, using closed-form least-squares regression over elapsed hours to estimate a rate of change, with a conservative confidence heuristic based on sample count and trend strength.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from config import SECONDS_PER_HOUR, settings
from store.metrics import MetricSample


def sort_samples(samples: Sequence[MetricSample]) -> List[MetricSample]:
    return sorted(samples, key=lambda s: s.timestamp)


def _elapsed_hours(samples: Sequence[MetricSample]) -> np.ndarray:
    ts = np.array([s.timestamp for s in samples], dtype=float)
    return (ts - ts[0]) / SECONDS_PER_HOUR


def linear_regression(samples: Sequence[MetricSample]) -> Tuple[float, float]:
    """Return ``(slope, intercept)`` of value against hours since the first sample.

    *samples* must be sorted by timestamp. When every sample shares the same
    elapsed time the fit is degenerate and a flat line through the mean is
    returned instead.
    """
    t = _elapsed_hours(samples)
    y = np.array([s.value for s in samples], dtype=float)
    n = len(samples)

    sum_t = float(np.sum(t))
    sum_y = float(np.sum(y))
    sum_ty = float(np.sum(t * y))
    sum_t2 = float(np.sum(t * t))

    denominator = n * sum_t2 - sum_t * sum_t
    if abs(denominator) < settings.regression_epsilon:
        return 0.0, sum_y / n

    slope = (n * sum_ty - sum_t * sum_y) / denominator
    intercept = (sum_y - slope * sum_t) / n
    return slope, intercept


def confidence(data_points: int, slope: float) -> float:
    # a proxy, not a goodness-of-fit measure: more samples and steeper
    # trends raise it, both capped, and it never reaches certainty
    data_factor = min(settings.forecast_data_cap, data_points * settings.forecast_data_weight)
    trend_factor = min(settings.forecast_slope_cap, abs(slope) * settings.forecast_slope_weight)
    return min(settings.confidence_ceiling, settings.forecast_confidence_base + data_factor + trend_factor)


def hours_to_seconds(hours: float) -> Optional[int]:
    """Whole seconds for *hours*, or ``None`` when the span is too large to represent."""
    seconds = hours * SECONDS_PER_HOUR
    if not math.isfinite(seconds):
        return None
    return int(round(seconds))
