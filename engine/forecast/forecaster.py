"""
Forecasting engine that reads fresh metric samples, fits a linear trend per metric, and predicts resource exhaustion, threshold breaches and 24-hour trend values; predictions are advisory only and carry a capped confidence.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from config import SECONDS_PER_HOUR, TREND_HORIZON_HOURS, settings
from engine.enums import ForecastError, ForecastType, TrendDirection
from engine.forecast import messages
from engine.forecast.trajectory import confidence, hours_to_seconds, linear_regression, sort_samples
from store.metrics import MetricSample, MetricStore

log = logging.getLogger(__name__)

UsagePredicate = Callable[[str], bool]
Fit = Tuple[float, float]


@dataclass(frozen=True)
class Forecast:
    metric_name: str
    forecast_type: ForecastType
    current_value: float
    predicted_value: float
    prediction_at: float
    confidence: float
    message: str
    data_points: int
    generated_at: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metric_name": self.metric_name,
            "forecast_type": self.forecast_type.value,
            "current_value": self.current_value,
            "predicted_value": self.predicted_value,
            "prediction_at": self.prediction_at,
            "confidence": self.confidence,
            "message": self.message,
            "data_points": self.data_points,
            "generated_at": self.generated_at,
        }


@dataclass(frozen=True)
class TrendAnalysis:
    metric_name: str
    direction: TrendDirection
    rate_per_hour: float
    current_value: float
    data_points: int
    analyzed_at: float


def is_usage_metric(name: str) -> bool:
    """Naming convention for bounded-percentage resources such as ``disk_usage``."""
    if any(marker in name for marker in settings.forecast_usage_markers):
        return True
    return any(name.endswith(suffix) for suffix in settings.forecast_usage_suffixes)


def _check_threshold(threshold: Any) -> float:
    if isinstance(threshold, bool):
        raise ValueError(f"threshold must be a number, got {threshold!r}")
    try:
        value = float(threshold)
    except (TypeError, ValueError):
        raise ValueError(f"threshold must be a number, got {threshold!r}") from None
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"threshold must be a finite non-negative number, got {threshold!r}")
    return value


class ForecastingEngine:
    def __init__(
        self,
        store: Optional[MetricStore] = None,
        clock: Callable[[], float] = time.time,
        usage_predicate: Optional[UsagePredicate] = None,
    ) -> None:
        self._store = store
        self._clock = clock
        self._is_usage = usage_predicate or is_usage_metric

    @property
    def store(self) -> MetricStore:
        if self._store is None:
            from engine.registry import get_metric_store

            return get_metric_store()
        return self._store

    def generate(self) -> List[Forecast]:
        grouped: Dict[str, List[MetricSample]] = {}
        for sample in self.store.all_fresh():
            grouped.setdefault(sample.name, []).append(sample)

        now = self._clock()
        forecasts: List[Forecast] = []
        for name, samples in grouped.items():
            if len(samples) < settings.forecast_min_samples:
                continue
            forecasts.extend(self._forecasts_for_metric(name, sort_samples(samples), now))

        forecasts.sort(key=lambda f: f.confidence, reverse=True)
        log.debug("Generated %d forecasts across %d metrics", len(forecasts), len(grouped))
        return forecasts

    def predict_exhaustion(self, metric_name: str, threshold: float) -> Union[Forecast, ForecastError]:
        threshold = _check_threshold(threshold)
        samples = self._fresh_sorted(metric_name)
        if samples is None:
            return ForecastError.insufficient_data
        return self._exhaustion(metric_name, samples, threshold, linear_regression(samples), self._clock())

    def predict_threshold_breach(self, metric_name: str, threshold: float) -> Union[Forecast, ForecastError]:
        threshold = _check_threshold(threshold)
        samples = self._fresh_sorted(metric_name)
        if samples is None:
            return ForecastError.insufficient_data
        return self._breach(metric_name, samples, threshold, linear_regression(samples), self._clock())

    def analyze_trend(self, metric_name: str) -> Union[TrendAnalysis, ForecastError]:
        samples = self._fresh_sorted(metric_name)
        if samples is None:
            return ForecastError.insufficient_data
        slope, _intercept = linear_regression(samples)
        return TrendAnalysis(
            metric_name=metric_name,
            direction=TrendDirection.from_slope(slope),
            rate_per_hour=slope,
            current_value=samples[-1].value,
            data_points=len(samples),
            analyzed_at=self._clock(),
        )

    def _fresh_sorted(self, metric_name: str) -> Optional[List[MetricSample]]:
        samples = self.store.get_fresh(metric_name)
        if len(samples) < settings.forecast_min_samples:
            log.debug("Not enough fresh samples for %s (%d)", metric_name, len(samples))
            return None
        return sort_samples(samples)

    def _forecasts_for_metric(self, name: str, samples: Sequence[MetricSample], now: float) -> List[Forecast]:
        fit = linear_regression(samples)
        slope = fit[0]
        results: List[Forecast] = []

        if self._is_usage(name) and slope > 0:
            exhaustion = self._exhaustion(name, samples, settings.forecast_exhaustion_threshold, fit, now)
            if isinstance(exhaustion, Forecast):
                results.append(exhaustion)
            breach = self._breach(name, samples, settings.forecast_breach_threshold, fit, now)
            if isinstance(breach, Forecast):
                results.append(breach)

        if abs(slope) > settings.forecast_trend_band:
            results.append(self._trend(name, samples, slope, now))

        return results

    def _exhaustion(
        self,
        name: str,
        samples: Sequence[MetricSample],
        threshold: float,
        fit: Fit,
        now: float,
    ) -> Union[Forecast, ForecastError]:
        slope = fit[0]
        if slope <= 0:
            return ForecastError.not_trending

        last = samples[-1]
        seconds = hours_to_seconds((threshold - last.value) / slope)
        if seconds is None:
            log.debug("%s exhaustion of %s is beyond any representable horizon", name, threshold)
            return ForecastError.not_trending
        if seconds <= 0:
            log.debug("%s already at or past %s, no exhaustion ahead", name, threshold)
            return ForecastError.not_trending

        return Forecast(
            metric_name=name,
            forecast_type=ForecastType.exhaustion,
            current_value=last.value,
            predicted_value=threshold,
            prediction_at=last.timestamp + seconds,
            confidence=confidence(len(samples), slope),
            message=messages.exhaustion_message(name, seconds, last.value, threshold),
            data_points=len(samples),
            generated_at=now,
        )

    def _breach(
        self,
        name: str,
        samples: Sequence[MetricSample],
        threshold: float,
        fit: Fit,
        now: float,
    ) -> Union[Forecast, ForecastError]:
        current = samples[-1].value
        if current >= threshold:
            return ForecastError.already_breached

        slope = fit[0]
        if slope <= 0:
            return ForecastError.not_trending

        seconds = hours_to_seconds((threshold - current) / slope)
        if seconds is None or seconds <= 0:
            return ForecastError.not_trending

        return Forecast(
            metric_name=name,
            forecast_type=ForecastType.threshold,
            current_value=current,
            predicted_value=threshold,
            prediction_at=now + seconds,
            confidence=confidence(len(samples), slope),
            message=messages.breach_message(name, seconds, threshold),
            data_points=len(samples),
            generated_at=now,
        )

    def _trend(self, name: str, samples: Sequence[MetricSample], slope: float, now: float) -> Forecast:
        current = samples[-1].value
        predicted = current + slope * TREND_HORIZON_HOURS
        return Forecast(
            metric_name=name,
            forecast_type=ForecastType.trend,
            current_value=current,
            predicted_value=predicted,
            prediction_at=now + TREND_HORIZON_HOURS * SECONDS_PER_HOUR,
            confidence=confidence(len(samples), slope),
            message=messages.trend_message(name, slope, current, predicted),
            data_points=len(samples),
            generated_at=now,
        )
