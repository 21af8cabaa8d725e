"""
Response models giving consumers a machine-readable view of events, correlations, forecasts and trend analyses.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import numpy as np
from pydantic import BaseModel, Field, model_serializer

from engine.correlation.correlator import Correlator
from engine.correlation.temporal import Correlation
from engine.enums import EventKind, ForecastType, TrendDirection
from engine.events.log import Event
from engine.forecast.forecaster import Forecast, ForecastingEngine, TrendAnalysis


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


class NpModel(BaseModel):

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


class EventView(NpModel):

    id: str
    kind: EventKind
    timestamp: float
    source: str
    data: Dict[Any, Any] = Field(default_factory=dict)

    @classmethod
    def from_event(cls, event: Event) -> EventView:
        return cls(
            id=event.id,
            kind=event.kind,
            timestamp=event.timestamp,
            source=event.source,
            data=event.to_dict()["data"],
        )


class CorrelationView(NpModel):

    anomaly: EventView
    related_changes: List[EventView]
    confidence: float = Field(ge=0.0, le=1.0)
    calculated_at: float

    @classmethod
    def from_correlation(cls, correlation: Correlation) -> CorrelationView:
        return cls(
            anomaly=EventView.from_event(correlation.anomaly),
            related_changes=[EventView.from_event(c) for c in correlation.related_changes],
            confidence=correlation.confidence,
            calculated_at=correlation.calculated_at,
        )


class ForecastView(NpModel):

    metric_name: str
    forecast_type: ForecastType
    current_value: float
    predicted_value: float
    prediction_at: float
    confidence: float = Field(ge=0.0, le=1.0)
    message: str
    data_points: int
    generated_at: float

    @classmethod
    def from_forecast(cls, forecast: Forecast) -> ForecastView:
        return cls(**forecast.to_dict())


class TrendView(NpModel):

    metric_name: str
    direction: TrendDirection
    rate_per_hour: float
    current_value: float
    data_points: int
    analyzed_at: float

    @classmethod
    def from_analysis(cls, analysis: TrendAnalysis) -> TrendView:
        return cls(
            metric_name=analysis.metric_name,
            direction=analysis.direction,
            rate_per_hour=analysis.rate_per_hour,
            current_value=analysis.current_value,
            data_points=analysis.data_points,
            analyzed_at=analysis.analyzed_at,
        )


class EngineReport(NpModel):

    correlations: List[CorrelationView] = []
    forecasts: List[ForecastView] = []
    # all values here are advisory; consumers must not act on them automatically
    advisory: bool = True


def build_report(
    correlator: Optional[Correlator] = None,
    forecasting: Optional[ForecastingEngine] = None,
) -> EngineReport:
    from engine.registry import get_correlator, get_forecasting_engine

    correlator = correlator or get_correlator()
    forecasting = forecasting or get_forecasting_engine()
    return EngineReport(
        correlations=[CorrelationView.from_correlation(c) for c in correlator.find_correlations()],
        forecasts=[ForecastView.from_forecast(f) for f in forecasting.generate()],
    )
