"""
Test cases for the response models, validating conversion of engine values into serializable views and coercion of numpy scalars.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import numpy as np

from engine.correlation.correlator import Correlator
from engine.enums import EventKind, ForecastType
from engine.events.log import Event
from engine.forecast.forecaster import ForecastingEngine
from engine.responses import CorrelationView, EngineReport, EventView, ForecastView, TrendView, build_report
from store.metrics import MetricStore


def test_event_view_coerces_numpy_payload():
    event = Event.create(EventKind.metric, "scanner", {"count": np.int64(3), "ratio": np.float32(0.5)}, timestamp=1.0)
    dumped = EventView.from_event(event).model_dump()
    assert type(dumped["data"]["count"]) is int
    assert type(dumped["data"]["ratio"]) is float
    assert dumped["kind"] == "metric"


def test_correlation_and_forecast_views(clock):
    correlator = Correlator(clock=clock)
    correlator.record("change", "package-manager")
    clock.advance(10)
    correlator.record("anomaly", "ssl-service")
    view = CorrelationView.from_correlation(correlator.find_correlations()[0])
    assert view.anomaly.source == "ssl-service"
    assert [c.source for c in view.related_changes] == ["package-manager"]

    store = MetricStore(clock=clock)
    for v in (50, 60, 70):
        store.record("disk_usage", v, ttl=86400)
        clock.advance(3600)
    engine = ForecastingEngine(store=store, clock=clock)
    forecast_view = ForecastView.from_forecast(engine.predict_exhaustion("disk_usage", 100))
    assert forecast_view.forecast_type is ForecastType.exhaustion
    assert forecast_view.model_dump()["predicted_value"] == 100.0

    trend_view = TrendView.from_analysis(engine.analyze_trend("disk_usage"))
    assert trend_view.model_dump()["direction"] == "increasing"


def test_build_report(clock):
    correlator = Correlator(clock=clock)
    correlator.record("change", "pkg")
    correlator.record("anomaly", "svc")
    store = MetricStore(clock=clock)
    for v in (10, 20, 30):
        store.record("swap_pct", v, ttl=86400)
        clock.advance(3600)

    report = build_report(correlator, ForecastingEngine(store=store, clock=clock))
    assert isinstance(report, EngineReport)
    assert report.advisory is True
    assert len(report.correlations) == 1
    assert {f.forecast_type for f in report.forecasts} == {
        ForecastType.exhaustion, ForecastType.threshold, ForecastType.trend,
    }
    dumped = report.model_dump(mode="json")
    assert dumped["correlations"][0]["anomaly"]["kind"] == "anomaly"


def test_build_report_defaults_to_shared_instances():
    report = build_report()
    assert report.correlations == []
    assert report.forecasts == []


def test_build_report_accepts_non_string_payload_keys(clock):
    correlator = Correlator(clock=clock)
    correlator.record("change", "deployer", {("web", 1): "rolled"})
    correlator.record("anomaly", "svc", {404: "not found"})

    report = build_report(correlator, ForecastingEngine(store=MetricStore(clock=clock), clock=clock))
    anomaly = report.correlations[0].anomaly
    assert anomaly.data == {404: "not found"}
    assert anomaly.model_dump()["data"] == {404: "not found"}
    assert report.correlations[0].related_changes[0].data == {("web", 1): "rolled"}
