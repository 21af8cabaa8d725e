"""
Test engine registry logic for sharing one correlator, metric store and forecasting engine per process, including reset behaviour.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from config import settings
from engine import registry as ereg
from engine.correlation.correlator import Correlator
from engine.forecast.forecaster import ForecastingEngine
from store.metrics import MetricStore


def test_registry_returns_shared_instances():
    correlator = ereg.get_correlator()
    assert isinstance(correlator, Correlator)
    assert ereg.get_correlator() is correlator
    assert correlator.max_events == settings.correlator_max_events
    assert correlator.window_seconds == settings.correlation_window_seconds

    store = ereg.get_metric_store()
    assert isinstance(store, MetricStore)
    assert ereg.get_metric_store() is store

    forecasting = ereg.get_forecasting_engine()
    assert isinstance(forecasting, ForecastingEngine)
    assert forecasting.store is store


def test_reset_builds_fresh_instances():
    correlator = ereg.get_correlator()
    correlator.record("change", "pkg")
    ereg.reset()
    fresh = ereg.get_correlator()
    assert fresh is not correlator
    assert fresh.all_events() == []


def test_engine_without_store_uses_shared_store():
    engine = ForecastingEngine()
    assert engine.store is ereg.get_metric_store()
