"""
Test cases for enums used in the engine, including EventKind, ForecastType, TrendDirection and ForecastError, validating their values and slope classification.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from config import settings
from engine.enums import EventKind, ForecastType, TrendDirection, ForecastError


def test_event_kind_is_closed():
    assert [k.value for k in EventKind] == ["change", "anomaly", "metric"]
    with pytest.raises(ValueError):
        EventKind("deploy")


def test_forecast_type_and_error_values():
    assert [t.value for t in ForecastType] == ["exhaustion", "threshold", "trend"]
    assert ForecastError.already_breached.value == "already_breached"
    assert ForecastError.insufficient_data == "insufficient_data"


def test_trend_direction_from_slope():
    assert TrendDirection.from_slope(0.5) == TrendDirection.increasing
    assert TrendDirection.from_slope(-0.5) == TrendDirection.decreasing
    assert TrendDirection.from_slope(0.01) == TrendDirection.stable
    assert TrendDirection.from_slope(-0.01) == TrendDirection.stable
    assert TrendDirection.from_slope(0.0) == TrendDirection.stable


def test_trend_direction_band_is_configurable(monkeypatch):
    monkeypatch.setattr(settings, "forecast_trend_band", 1.0)
    assert TrendDirection.from_slope(0.5) == TrendDirection.stable
    assert TrendDirection.from_slope(0.5, band=0.1) == TrendDirection.increasing
