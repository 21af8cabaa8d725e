"""
Registry for the process-wide correlator, metric store and forecasting engine

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from engine.correlation.correlator import Correlator
from engine.forecast.forecaster import ForecastingEngine
from store.metrics import MetricStore

log = logging.getLogger(__name__)

_lock = threading.Lock()
_correlator: Optional[Correlator] = None
_metric_store: Optional[MetricStore] = None
_forecasting: Optional[ForecastingEngine] = None


def get_correlator() -> Correlator:
    global _correlator
    with _lock:
        if _correlator is None:
            _correlator = Correlator()
        return _correlator


def get_metric_store() -> MetricStore:
    global _metric_store
    with _lock:
        if _metric_store is None:
            _metric_store = MetricStore()
        return _metric_store


def get_forecasting_engine() -> ForecastingEngine:
    global _forecasting
    store = get_metric_store()
    with _lock:
        if _forecasting is None:
            _forecasting = ForecastingEngine(store=store)
        return _forecasting


def reset() -> None:
    """Drop the shared instances; the next getter call builds fresh ones."""
    global _correlator, _metric_store, _forecasting
    with _lock:
        correlator = _correlator
        _correlator = None
        _metric_store = None
        _forecasting = None
    if correlator is not None:
        correlator.close()
    log.debug("Engine registry reset")
