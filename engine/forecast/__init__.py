"""
Forecasting logic for metric trends, including least-squares trend fitting with a capped confidence heuristic and exhaustion, threshold-breach and trend predictions built on it.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


from engine.forecast.trajectory import linear_regression, confidence
from engine.forecast.forecaster import Forecast, ForecastingEngine, TrendAnalysis, is_usage_metric

__all__ = ["linear_regression", "confidence", "Forecast", "ForecastingEngine", "TrendAnalysis", "is_usage_metric"]
