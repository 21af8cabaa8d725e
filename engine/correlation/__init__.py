"""
Correlation logic for linking anomalies to the change events that preceded them, scored by how many changes fall inside the correlation window and how close the nearest one is.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.correlation.temporal import Correlation, correlate, related_changes, score
from engine.correlation.correlator import Correlator

__all__ = ["Correlation", "correlate", "related_changes", "score", "Correlator"]
