"""
In-memory metric store holding timestamped observations with provenance and a time-to-live, bounded to a fixed number of samples; everything here is advisory and ephemeral, never a source of truth.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
import threading
import time
from collections import deque
from dataclasses import dataclass, field
from numbers import Real
from types import MappingProxyType
from typing import Any, Callable, Deque, Dict, List, Mapping, Optional

from config import DEFAULT_METRIC_SOURCE, settings

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricSample:
    name: str
    value: float
    timestamp: float
    tags: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}), hash=False)
    derived_at: float = 0.0
    source: str = DEFAULT_METRIC_SOURCE
    ttl_seconds: int = 0
    advisory: bool = True


def _check_value(name: Any, value: Any) -> float:
    if not isinstance(name, str) or not name:
        raise ValueError(f"metric name must be a non-empty string, got {name!r}")
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValueError(f"metric {name} value must be a real number, got {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"metric {name} value must be finite, got {value!r}")
    return number


class MetricStore:
    def __init__(
        self,
        max_size: int | None = None,
        default_ttl: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if max_size is None:
            max_size = settings.metrics_max_size
        if default_ttl is None:
            default_ttl = settings.metrics_default_ttl_seconds
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")
        if default_ttl < 0:
            raise ValueError(f"default_ttl must be >= 0, got {default_ttl}")
        self._samples: Deque[MetricSample] = deque(maxlen=max_size)
        self._default_ttl = default_ttl
        self._clock = clock
        self._lock = threading.Lock()

    def record(
        self,
        name: str,
        value: float,
        tags: Optional[Dict[str, Any]] = None,
        source: str = DEFAULT_METRIC_SOURCE,
        ttl: Optional[int] = None,
    ) -> MetricSample:
        number = _check_value(name, value)
        if ttl is None:
            ttl = self._default_ttl
        if ttl < 0:
            raise ValueError(f"ttl must be >= 0, got {ttl}")

        with self._lock:
            now = self._clock()
            sample = MetricSample(
                name=name,
                value=number,
                timestamp=now,
                tags=MappingProxyType(dict(tags or {})),
                derived_at=now,
                source=source,
                ttl_seconds=ttl,
            )
            self._samples.append(sample)
        return sample

    def is_stale(self, sample: MetricSample, now: float | None = None) -> bool:
        if now is None:
            now = self._clock()
        return now - sample.derived_at > sample.ttl_seconds

    def all(self) -> List[MetricSample]:
        with self._lock:
            return list(self._samples)

    def all_fresh(self) -> List[MetricSample]:
        with self._lock:
            samples = list(self._samples)
        now = self._clock()
        return [s for s in samples if not self.is_stale(s, now)]

    def get(self, name: str) -> List[MetricSample]:
        with self._lock:
            return [s for s in self._samples if s.name == name]

    def get_fresh(self, name: str) -> List[MetricSample]:
        now = self._clock()
        return [s for s in self.get(name) if not self.is_stale(s, now)]

    def clear(self) -> None:
        with self._lock:
            dropped = len(self._samples)
            self._samples.clear()
        log.info("Metric store cleared (%d samples dropped)", dropped)

    def __len__(self) -> int:
        with self._lock:
            return len(self._samples)
