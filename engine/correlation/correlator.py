"""
Correlator owning the event log: records change, anomaly and metric events under a single lock so that every operation is linearizable, and computes anomaly/change correlations from an atomic snapshot of the log.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import copy
import logging
import math
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, List, Mapping, Optional, Union

from config import settings
from engine.correlation.temporal import Correlation, correlate
from engine.enums import EventKind
from engine.events.log import Event, EventLog
from engine.exceptions import InvalidEventKind

log = logging.getLogger(__name__)


def _coerce_kind(kind: Union[EventKind, str]) -> EventKind:
    if isinstance(kind, EventKind):
        return kind
    if isinstance(kind, str) and kind in EventKind._value2member_map_:
        return EventKind(kind)
    raise InvalidEventKind(f"unknown event kind {kind!r}; expected one of {[k.value for k in EventKind]}")


def _check_payload(source: Any, data: Any) -> None:
    if not isinstance(source, str):
        raise ValueError(f"source must be a string, got {type(source).__name__}")
    if data is not None and not isinstance(data, Mapping):
        raise ValueError(f"data must be a mapping, got {type(data).__name__}")


class Correlator:
    """Single logical owner of the event log.

    Every public method holds ``_lock`` for its whole critical section, so
    concurrent callers observe the operations in one total order. Callers
    only ever get copies of the log.
    """

    def __init__(
        self,
        max_events: int | None = None,
        window_seconds: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if max_events is None:
            max_events = settings.correlator_max_events
        if window_seconds is None:
            window_seconds = settings.correlation_window_seconds
        window_seconds = float(window_seconds)
        if not math.isfinite(window_seconds) or window_seconds <= 0:
            raise ValueError(f"window_seconds must be a positive number, got {window_seconds}")

        self._log = EventLog(max_events)
        self._window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    @property
    def max_events(self) -> int:
        return self._log.max_events

    def record(
        self,
        kind: Union[EventKind, str],
        source: str,
        data: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Append an event and return its id.

        The event is visible to every correlation computed after this returns.
        """
        kind = _coerce_kind(kind)
        _check_payload(source, data)
        return self._append(kind, source, data)

    def record_async(
        self,
        kind: Union[EventKind, str],
        source: str,
        data: Optional[Mapping[str, Any]] = None,
    ) -> Future[str]:
        """Queue an event for recording on a background worker.

        Fire-and-forget: an event queued while a correlation scan is running
        is not part of that scan, and may land after events recorded later
        through :meth:`record`. Wait on the returned future when visibility
        matters, or use :meth:`record` instead.
        """
        kind = _coerce_kind(kind)
        _check_payload(source, data)
        payload = copy.deepcopy(dict(data)) if data is not None else None
        return self._get_executor().submit(self._append, kind, source, payload)

    def find_correlations(self) -> List[Correlation]:
        with self._lock:
            snapshot = self._log.snapshot()
            calculated_at = self._clock()
        correlations = correlate(snapshot, self._window_seconds, calculated_at)
        log.debug(
            "Correlated %d anomalies over %d events (window=%ss)",
            len(correlations), len(snapshot), self._window_seconds,
        )
        return correlations

    def all_events(self) -> List[Event]:
        with self._lock:
            return self._log.snapshot()

    def clear(self) -> None:
        with self._lock:
            dropped = len(self._log)
            self._log.clear()
        log.info("Event log cleared (%d events dropped)", dropped)

    def close(self) -> None:
        """Drain pending :meth:`record_async` calls and stop the worker."""
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def _append(self, kind: EventKind, source: str, data: Optional[Mapping[str, Any]]) -> str:
        with self._lock:
            now = self._clock()
            last = self._log.last_timestamp
            # timestamps never run backwards relative to insertion order
            if last is not None and now < last:
                now = last
            event = Event.create(kind, source, data, timestamp=now)
            self._log.append(event)
        log.debug("Recorded %s event %s from %s", kind.value, event.id, source)
        return event.id

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="correlator-record")
            return self._executor
