"""
Bounded, time-ordered log of change, anomaly and metric events, retaining only the most recent entries so that correlation scans always run over a fixed-size window of recent system history.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


from __future__ import annotations

import copy
import logging
import uuid
from collections import deque
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Deque, Dict, List, Mapping, Optional

from engine.enums import EventKind

log = logging.getLogger(__name__)


def _frozen_payload(data: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(copy.deepcopy(dict(data or {})))


def new_event_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Event:
    id: str
    kind: EventKind
    timestamp: float
    source: str
    data: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}), hash=False)

    @classmethod
    def create(
        cls,
        kind: EventKind,
        source: str,
        data: Optional[Mapping[str, Any]],
        timestamp: float,
    ) -> Event:
        return cls(
            id=new_event_id(),
            kind=kind,
            timestamp=timestamp,
            source=source,
            data=_frozen_payload(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "timestamp": self.timestamp,
            "source": self.source,
            "data": copy.deepcopy(dict(self.data)),
        }


class EventLog:
    """Fixed-capacity event sequence, oldest first.

    Not synchronized: the owning :class:`~engine.correlation.correlator.Correlator`
    serializes every access.
    """

    def __init__(self, max_events: int) -> None:
        if max_events < 1:
            raise ValueError(f"max_events must be >= 1, got {max_events}")
        self._events: Deque[Event] = deque(maxlen=max_events)

    @property
    def max_events(self) -> int:
        return self._events.maxlen or 0

    @property
    def last_timestamp(self) -> Optional[float]:
        return self._events[-1].timestamp if self._events else None

    def append(self, event: Event) -> None:
        if len(self._events) == self._events.maxlen:
            log.debug("Event log full (%d), evicting %s", self._events.maxlen, self._events[0].id)
        self._events.append(event)

    def snapshot(self) -> List[Event]:
        return list(self._events)

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)
