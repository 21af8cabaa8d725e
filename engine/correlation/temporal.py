"""
Temporal correlation logic that links each anomaly to the change events preceding it within a configurable time window, and scores how strongly those changes explain the anomaly from their count and their proximity in time.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from config import settings
from engine.enums import EventKind
from engine.events.log import Event


@dataclass(frozen=True)
class Correlation:
    anomaly: Event
    related_changes: Tuple[Event, ...] = field(default_factory=tuple)
    confidence: float = 0.0
    calculated_at: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "anomaly": self.anomaly.to_dict(),
            "related_changes": [c.to_dict() for c in self.related_changes],
            "confidence": self.confidence,
            "calculated_at": self.calculated_at,
        }


def _gap(anomaly: Event, change: Event) -> float:
    return anomaly.timestamp - change.timestamp


def related_changes(
    anomaly: Event,
    changes: Iterable[Event],
    window_seconds: float,
) -> List[Event]:
    """Changes at or before *anomaly* by at most *window_seconds*, nearest first."""
    related = [c for c in changes if 0.0 <= _gap(anomaly, c) <= window_seconds]
    related.sort(key=lambda c: _gap(anomaly, c))
    return related


def score(anomaly: Event, related: Sequence[Event], window_seconds: float) -> float:
    if not related:
        return 0.0

    base = min(settings.correlation_count_cap, len(related) * settings.correlation_count_weight)

    closest = related[0]
    proximity = 1.0 - (_gap(anomaly, closest) / window_seconds)
    proximity_bonus = proximity * settings.correlation_proximity_weight

    return min(settings.confidence_ceiling, base + proximity_bonus)


def correlate(
    events: Sequence[Event],
    window_seconds: float | None = None,
    calculated_at: float = 0.0,
) -> List[Correlation]:
    """Build one correlation per anomaly in *events*.

    *events* must be a snapshot nobody else mutates; it is scanned twice.
    """
    if window_seconds is None:
        window_seconds = settings.correlation_window_seconds

    anomalies = [e for e in events if e.kind is EventKind.anomaly]
    if not anomalies:
        return []
    changes = [e for e in events if e.kind is EventKind.change]

    correlations: List[Correlation] = []
    for anomaly in anomalies:
        related = related_changes(anomaly, changes, window_seconds)
        correlations.append(Correlation(
            anomaly=anomaly,
            related_changes=tuple(related),
            confidence=score(anomaly, related, window_seconds),
            calculated_at=calculated_at,
        ))
    return correlations
