"""
Human-readable summaries for forecasts; presentation only, the forecast timestamps stay exact.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from config import SECONDS_PER_DAY, SECONDS_PER_HOUR, TREND_HORIZON_HOURS


def _fmt(value: float, digits: int = 1) -> str:
    return f"{round(float(value), digits)}"


def _fmt_threshold(threshold: float) -> str:
    return str(int(threshold)) if float(threshold).is_integer() else str(threshold)


def exhaustion_message(name: str, seconds: int, current: float, threshold: float) -> str:
    days = seconds // SECONDS_PER_DAY
    head = f"{name} at {_fmt(current)}% - will reach {_fmt_threshold(threshold)}%"
    if days == 0:
        return f"{head} within 24 hours"
    if days == 1:
        return f"{head} in approximately 1 day"
    if days < 7:
        return f"{head} in approximately {days} days"
    if days < 30:
        return f"{head} in approximately {days // 7} week(s)"
    return f"{head} in approximately {days // 30} month(s)"


def breach_message(name: str, seconds: int, threshold: float) -> str:
    hours = seconds // SECONDS_PER_HOUR
    return f"{name} will breach {_fmt_threshold(threshold)} in approximately {hours} hours"


def trend_message(name: str, slope: float, current: float, predicted: float) -> str:
    direction = "increasing" if slope > 0 else "decreasing"
    return (
        f"{name} is {direction} at {_fmt(abs(slope), 2)}/hour. "
        f"Current: {_fmt(current)}, predicted in {TREND_HORIZON_HOURS}h: {_fmt(predicted)}"
    )
