"""
Building a validated recording request from user input.
"""

import logging
import math
from datetime import datetime, timezone

from bbcd.core.constants import DEFAULT_MAX_DURATION_SEC
from bbcd.core.calendar_rules import validate_day
from bbcd.core.duration import to_seconds
from bbcd.core.error_codes import InvalidDuration
from bbcd.core.models import RecordingRequest
from bbcd.core.sources import SourceCatalog

logger = logging.getLogger(__name__)


def build_recording_request(catalog: SourceCatalog, source_id: int,
                            year: int, month: int, day: int,
                            hour: int, minute: int,
                            magnitude, unit,
                            encode: bool = True,
                            max_duration_sec: float = DEFAULT_MAX_DURATION_SEC,
                            legacy_leap_rule: bool = False) -> RecordingRequest:
    """
    Validate source, start date and duration, and return a RecordingRequest.
    Start time is interpreted as UTC.
    """
    source_name = catalog.resolve(source_id)
    validate_day(year, month, day, legacy_leap_rule)

    for value in (hour, minute):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidDuration(f"start hour and minute must be integers, got {value!r}")
    if not 0 <= hour < 24 or not 0 <= minute < 60:
        raise InvalidDuration(f"start time {hour:02d}:{minute:02d} is not a valid time of day")
    if isinstance(magnitude, bool) or not isinstance(magnitude, (int, float)):
        raise InvalidDuration(f"duration magnitude must be a number, got {magnitude!r}")
    if magnitude < 0:
        raise InvalidDuration(f"duration magnitude must not be negative, got {magnitude}")

    duration_sec = to_seconds(magnitude, unit)
    if not math.isfinite(duration_sec):
        raise InvalidDuration(f"recording duration must be a finite number, got {magnitude!r}")
    if duration_sec <= 0:
        raise InvalidDuration("recording duration must be longer than zero")
    if duration_sec > max_duration_sec:
        raise InvalidDuration(
            f"recording duration {duration_sec}s exceeds the {max_duration_sec}s limit")

    start = datetime(year, month, day, hour, minute, tzinfo=timezone.utc)
    request = RecordingRequest(
        source_id=source_id,
        source_name=source_name,
        start=start,
        duration_sec=duration_sec,
        encode=encode,
    )
    logger.debug("Built recording request for %s at %s (%ss)",
                 source_name, start.isoformat(), duration_sec)
    return request
