"""
Data models (plain dataclasses) for BBCD.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from bbcd.core.constants import Stage


@dataclass(frozen=True)
class RecordingRequest:
    source_id: int
    source_name: str
    start: datetime                  # UTC
    duration_sec: float
    encode: bool = True

    @property
    def end(self) -> datetime:
        return self.start + timedelta(seconds=self.duration_sec)

    @property
    def timeframe(self) -> tuple[int, int]:
        """(start, end) as unix timestamps."""
        return int(self.start.timestamp()), int(self.end.timestamp())


@dataclass
class RecordingJob:
    uuid: str
    channel: int
    rec_start: datetime
    rec_end: datetime
    encode: bool = True
    stage: Stage = Stage.WAITING_IN_QUEUE
    status: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def __post_init__(self):
        if not self.status:
            self.status = self.stage.label
