"""
Job status tracker.
Owns the in-memory stage of each recording job and is the only component
allowed to advance it. Every change is checked against the stage state
machine and reported through on_job_updated.
"""

import logging
import threading
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Optional

from bbcd.core.constants import Stage, DEFAULT_LIST_START, DEFAULT_LIST_COUNT
from bbcd.core.error_codes import JobNotFound
from bbcd.core.models import RecordingJob, RecordingRequest
from bbcd.core.stages import validate_transition, next_stage, failure_for

logger = logging.getLogger(__name__)


class JobTracker:
    """
    Tracks recording jobs through the pipeline stages.
    Emits callbacks on every accepted stage change.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._jobs: dict[str, RecordingJob] = {}

        # Callbacks
        self.on_job_updated: Optional[Callable[[RecordingJob], None]] = None

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    # ── Job management ────────────────────────────────────────────────

    def create_job(self, request: RecordingRequest) -> RecordingJob:
        """Register a new job in Waiting in Queue."""
        now = self._now()
        job = RecordingJob(
            uuid=str(uuid.uuid4()),
            channel=request.source_id,
            rec_start=request.start,
            rec_end=request.end,
            encode=request.encode,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._jobs[job.uuid] = job
            snapshot = replace(job)
            logger.info("Queued job %s for %s", job.uuid, request.source_name)
            self._notify_job_updated(snapshot)
        return snapshot

    def get_job(self, job_id: str) -> RecordingJob:
        with self._lock:
            return replace(self._get(job_id))

    def list_jobs(self, start: int = DEFAULT_LIST_START,
                  count: int = DEFAULT_LIST_COUNT) -> list[RecordingJob]:
        """Jobs in creation order, paged like the recordings listing."""
        start = max(0, start)
        count = max(0, count)
        with self._lock:
            jobs = list(self._jobs.values())[start:start + count]
            return [replace(j) for j in jobs]

    def remove_job(self, job_id: str):
        with self._lock:
            self._get(job_id)
            del self._jobs[job_id]

    def _get(self, job_id: str) -> RecordingJob:
        job = self._jobs.get(job_id)
        if job is None:
            raise JobNotFound(job_id)
        return job

    # ── Stage changes ─────────────────────────────────────────────────

    def _change_stage(self, job_id: str, pick_target: Callable[[Stage], Stage],
                      status: str | None = None) -> RecordingJob:
        # Callbacks run under the lock so one job's updates go out in stage order
        with self._lock:
            job = self._get(job_id)
            target = validate_transition(job.stage, pick_target(job.stage))
            job.stage = target
            job.status = status if status is not None else target.label
            job.updated_at = self._now()
            snapshot = replace(job)

            logger.info("Job %s -> %s", job_id, target.label)
            self._notify_job_updated(snapshot)
        return snapshot

    def set_stage(self, job_id: str, stage, status: str | None = None) -> RecordingJob:
        """Move a job to `stage` if the state machine allows it."""
        return self._change_stage(job_id, lambda current: stage, status)

    def advance(self, job_id: str) -> RecordingJob:
        """Move a job to the next pending stage."""
        return self._change_stage(job_id, next_stage)

    def fail(self, job_id: str, reason: str) -> RecordingJob:
        """Fail a job with the failure code for the stage it was in."""
        job = self._change_stage(job_id, failure_for, status=reason)
        logger.error("Job %s failed: %s (%s)", job_id, job.stage.label, reason)
        return job

    def _notify_job_updated(self, job: RecordingJob):
        if self.on_job_updated:
            self.on_job_updated(job)
