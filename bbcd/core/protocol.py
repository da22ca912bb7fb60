"""
Job-status channel framing.

Every frame sent to a client is a JSON object tagged with one member of
ServerMessageKind under "kind". Unknown tags are rejected, never ignored.
"""

import json
import logging
import threading
from collections import OrderedDict
from enum import Enum

from bbcd.core.constants import Stage, FINISHED_JOBS_KEPT
from bbcd.core.error_codes import ProtocolError, ProtocolTagUnrecognized, InvalidStageCode
from bbcd.core.stages import stage_from_code, is_ok_status, is_terminal

logger = logging.getLogger(__name__)


class ServerMessageKind(str, Enum):
    CLIENT_HELLO = "ClientHello"
    STAGE_UPDATE = "StageUpdate"
    ERROR = "Error"


def parse_kind(tag) -> ServerMessageKind:
    try:
        return ServerMessageKind(tag)
    except ValueError:
        raise ProtocolTagUnrecognized(f"unrecognized frame tag {tag!r}") from None


def encode_frame(kind, **payload) -> str:
    kind = parse_kind(kind)
    return json.dumps({"kind": kind.value, **payload})


def decode_frame(text: str) -> tuple[ServerMessageKind, dict]:
    """Parse a frame into (kind, payload). StageUpdate stages come back as Stage."""
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise ProtocolError(f"frame is not valid JSON: {e}") from None
    if not isinstance(data, dict):
        raise ProtocolError("frame must be a JSON object")
    if "kind" not in data:
        raise ProtocolTagUnrecognized("frame has no kind tag")

    kind = parse_kind(data.pop("kind"))

    if kind == ServerMessageKind.STAGE_UPDATE:
        if "job_id" not in data or "stage" not in data:
            raise ProtocolError("StageUpdate needs job_id and stage")
        try:
            data["stage"] = stage_from_code(data["stage"])
        except InvalidStageCode as e:
            raise ProtocolError(f"StageUpdate carries a bad stage: {e.message}") from e
    elif kind == ServerMessageKind.ERROR and not isinstance(data.get("message"), str):
        raise ProtocolError("Error frame needs a message")

    return kind, data


def client_hello() -> str:
    """Handshake frame sent when a client's channel opens."""
    return encode_frame(ServerMessageKind.CLIENT_HELLO)


def stage_update(job_id: str, stage) -> str:
    stage = stage_from_code(stage)
    return encode_frame(ServerMessageKind.STAGE_UPDATE, job_id=job_id, stage=int(stage))


def error_frame(message: str) -> str:
    return encode_frame(ServerMessageKind.ERROR, message=message)


class StageDeliveryGuard:
    """
    Per-client record of the last stage delivered for each job.

    Frames for one job must arrive in non-decreasing stage order and nothing
    may follow a terminal stage. A job leaves the live map once it reaches a
    terminal stage; the most recent `finished_limit` finished jobs per client
    are remembered so late frames for them are still rejected. Forgetting a
    client only drops this bookkeeping; it says nothing about the jobs themselves.
    """

    def __init__(self, finished_limit: int = FINISHED_JOBS_KEPT):
        self._lock = threading.Lock()
        self._finished_limit = finished_limit
        self._delivered: dict[str, dict[str, Stage]] = {}
        self._finished: dict[str, OrderedDict[str, Stage]] = {}

    def check(self, client_id: str, job_id: str, stage) -> Stage:
        """Record a delivery, or raise ProtocolError if it would break ordering."""
        stage = stage_from_code(stage)
        with self._lock:
            jobs = self._delivered.setdefault(client_id, {})
            finished = self._finished.setdefault(client_id, OrderedDict())
            done = finished.get(job_id)
            if done is not None:
                logger.warning("Client %s: %s after terminal %s for job %s",
                               client_id, stage.name, done.name, job_id)
                raise ProtocolError(
                    f"job {job_id} already reached {done.label}; no further frames")
            last = jobs.get(job_id)
            if last is not None and is_ok_status(stage) and stage < last:
                logger.warning("Client %s: %s after %s for job %s",
                               client_id, stage.name, last.name, job_id)
                raise ProtocolError(
                    f"job {job_id} went backwards: {last.label} -> {stage.label}")

            if is_terminal(stage):
                jobs.pop(job_id, None)
                finished[job_id] = stage
                while len(finished) > self._finished_limit:
                    finished.popitem(last=False)
            else:
                jobs[job_id] = stage
            return stage

    def last_delivered(self, client_id: str, job_id: str) -> Stage | None:
        with self._lock:
            stage = self._delivered.get(client_id, {}).get(job_id)
            if stage is None:
                stage = self._finished.get(client_id, {}).get(job_id)
            return stage

    def tracked_jobs(self, client_id: str) -> int:
        """Number of unfinished jobs held for a client."""
        with self._lock:
            return len(self._delivered.get(client_id, {}))

    def forget(self, client_id: str):
        with self._lock:
            self._delivered.pop(client_id, None)
            self._finished.pop(client_id, None)
