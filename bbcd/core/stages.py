"""
Stage state machine for recording jobs.

Pending stages advance strictly one step at a time:
Waiting in Queue -> Initialising -> Downloading -> Combining -> Encoding
-> Uploading Result -> Completed.
From any pending stage a job may instead fail into the failure code that
matches the work in progress. Completed and every failure are terminal.
"""

import logging

from bbcd.core.constants import (
    Stage, SENTINEL_MAX_OK, FIRST_FAILURE_CODE, STAGE_FAILURES,
    PROGRESS_BY_STAGE,
)
from bbcd.core.error_codes import InvalidStageCode, InvalidStageTransition

logger = logging.getLogger(__name__)

_VALID_CODES = frozenset(int(s) for s in Stage)


def stage_from_code(code) -> Stage:
    """
    Convert a raw integer (from a job record or a wire frame) into a Stage.
    Raises InvalidStageCode for the sentinel, the unused gap and anything
    outside the declared set.
    """
    if isinstance(code, Stage):
        return code
    if isinstance(code, bool) or not isinstance(code, int):
        raise InvalidStageCode(f"stage code must be an integer, got {code!r}")
    if code == SENTINEL_MAX_OK:
        raise InvalidStageCode(f"{code} is the OK/error boundary, not a stage")
    if code not in _VALID_CODES:
        raise InvalidStageCode(f"unknown stage code {code}")
    return Stage(code)


def is_ok_status(stage) -> bool:
    return 0 <= stage < SENTINEL_MAX_OK


def is_failure(stage) -> bool:
    return stage >= FIRST_FAILURE_CODE


def is_terminal(stage) -> bool:
    return stage == Stage.COMPLETED or is_failure(stage)


def is_pending(stage) -> bool:
    return is_ok_status(stage) and stage != Stage.COMPLETED


def next_stage(stage: Stage) -> Stage:
    """Return the stage that follows a pending stage."""
    stage = stage_from_code(stage)
    if not is_pending(stage):
        raise InvalidStageTransition(stage, None, "no stage follows a terminal stage")
    return Stage(stage + 1)


def failure_for(stage: Stage) -> Stage:
    """
    Failure code for a job that broke while in `stage`.
    Falls back to the generic Failed when no specific failure applies.
    """
    stage = stage_from_code(stage)
    if not is_pending(stage):
        raise InvalidStageTransition(stage, None, "a terminal stage cannot fail")
    return STAGE_FAILURES.get(stage, Stage.FAILED)


def _transition_error(current: Stage, target: Stage) -> str | None:
    if is_terminal(current):
        return "no transition leaves a terminal stage"
    if target == current + 1 and is_ok_status(target):
        return None
    if target == failure_for(current):
        return None
    if is_failure(target):
        return f"a failure in {current.label} must report {failure_for(current).label}"
    if target <= current:
        return "stages never move backwards"
    return "forward stages cannot be skipped"


def can_transition(current, target) -> bool:
    """True when a job may move from `current` to `target`."""
    try:
        current = stage_from_code(current)
        target = stage_from_code(target)
    except InvalidStageCode:
        return False
    return _transition_error(current, target) is None


def validate_transition(current, target) -> Stage:
    """Return `target` as a Stage, or raise InvalidStageTransition."""
    current = stage_from_code(current)
    try:
        target = stage_from_code(target)
    except InvalidStageCode as e:
        raise InvalidStageTransition(current, target, e.message) from e

    reason = _transition_error(current, target)
    if reason is not None:
        logger.warning("Rejected stage transition %s -> %s: %s",
                       current.name, target.name, reason)
        raise InvalidStageTransition(current, target, reason)
    return target


def progress_pct(stage) -> int:
    """
    Progress-bar percentage for a stage.
    A specific failure reports the progress of the stage it failed in;
    the generic Failed reports 0.
    """
    stage = stage_from_code(stage)
    stage = _FAILED_IN.get(stage, stage)
    return PROGRESS_BY_STAGE.get(stage, 0)


_FAILED_IN = {failure: stage for stage, failure in STAGE_FAILURES.items()}
