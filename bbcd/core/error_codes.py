"""
Standardised error handling for BBCD.

Every error here is a caller-input error: none of them is retried.
"""

from bbcd.core.constants import ErrorCode, CALLER_ERRORS


class CoreError(Exception):
    """Raised when a caller hands the core a value it cannot accept."""

    code = "ERR_CORE"

    def __init__(self, message: str, code: str | None = None):
        self.code = code or self.code
        self.message = message
        super().__init__(f"[{self.code}] {message}")


class InvalidStageCode(CoreError):
    code = ErrorCode.INVALID_STAGE_CODE


class InvalidStageTransition(CoreError):
    code = ErrorCode.INVALID_STAGE_TRANSITION

    def __init__(self, current, target, reason: str):
        self.current = current
        self.target = target
        super().__init__(f"{current!r} -> {target!r}: {reason}")


class SourceIndexOutOfRange(CoreError):
    code = ErrorCode.SOURCE_INDEX_OUT_OF_RANGE

    def __init__(self, source_id, total: int):
        self.source_id = source_id
        self.total = total
        super().__init__(f"source id {source_id!r} outside 0..{total - 1}")


class InvalidDurationUnit(CoreError):
    code = ErrorCode.INVALID_DURATION_UNIT


class InvalidDuration(CoreError):
    code = ErrorCode.INVALID_DURATION


class InvalidMonth(CoreError):
    code = ErrorCode.INVALID_MONTH


class InvalidDay(CoreError):
    code = ErrorCode.INVALID_DAY


class ProtocolError(CoreError):
    code = ErrorCode.PROTOCOL


class ProtocolTagUnrecognized(ProtocolError):
    code = ErrorCode.PROTOCOL_TAG_UNRECOGNIZED


class JobNotFound(CoreError):
    code = ErrorCode.JOB_NOT_FOUND

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"no job with id {job_id}")


def is_caller_error(code: str) -> bool:
    return code in CALLER_ERRORS
