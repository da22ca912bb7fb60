"""
Shared constants for BBCD.
Single source of truth, imported by every other module.
"""

import pathlib
from enum import IntEnum

# ── Application identity ──────────────────────────────────────────────
APP_NAME = "bbcd"
APP_DISPLAY_NAME = "BBCD Recorder"
APP_VERSION = "0.2.0"

# ── Filesystem paths ─────────────────────────────────────────────────
HOME = pathlib.Path.home()

APP_SUPPORT_DIR = HOME / ".config" / APP_NAME
LOG_DIR = HOME / ".local" / "state" / APP_NAME
CONFIG_PATH = APP_SUPPORT_DIR / "config.json"


# ── Job stages (ordered) ──────────────────────────────────────────────
class Stage(IntEnum):
    """Status codes a recording job can hold. Codes are part of the wire format."""

    WAITING_IN_QUEUE = 0
    INITIALISING = 1
    DOWNLOADING = 2
    COMBINING = 3
    ENCODING = 4
    UPLOADING_RESULT = 5
    COMPLETED = 6
    # Errors
    FAILED = 10
    DOWNLOADING_FAILED = 11
    COMBINING_FAILED = 12
    ENCODING_FAILED = 13
    UPLOADING_FAILED = 14

    @property
    def label(self) -> str:
        return STAGE_LABELS[self]


# Separation between OK statuses and error statuses. Never a job's status.
SENTINEL_MAX_OK = 7
FIRST_FAILURE_CODE = 10

STAGE_LABELS = {
    Stage.WAITING_IN_QUEUE: "Waiting in Queue",
    Stage.INITIALISING: "Initialising",
    Stage.DOWNLOADING: "Downloading",
    Stage.COMBINING: "Combining",
    Stage.ENCODING: "Encoding",
    Stage.UPLOADING_RESULT: "Uploading Result",
    Stage.COMPLETED: "Completed",
    Stage.FAILED: "Failed",
    Stage.DOWNLOADING_FAILED: "Downloading Failed",
    Stage.COMBINING_FAILED: "Combining Failed",
    Stage.ENCODING_FAILED: "Encoding Failed",
    Stage.UPLOADING_FAILED: "Uploading Failed",
}

# Failure reported when a job breaks while in the given stage
STAGE_FAILURES = {
    Stage.DOWNLOADING: Stage.DOWNLOADING_FAILED,
    Stage.COMBINING: Stage.COMBINING_FAILED,
    Stage.ENCODING: Stage.ENCODING_FAILED,
    Stage.UPLOADING_RESULT: Stage.UPLOADING_FAILED,
}

# ── Progress mapping ─────────────────────────────────────────────────
PROGRESS_BY_STAGE = {
    Stage.WAITING_IN_QUEUE: 0,
    Stage.INITIALISING: 5,
    Stage.DOWNLOADING: 10,
    Stage.COMBINING: 55,
    Stage.ENCODING: 65,
    Stage.UPLOADING_RESULT: 90,
    Stage.COMPLETED: 100,
}


# ── Duration units (60 ** unit seconds) ───────────────────────────────
class DurationUnit(IntEnum):
    SECONDS = 0
    MINUTES = 1
    HOURS = 2


DURATION_UNIT_ALIASES = {
    "s": DurationUnit.SECONDS,
    "sec": DurationUnit.SECONDS,
    "second": DurationUnit.SECONDS,
    "seconds": DurationUnit.SECONDS,
    "m": DurationUnit.MINUTES,
    "min": DurationUnit.MINUTES,
    "minute": DurationUnit.MINUTES,
    "minutes": DurationUnit.MINUTES,
    "h": DurationUnit.HOURS,
    "hr": DurationUnit.HOURS,
    "hour": DurationUnit.HOURS,
    "hours": DurationUnit.HOURS,
}

# ── Calendar ──────────────────────────────────────────────────────────
# February is resolved by the leap-year rule
MONTH_LENGTHS = {
    1: 31, 2: 28, 3: 31, 4: 30, 5: 31, 6: 30,
    7: 31, 8: 31, 9: 30, 10: 31, 11: 30, 12: 31,
}

# ── Recording limits ─────────────────────────────────────────────────
DEFAULT_MAX_DURATION_SEC = 6 * 3600
MIN_MAX_DURATION_SEC = 60
MAX_MAX_DURATION_SEC = 24 * 3600

# ── Job listing ───────────────────────────────────────────────────────
DEFAULT_LIST_START = 0
DEFAULT_LIST_COUNT = 15

# ── Diagnostics ───────────────────────────────────────────────────────
DEFAULT_PROBE_TIMEOUT_SEC = 10

# ── Delivery ordering ─────────────────────────────────────────────────
# Finished jobs remembered per client to reject late frames
FINISHED_JOBS_KEPT = 256

# ── Error codes ───────────────────────────────────────────────────────
class ErrorCode:
    INVALID_STAGE_CODE = "ERR_INVALID_STAGE_CODE"
    INVALID_STAGE_TRANSITION = "ERR_INVALID_STAGE_TRANSITION"
    SOURCE_INDEX_OUT_OF_RANGE = "ERR_SOURCE_INDEX_OUT_OF_RANGE"
    INVALID_DURATION_UNIT = "ERR_INVALID_DURATION_UNIT"
    INVALID_DURATION = "ERR_INVALID_DURATION"
    INVALID_MONTH = "ERR_INVALID_MONTH"
    INVALID_DAY = "ERR_INVALID_DAY"
    PROTOCOL = "ERR_PROTOCOL"
    PROTOCOL_TAG_UNRECOGNIZED = "ERR_PROTOCOL_TAG_UNRECOGNIZED"
    JOB_NOT_FOUND = "ERR_JOB_NOT_FOUND"


CALLER_ERRORS = {
    ErrorCode.INVALID_STAGE_CODE,
    ErrorCode.INVALID_STAGE_TRANSITION,
    ErrorCode.SOURCE_INDEX_OUT_OF_RANGE,
    ErrorCode.INVALID_DURATION_UNIT,
    ErrorCode.INVALID_DURATION,
    ErrorCode.INVALID_MONTH,
    ErrorCode.INVALID_DAY,
    ErrorCode.PROTOCOL,
    ErrorCode.PROTOCOL_TAG_UNRECOGNIZED,
    ErrorCode.JOB_NOT_FOUND,
}

# ── Sources ───────────────────────────────────────────────────────────
_CMAF_UK = "https://vs-cmaf-push-uk.live.fastly.md.bbci.co.uk/x=4/i=urn:bbc:pips:service:"
_CMAF_UK_LIVE = "https://vs-cmaf-push-uk-live.akamaized.net/x=4/i=urn:bbc:pips:service:"
_CMAF_PUSHB_LIVE = "https://vs-cmaf-pushb-uk-live.akamaized.net/x=4/i=urn:bbc:pips:service:"
_CMAF_PUSHB_CF = "https://vs-cmaf-pushb-uk.live.cf.md.bbci.co.uk/x=4/i=urn:bbc:pips:service:"
_CMAF_PUSHB_FASTLY = "https://vs-cmaf-pushb-uk.live.fastly.md.bbci.co.uk/x=4/i=urn:bbc:pips:service:"

# Append-only: ids are positions in this traversal and are stored against jobs.
DEFAULT_SOURCES = {
    "BBC NEWS": [
        ("BBC NEWS CHANNEL HD", _CMAF_UK + "bbc_news_channel_hd/"),
        ("BBC WORLD NEWS AMERICA HD",
         "https://vs-cmaf-pushb-ntham-gcomm-live.akamaized.net/x=4/i=urn:bbc:pips:service:"
         "bbc_world_news_north_america/"),
    ],
    "BBC ONE": [
        ("BBC ONE HD", _CMAF_UK + "bbc_one_hd/"),
        ("BBC ONE WALES HD", _CMAF_PUSHB_LIVE + "bbc_one_wales_hd/"),
        ("BBC ONE SCOTLAND HD", _CMAF_PUSHB_LIVE + "bbc_one_scotland_hd/"),
        ("BBC ONE NORTHERN IRELAND HD", _CMAF_PUSHB_LIVE + "bbc_one_northern_ireland_hd/"),
        ("BBC ONE CHANNEL ISLANDS HD", _CMAF_PUSHB_LIVE + "bbc_one_channel_islands/"),
        ("BBC ONE EAST HD", _CMAF_PUSHB_LIVE + "bbc_one_east/"),
        ("BBC ONE EAST MIDLANDS HD", _CMAF_PUSHB_LIVE + "bbc_one_east_midlands/"),
        ("BBC ONE EAST YORKSHIRE & LINCONSHIRE HD", _CMAF_PUSHB_LIVE + "bbc_one_east_yorkshire/"),
        ("BBC ONE LONDON HD", _CMAF_UK_LIVE + "bbc_one_london/"),
        ("BBC ONE NORTH EAST HD", _CMAF_PUSHB_CF + "bbc_one_north_east/"),
        ("BBC ONE NORTH WEST HD", _CMAF_PUSHB_CF + "bbc_one_north_west/"),
        ("BBC ONE SOUTH HD", _CMAF_PUSHB_LIVE + "bbc_one_south/"),
        ("BBC ONE SOUTH EAST HD", _CMAF_PUSHB_CF + "bbc_one_south_east/"),
        ("BBC ONE SOUTH WEST HD", _CMAF_PUSHB_LIVE + "bbc_one_south_west/"),
        ("BBC ONE WEST HD", _CMAF_PUSHB_CF + "bbc_one_west/"),
        ("BBC ONE WEST MIDLANDS HD", _CMAF_PUSHB_LIVE + "bbc_one_west_midlands/"),
        ("BBC ONE YORKSHIRE HD", _CMAF_PUSHB_CF + "bbc_one_yorks/"),
    ],
    "BBC TWO": [
        ("BBC TWO HD", _CMAF_UK_LIVE + "bbc_two_hd/"),
        ("BBC TWO NORTHERN IRELAND HD", _CMAF_PUSHB_LIVE + "bbc_two_northern_ireland_hd/"),
        ("BBC TWO WALES DIGITAL", _CMAF_PUSHB_FASTLY + "bbc_two_wales_digital/"),
    ],
    "OTHER": [
        ("BBC THREE HD", _CMAF_PUSHB_LIVE + "bbc_three_hd/"),
        ("BBC FOUR HD", _CMAF_PUSHB_CF + "bbc_four_hd/"),
        ("CBBC HD",
         "https://b2-hobir-sky.live.bidi.net.uk/vs-cmaf-pushb-uk/x=4/i=urn:bbc:pips:service:cbbc_hd/"),
        ("CBEEBIES HD", _CMAF_PUSHB_LIVE + "cbeebies_hd/"),
        ("BBC SCOTLAND HD", _CMAF_PUSHB_LIVE + "bbc_scotland_hd/"),
        ("BBC PARLIAMENT", _CMAF_PUSHB_LIVE + "bbc_parliament/"),
        ("BBC ALBA", _CMAF_PUSHB_LIVE + "bbc_alba/"),
        ("S4C", _CMAF_PUSHB_LIVE + "s4cpbs/"),
    ],
}

# ── Log levels ────────────────────────────────────────────────────────
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "INFO"
