"""
Recording duration conversion: magnitude × 60 ** unit seconds.
"""

from bbcd.core.constants import DurationUnit, DURATION_UNIT_ALIASES
from bbcd.core.error_codes import InvalidDurationUnit


def parse_unit(value) -> DurationUnit:
    """
    Accept a DurationUnit, its integer code, or a unit name such as
    "minutes" or "h".
    """
    if isinstance(value, DurationUnit):
        return value
    if isinstance(value, str):
        unit = DURATION_UNIT_ALIASES.get(value.strip().lower())
        if unit is None:
            raise InvalidDurationUnit(f"unknown duration unit {value!r}")
        return unit
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDurationUnit(f"duration unit must be 0, 1 or 2, got {value!r}")
    try:
        return DurationUnit(value)
    except ValueError:
        raise InvalidDurationUnit(f"duration unit must be 0, 1 or 2, got {value!r}") from None


def to_seconds(magnitude, unit):
    """Convert a duration to seconds. The magnitude is used as given."""
    return magnitude * 60 ** int(parse_unit(unit))
