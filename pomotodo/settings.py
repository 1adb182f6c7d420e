"""Timer configuration with range clamping and default fallback."""

import math
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

# field name -> (default, minimum, maximum)
LIMITS = {
    "work_minutes": (25, 1, 60),
    "short_break_minutes": (5, 1, 15),
    "long_break_minutes": (30, 5, 30),
    "target_cycles": (4, 1, 10),
}


def coerce_int(value: Any, default: int, low: int, high: int) -> int:
    """Turn raw user input into an int inside [low, high].

    Non-numeric input (empty strings, words, None, inf, nan) falls back to
    default.
    """
    if isinstance(value, bool):
        number = default
    elif isinstance(value, int):
        number = value
    elif isinstance(value, float):
        number = int(value) if math.isfinite(value) else default
    else:
        try:
            number = int(str(value).strip())
        except (TypeError, ValueError):
            number = default
    return max(low, min(high, number))


class TimerSettings(BaseModel):
    """Durations and cycle target for a focus session."""

    work_minutes: int = Field(default=25)
    short_break_minutes: int = Field(default=5)
    long_break_minutes: int = Field(default=30)
    target_cycles: int = Field(default=4)

    @field_validator(
        "work_minutes",
        "short_break_minutes",
        "long_break_minutes",
        "target_cycles",
        mode="before",
    )
    @classmethod
    def clamp_to_range(cls, v: Any, info: ValidationInfo) -> int:
        """Fall back to the default for junk input, then clamp."""
        default, low, high = LIMITS[info.field_name]
        return coerce_int(v, default, low, high)

    @property
    def work_secs(self) -> int:
        return self.work_minutes * 60

    @property
    def short_secs(self) -> int:
        return self.short_break_minutes * 60

    @property
    def long_secs(self) -> int:
        return self.long_break_minutes * 60
