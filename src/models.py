"""
Data model for logged habits and the values derived from them.

DailyLogEntry is the only persisted type; everything else is recomputed per
request and never stored.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from datetime import date, datetime
from typing import Any, Dict, Optional

SEVERITIES = ("positive", "warning", "info")


def _coerce_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _float(value: Any) -> float:
    return float(value) if value is not None else 0.0


@dataclass(frozen=True)
class DailyLogEntry:
    """One user-submitted record for a calendar day.

    Numeric fields are expected to be finite and non-negative; nothing here
    validates that.
    """

    log_date: date
    study_hours: float = 0.0
    sleep_hours: float = 0.0
    meal_count: int = 0
    meal_quality: int = 0
    screen_time: float = 0.0
    water_intake: float = 0.0
    mood: int = 0
    exercise_minutes: float = 0.0
    exercise_type: str = ""
    daily_note: str = ""
    id: Optional[int] = None

    def __post_init__(self):
        # Strip time-of-day so streak gaps are whole calendar days.
        object.__setattr__(self, "log_date", _coerce_date(self.log_date))

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "DailyLogEntry":
        """Build an entry from a ``daily_logs`` row (missing numerics become 0)."""
        return cls(
            log_date=row["log_date"],
            study_hours=_float(row.get("study_hours")),
            sleep_hours=_float(row.get("sleep_hours")),
            meal_count=int(_float(row.get("meal_count"))),
            meal_quality=int(_float(row.get("meal_quality"))),
            screen_time=_float(row.get("screen_time")),
            water_intake=_float(row.get("water_intake")),
            mood=int(_float(row.get("mood"))),
            exercise_minutes=_float(row.get("exercise_minutes")),
            exercise_type=row.get("exercise_type") or "",
            daily_note=row.get("daily_note") or "",
            id=row.get("id"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["log_date"] = self.log_date.isoformat()
        return out


@dataclass(frozen=True)
class Statistics:
    mean: float
    median: float
    variance: float
    std_dev: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class TrendPoint:
    label: str
    value: float
    moving_average: Optional[float] = None

    def with_average(self, moving_average: float) -> "TrendPoint":
        return replace(self, moving_average=moving_average)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Correlation:
    dimension_a: str
    dimension_b: str
    coefficient: float
    strength: str

    def involves(self, label_a: str, label_b: str) -> bool:
        return {self.dimension_a, self.dimension_b} == {label_a, label_b}

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Insight:
    id: str
    title: str
    description: str
    severity: str
    badge: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        if self.badge is None:
            out.pop("badge")
        return out
