from __future__ import annotations

import datetime as dt
import re
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$", re.ASCII)


class ServiceType(str, Enum):
    GROOMING = "grooming"
    BATH = "bath"
    VETERINARY = "veterinary"
    VACCINATION = "vaccination"
    CONSULTATION = "consultation"


class AppointmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AppointmentData(BaseModel):
    """Mutable appointment fields.

    ``status`` is not part of the payload: new appointments start as
    ``scheduled`` and only the status workflow moves them along.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    customer_id: str = Field(..., min_length=1)
    pet_id: str = Field(..., min_length=1)
    service: ServiceType
    date: dt.date
    time: str
    notes: Optional[str] = Field(default="", max_length=500)

    @field_validator("date", mode="before")
    @classmethod
    def _drop_time_of_day(cls, value: Any) -> Any:
        if isinstance(value, dt.datetime):
            return value.date()
        return value

    @field_validator("time")
    @classmethod
    def _check_time(cls, value: str) -> str:
        if not TIME_PATTERN.match(value):
            raise ValueError("Time must use the 24-hour format HH:MM")
        return value

    @field_validator("notes", mode="after")
    @classmethod
    def _blank_notes(cls, value: Optional[str]) -> str:
        return value or ""


class Appointment(AppointmentData):
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: str
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    created_at: dt.datetime
