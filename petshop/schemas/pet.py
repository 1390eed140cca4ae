from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PetSpecies(str, Enum):
    DOG = "dog"
    CAT = "cat"
    BIRD = "bird"
    RABBIT = "rabbit"
    OTHER = "other"


class PetData(BaseModel):
    """Mutable pet fields. ``customer_id`` must name an existing owner."""

    model_config = ConfigDict(str_strip_whitespace=True)

    customer_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=50)
    species: PetSpecies
    breed: Optional[str] = Field(default="", max_length=50)
    age: int = Field(default=0, ge=0, le=100, strict=True)
    weight: float = Field(default=0.0, ge=0, le=500, strict=True)
    notes: Optional[str] = Field(default="", max_length=500)

    @field_validator("breed", "notes", mode="after")
    @classmethod
    def _blank_text(cls, value: Optional[str]) -> str:
        return value or ""


class Pet(PetData):
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: str
    created_at: dt.datetime
