from __future__ import annotations

import datetime as dt
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

PHONE_PATTERN = re.compile(r"^\(\d{2}\)\s?\d{4,5}-\d{4}$", re.ASCII)
EMAIL_MAX_LENGTH = 255


class CustomerData(BaseModel):
    """Mutable customer fields as submitted by the customer form."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str
    address: Optional[str] = Field(default="", max_length=200)

    @field_validator("email")
    @classmethod
    def _check_email_length(cls, value: str) -> str:
        if len(value) > EMAIL_MAX_LENGTH:
            raise ValueError(f"Email must be at most {EMAIL_MAX_LENGTH} characters")
        return value

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, value: str) -> str:
        if not PHONE_PATTERN.match(value):
            raise ValueError("Phone must use the format (00) 00000-0000")
        return value

    @field_validator("address", mode="after")
    @classmethod
    def _blank_address(cls, value: Optional[str]) -> str:
        return value or ""


class Customer(CustomerData):
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: str
    created_at: dt.datetime
