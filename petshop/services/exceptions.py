from __future__ import annotations

from typing import Dict, List

from pydantic import ValidationError as PydanticValidationError


class ServiceError(Exception):
    """Base exception for store and service failures."""

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class ValidationError(ServiceError):
    """Raised when a payload breaks one or more field rules.

    ``errors`` maps each offending field name to a human readable message.
    """

    def __init__(
        self,
        errors: Dict[str, str],
        message: str | None = None,
        *,
        cause: Exception | None = None,
    ):
        self.errors = dict(errors)
        if message is None:
            message = "Invalid " + ", ".join(
                f"{field}: {reason}" for field, reason in self.errors.items()
            )
        super().__init__(message, cause=cause)

    @property
    def fields(self) -> List[str]:
        return list(self.errors)

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationError":
        errors: Dict[str, str] = {}
        for error in exc.errors():
            location = error.get("loc") or ("__root__",)
            field = str(location[0])
            message = str(error.get("msg", "Invalid value"))
            if message.startswith("Value error, "):
                message = message[len("Value error, "):]
            errors.setdefault(field, message)
        return cls(errors, cause=exc)


class NotFoundError(ServiceError):
    """Raised when an operation references an unknown record id."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransitionError(ServiceError):
    """Raised when an appointment status change is not allowed."""

    def __init__(self, current: str, requested: str):
        super().__init__(
            f"Cannot move appointment from '{current}' to '{requested}'"
        )
        self.current = current
        self.requested = requested
