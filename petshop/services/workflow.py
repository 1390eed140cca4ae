"""Appointment status lifecycle.

``scheduled`` is the initial state. ``completed`` and ``cancelled`` are
terminal: nothing leaves them.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Tuple

from petshop.schemas.appointment import AppointmentStatus
from petshop.services.exceptions import InvalidTransitionError

TRANSITIONS: Dict[AppointmentStatus, FrozenSet[AppointmentStatus]] = {
    AppointmentStatus.SCHEDULED: frozenset(
        {AppointmentStatus.IN_PROGRESS, AppointmentStatus.CANCELLED}
    ),
    AppointmentStatus.IN_PROGRESS: frozenset({AppointmentStatus.COMPLETED}),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES: FrozenSet[AppointmentStatus] = frozenset(
    status for status, targets in TRANSITIONS.items() if not targets
)


def allowed_transitions(status: AppointmentStatus) -> Tuple[AppointmentStatus, ...]:
    """Return the statuses reachable from ``status`` in declaration order."""
    targets = TRANSITIONS[AppointmentStatus(status)]
    return tuple(candidate for candidate in AppointmentStatus if candidate in targets)


def can_transition(current: AppointmentStatus, requested: AppointmentStatus) -> bool:
    return AppointmentStatus(requested) in TRANSITIONS[AppointmentStatus(current)]


def is_terminal(status: AppointmentStatus) -> bool:
    return AppointmentStatus(status) in TERMINAL_STATUSES


def ensure_transition(current: AppointmentStatus, requested: AppointmentStatus) -> None:
    if not can_transition(current, requested):
        raise InvalidTransitionError(
            AppointmentStatus(current).value, AppointmentStatus(requested).value
        )
