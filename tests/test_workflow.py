from __future__ import annotations

import logging

import pytest

from petshop.schemas.appointment import AppointmentStatus
from petshop.services.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from petshop.services.store import PetShopStore
from petshop.services.workflow import (
    TERMINAL_STATUSES,
    allowed_transitions,
    can_transition,
    is_terminal,
)


@pytest.fixture
def store() -> PetShopStore:
    return PetShopStore()


@pytest.fixture
def appointment_id(store: PetShopStore) -> str:
    customer = store.add_customer(
        {"name": "Ana Oliveira", "email": "ana@email.com", "phone": "(11) 97777-9012"}
    )
    pet = store.add_pet(
        {"customer_id": customer.id, "name": "Mel", "species": "rabbit"}
    )
    appointment = store.add_appointment(
        {
            "customer_id": customer.id,
            "pet_id": pet.id,
            "service": "vaccination",
            "date": "2025-03-14",
            "time": "15:30",
        }
    )
    return appointment.id


def test_new_appointments_start_scheduled(store: PetShopStore, appointment_id: str) -> None:
    assert store.get_appointment_by_id(appointment_id).status is AppointmentStatus.SCHEDULED


def test_scheduled_to_in_progress_to_completed(
    store: PetShopStore, appointment_id: str
) -> None:
    started = store.update_appointment_status(appointment_id, "in-progress")
    assert started.status is AppointmentStatus.IN_PROGRESS

    finished = store.update_appointment_status(appointment_id, AppointmentStatus.COMPLETED)
    assert finished.status is AppointmentStatus.COMPLETED
    assert store.get_appointment_by_id(appointment_id) == finished


def test_scheduled_can_be_cancelled(store: PetShopStore, appointment_id: str) -> None:
    cancelled = store.update_appointment_status(appointment_id, "cancelled")

    assert cancelled.status is AppointmentStatus.CANCELLED


def test_scheduled_cannot_jump_to_completed(store: PetShopStore, appointment_id: str) -> None:
    with pytest.raises(InvalidTransitionError) as exc_info:
        store.update_appointment_status(appointment_id, "completed")

    assert exc_info.value.current == "scheduled"
    assert exc_info.value.requested == "completed"
    assert store.get_appointment_by_id(appointment_id).status is AppointmentStatus.SCHEDULED


def test_in_progress_cannot_be_cancelled(store: PetShopStore, appointment_id: str) -> None:
    store.update_appointment_status(appointment_id, "in-progress")

    with pytest.raises(InvalidTransitionError):
        store.update_appointment_status(appointment_id, "cancelled")


@pytest.mark.parametrize("terminal", ["completed", "cancelled"])
@pytest.mark.parametrize("target", [status.value for status in AppointmentStatus])
def test_terminal_states_reject_every_transition(
    store: PetShopStore, appointment_id: str, terminal: str, target: str
) -> None:
    if terminal == "completed":
        store.update_appointment_status(appointment_id, "in-progress")
    store.update_appointment_status(appointment_id, terminal)

    with pytest.raises(InvalidTransitionError):
        store.update_appointment_status(appointment_id, target)

    assert store.get_appointment_by_id(appointment_id).status.value == terminal


def test_same_state_transition_is_rejected(store: PetShopStore, appointment_id: str) -> None:
    with pytest.raises(InvalidTransitionError):
        store.update_appointment_status(appointment_id, "scheduled")


def test_unknown_status_value_is_a_validation_error(
    store: PetShopStore, appointment_id: str
) -> None:
    with pytest.raises(ValidationError) as exc_info:
        store.update_appointment_status(appointment_id, "archived")

    assert exc_info.value.fields == ["status"]


def test_unknown_appointment_is_not_found(store: PetShopStore, appointment_id: str) -> None:
    sizes = (len(store.customers), len(store.pets), len(store.appointments))

    with pytest.raises(NotFoundError):
        store.update_appointment_status("nonexistent-id", "completed")

    assert (len(store.customers), len(store.pets), len(store.appointments)) == sizes


def test_rejected_transition_is_logged(
    store: PetShopStore, appointment_id: str, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING, logger="petshop.services.store"):
        with pytest.raises(InvalidTransitionError):
            store.update_appointment_status(appointment_id, "completed")

    assert "Rejected status change" in caplog.text


def test_allowed_transitions_table() -> None:
    assert allowed_transitions(AppointmentStatus.SCHEDULED) == (
        AppointmentStatus.IN_PROGRESS,
        AppointmentStatus.CANCELLED,
    )
    assert allowed_transitions("in-progress") == (AppointmentStatus.COMPLETED,)
    assert allowed_transitions(AppointmentStatus.COMPLETED) == ()
    assert allowed_transitions(AppointmentStatus.CANCELLED) == ()


def test_terminal_helpers() -> None:
    assert TERMINAL_STATUSES == {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED}
    assert is_terminal("cancelled")
    assert not is_terminal(AppointmentStatus.IN_PROGRESS)
    assert can_transition("scheduled", "cancelled")
    assert not can_transition("completed", "scheduled")
