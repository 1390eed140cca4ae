from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Mapping, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from petshop.config import Settings, get_settings
from petshop.schemas.appointment import Appointment, AppointmentData, AppointmentStatus
from petshop.schemas.customer import Customer, CustomerData
from petshop.schemas.pet import Pet, PetData
from petshop.services.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from petshop.services.repositories import (
    AppointmentRepository,
    CustomerRepository,
    PetRepository,
)
from petshop.services.seed import seed_store
from petshop.services.workflow import ensure_transition

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)
Payload = Union[BaseModel, Mapping[str, Any]]


def _validate(model: Type[PayloadT], payload: Payload) -> PayloadT:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump()
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc


def _history_key(appointment: Appointment) -> Tuple[date, str]:
    return appointment.date, appointment.time


@dataclass(frozen=True)
class DeletionResult:
    customer_ids: Tuple[str, ...] = ()
    pet_ids: Tuple[str, ...] = ()
    appointment_ids: Tuple[str, ...] = ()


class PetShopStore:
    """Owns the customer, pet and appointment collections.

    All writes go through the methods below. Each one validates its input
    completely before touching any collection, so a failed call leaves the
    store exactly as it was.
    """

    def __init__(
        self,
        *,
        customers: CustomerRepository | None = None,
        pets: PetRepository | None = None,
        appointments: AppointmentRepository | None = None,
    ) -> None:
        self._customers = customers if customers is not None else CustomerRepository()
        self._pets = pets if pets is not None else PetRepository()
        self._appointments = (
            appointments if appointments is not None else AppointmentRepository()
        )

    # -- reads -------------------------------------------------------------

    @property
    def customers(self) -> Tuple[Customer, ...]:
        return self._customers.list()

    @property
    def pets(self) -> Tuple[Pet, ...]:
        return self._pets.list()

    @property
    def appointments(self) -> Tuple[Appointment, ...]:
        return self._appointments.list()

    def get_customer_by_id(self, customer_id: str) -> Optional[Customer]:
        return self._customers.get(customer_id)

    def get_pet_by_id(self, pet_id: str) -> Optional[Pet]:
        return self._pets.get(pet_id)

    def get_appointment_by_id(self, appointment_id: str) -> Optional[Appointment]:
        return self._appointments.get(appointment_id)

    def get_pets_by_customer_id(self, customer_id: str) -> Tuple[Pet, ...]:
        return self._pets.list_by_customer(customer_id)

    def search_customers(self, query: str = "") -> Tuple[Customer, ...]:
        needle = query.strip().lower()
        return tuple(
            customer
            for customer in self._customers.list()
            if needle in customer.name.lower() or needle in customer.email.lower()
        )

    def search_pets(self, query: str = "") -> Tuple[Pet, ...]:
        needle = query.strip().lower()
        return tuple(
            pet
            for pet in self._pets.list()
            if needle in pet.name.lower() or needle in pet.breed.lower()
        )

    def appointment_history(self) -> Tuple[Appointment, ...]:
        """Every appointment, newest date first and latest time first."""
        return tuple(
            sorted(self._appointments.list(), key=_history_key, reverse=True)
        )

    def search_appointments(
        self,
        query: str = "",
        status: AppointmentStatus | str | None = None,
    ) -> Tuple[Appointment, ...]:
        """Filter by pet or customer name and optional status, in history order."""
        needle = query.strip().lower()
        wanted = self._coerce_status(status) if status is not None else None

        matches = []
        for appointment in self.appointment_history():
            if wanted is not None and appointment.status != wanted:
                continue
            if needle:
                pet = self._pets.get(appointment.pet_id)
                customer = self._customers.get(appointment.customer_id)
                names = [record.name.lower() for record in (pet, customer) if record]
                if not any(needle in name for name in names):
                    continue
            matches.append(appointment)
        return tuple(matches)

    # -- customers ---------------------------------------------------------

    def add_customer(self, data: Payload) -> Customer:
        payload = _validate(CustomerData, data)
        customer = self._customers.create(payload)
        logger.info("Added customer %s (%s)", customer.id, customer.name)
        return customer

    def update_customer(self, customer_id: str, data: Payload) -> Customer:
        self._require(self._customers, "Customer", customer_id)
        payload = _validate(CustomerData, data)
        customer = self._customers.replace(customer_id, payload)
        logger.info("Updated customer %s", customer_id)
        return customer

    def delete_customer(self, customer_id: str) -> DeletionResult:
        self._require(self._customers, "Customer", customer_id)

        pets = self._pets.snapshot()
        removed_pets = {
            pet_id for pet_id, pet in pets.items() if pet.customer_id == customer_id
        }
        appointments = self._appointments.snapshot()
        removed_appointments = {
            appointment_id
            for appointment_id, appointment in appointments.items()
            if appointment.customer_id == customer_id
            or appointment.pet_id in removed_pets
        }
        surviving_pets = {
            pet_id: pet for pet_id, pet in pets.items() if pet_id not in removed_pets
        }
        surviving_appointments = {
            appointment_id: appointment
            for appointment_id, appointment in appointments.items()
            if appointment_id not in removed_appointments
        }

        self._customers.remove(customer_id)
        self._pets.restore(surviving_pets)
        self._appointments.restore(surviving_appointments)

        result = DeletionResult(
            customer_ids=(customer_id,),
            pet_ids=tuple(pet_id for pet_id in pets if pet_id in removed_pets),
            appointment_ids=tuple(
                appointment_id
                for appointment_id in appointments
                if appointment_id in removed_appointments
            ),
        )
        logger.info(
            "Deleted customer %s with %d pet(s) and %d appointment(s)",
            customer_id,
            len(result.pet_ids),
            len(result.appointment_ids),
        )
        return result

    # -- pets --------------------------------------------------------------

    def add_pet(self, data: Payload) -> Pet:
        payload = _validate(PetData, data)
        self._check_owner(payload)
        pet = self._pets.create(payload)
        logger.info("Added pet %s (%s) for customer %s", pet.id, pet.name, pet.customer_id)
        return pet

    def update_pet(self, pet_id: str, data: Payload) -> Pet:
        self._require(self._pets, "Pet", pet_id)
        payload = _validate(PetData, data)
        self._check_owner(payload)
        pet = self._pets.replace(pet_id, payload)
        logger.info("Updated pet %s", pet_id)
        return pet

    def delete_pet(self, pet_id: str) -> DeletionResult:
        self._require(self._pets, "Pet", pet_id)

        appointments = self._appointments.snapshot()
        removed = tuple(
            appointment_id
            for appointment_id, appointment in appointments.items()
            if appointment.pet_id == pet_id
        )
        surviving = {
            appointment_id: appointment
            for appointment_id, appointment in appointments.items()
            if appointment.pet_id != pet_id
        }

        self._pets.remove(pet_id)
        self._appointments.restore(surviving)

        logger.info("Deleted pet %s with %d appointment(s)", pet_id, len(removed))
        return DeletionResult(pet_ids=(pet_id,), appointment_ids=removed)

    # -- appointments ------------------------------------------------------

    def add_appointment(self, data: Payload) -> Appointment:
        payload = _validate(AppointmentData, data)
        self._check_references(payload)
        appointment = self._appointments.create(payload)
        logger.info(
            "Scheduled appointment %s: %s for pet %s on %s %s",
            appointment.id,
            appointment.service.value,
            appointment.pet_id,
            appointment.date.isoformat(),
            appointment.time,
        )
        return appointment

    def update_appointment(self, appointment_id: str, data: Payload) -> Appointment:
        self._require(self._appointments, "Appointment", appointment_id)
        payload = _validate(AppointmentData, data)
        self._check_references(payload)
        appointment = self._appointments.replace(appointment_id, payload)
        logger.info("Updated appointment %s", appointment_id)
        return appointment

    def delete_appointment(self, appointment_id: str) -> DeletionResult:
        self._require(self._appointments, "Appointment", appointment_id)
        self._appointments.remove(appointment_id)
        logger.info("Deleted appointment %s", appointment_id)
        return DeletionResult(appointment_ids=(appointment_id,))

    def update_appointment_status(
        self, appointment_id: str, new_status: AppointmentStatus | str
    ) -> Appointment:
        current = self._require(self._appointments, "Appointment", appointment_id)
        target = self._coerce_status(new_status)
        try:
            ensure_transition(current.status, target)
        except InvalidTransitionError:
            logger.warning(
                "Rejected status change for appointment %s: %s -> %s",
                appointment_id,
                current.status.value,
                target.value,
            )
            raise
        appointment = self._appointments.set_status(appointment_id, target)
        logger.info(
            "Appointment %s moved from %s to %s",
            appointment_id,
            current.status.value,
            target.value,
        )
        return appointment

    # -- helpers -----------------------------------------------------------

    @staticmethod
    def _require(repository, entity: str, record_id: str):
        record = repository.get(record_id)
        if record is None:
            logger.debug("%s %s not found", entity, record_id)
            raise NotFoundError(entity, record_id)
        return record

    @staticmethod
    def _coerce_status(value: AppointmentStatus | str) -> AppointmentStatus:
        try:
            return AppointmentStatus(value)
        except ValueError as exc:
            allowed = ", ".join(status.value for status in AppointmentStatus)
            raise ValidationError(
                {"status": f"Status must be one of: {allowed}"}, cause=exc
            ) from exc

    def _check_owner(self, payload: PetData) -> None:
        if payload.customer_id not in self._customers:
            raise ValidationError(
                {"customer_id": f"Customer {payload.customer_id} does not exist"}
            )

    def _check_references(self, payload: AppointmentData) -> None:
        errors: Dict[str, str] = {}
        if payload.customer_id not in self._customers:
            errors["customer_id"] = f"Customer {payload.customer_id} does not exist"
        if payload.pet_id not in self._pets:
            errors["pet_id"] = f"Pet {payload.pet_id} does not exist"
        if errors:
            raise ValidationError(errors)


def build_store(settings: Settings | None = None) -> PetShopStore:
    """Create a fresh store, loading the sample data when configured to."""
    settings = settings or get_settings()
    store = PetShopStore()
    if settings.seed_sample_data:
        seed_store(store)
    logger.info(
        "Store ready with %d customer(s), %d pet(s), %d appointment(s)",
        len(store.customers),
        len(store.pets),
        len(store.appointments),
    )
    return store
