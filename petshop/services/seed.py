from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any, Dict, List

from petshop.schemas.appointment import AppointmentStatus

if TYPE_CHECKING:  # pragma: no cover - import for static analysis only
    from petshop.services.store import PetShopStore

SAMPLE_CUSTOMERS: List[Dict[str, Any]] = [
    {
        "key": "maria",
        "name": "Maria Silva",
        "email": "maria@email.com",
        "phone": "(11) 99999-1234",
        "address": "Rua das Flores, 123 - São Paulo",
    },
    {
        "key": "joao",
        "name": "João Santos",
        "email": "joao@email.com",
        "phone": "(11) 98888-5678",
        "address": "Av. Brasil, 456 - São Paulo",
    },
    {
        "key": "ana",
        "name": "Ana Oliveira",
        "email": "ana@email.com",
        "phone": "(11) 97777-9012",
        "address": "Rua do Sol, 789 - São Paulo",
    },
]

SAMPLE_PETS: List[Dict[str, Any]] = [
    {
        "key": "thor",
        "owner": "maria",
        "name": "Thor",
        "species": "dog",
        "breed": "Golden Retriever",
        "age": 3,
        "weight": 32,
        "notes": "Very playful, loves water",
    },
    {
        "key": "luna",
        "owner": "maria",
        "name": "Luna",
        "species": "cat",
        "breed": "Siamese",
        "age": 2,
        "weight": 4,
        "notes": "Shy with strangers",
    },
    {
        "key": "max",
        "owner": "joao",
        "name": "Max",
        "species": "dog",
        "breed": "French Bulldog",
        "age": 4,
        "weight": 12,
        "notes": "Allergic to some shampoos",
    },
    {
        "key": "mel",
        "owner": "ana",
        "name": "Mel",
        "species": "rabbit",
        "breed": "Holland Lop",
        "age": 1,
        "weight": 2,
        "notes": "",
    },
]

# Appointments are dated on the day the store is built.
SAMPLE_APPOINTMENTS: List[Dict[str, Any]] = [
    {
        "pet": "thor",
        "service": "grooming",
        "time": "09:00",
        "status": AppointmentStatus.SCHEDULED,
        "notes": "Full grooming",
    },
    {
        "pet": "luna",
        "service": "bath",
        "time": "10:30",
        "status": AppointmentStatus.IN_PROGRESS,
        "notes": "",
    },
    {
        "pet": "max",
        "service": "veterinary",
        "time": "14:00",
        "status": AppointmentStatus.SCHEDULED,
        "notes": "Routine check-up",
    },
]


def seed_store(store: "PetShopStore", *, today: date | None = None) -> None:
    """Load the sample customers, pets and appointments through the store API."""
    today = today or date.today()

    customer_ids: Dict[str, str] = {}
    for record in SAMPLE_CUSTOMERS:
        payload = {key: value for key, value in record.items() if key != "key"}
        customer_ids[record["key"]] = store.add_customer(payload).id

    pets: Dict[str, Any] = {}
    for record in SAMPLE_PETS:
        payload = {
            key: value for key, value in record.items() if key not in {"key", "owner"}
        }
        payload["customer_id"] = customer_ids[record["owner"]]
        pets[record["key"]] = store.add_pet(payload)

    for record in SAMPLE_APPOINTMENTS:
        pet = pets[record["pet"]]
        appointment = store.add_appointment(
            {
                "customer_id": pet.customer_id,
                "pet_id": pet.id,
                "service": record["service"],
                "date": today,
                "time": record["time"],
                "notes": record["notes"],
            }
        )
        if record["status"] is not AppointmentStatus.SCHEDULED:
            store.update_appointment_status(appointment.id, record["status"])
