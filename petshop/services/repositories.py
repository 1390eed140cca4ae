from __future__ import annotations

import itertools
from datetime import datetime, timezone
from typing import Dict, Generic, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel

from petshop.schemas.appointment import Appointment, AppointmentStatus
from petshop.schemas.customer import Customer
from petshop.schemas.pet import Pet

RecordT = TypeVar("RecordT", bound=BaseModel)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class _BaseRepository(Generic[RecordT]):
    """Insertion-ordered collection of frozen records keyed by id.

    Ids come from a per-repository counter and are never handed out twice,
    even after the record holding them has been removed.
    """

    record_type: Type[RecordT]

    def __init__(self, prefix: str) -> None:
        self._prefix = prefix
        self._counter = itertools.count(1)
        self._records: Dict[str, RecordT] = {}

    def _next_id(self) -> str:
        return f"{self._prefix}-{next(self._counter):05d}"

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def get(self, record_id: str) -> Optional[RecordT]:
        return self._records.get(record_id)

    def list(self) -> Tuple[RecordT, ...]:
        return tuple(self._records.values())

    def create(self, data: BaseModel) -> RecordT:
        record = self.record_type(
            id=self._next_id(),
            created_at=_utc_now(),
            **data.model_dump(),
        )
        self._records[record.id] = record
        return record

    def replace(self, record_id: str, data: BaseModel) -> RecordT:
        current = self._records[record_id]
        record = current.model_copy(update=data.model_dump())
        self._records[record_id] = record
        return record

    def remove(self, record_id: str) -> Optional[RecordT]:
        return self._records.pop(record_id, None)

    def snapshot(self) -> Dict[str, RecordT]:
        return dict(self._records)

    def restore(self, records: Mapping[str, RecordT]) -> None:
        self._records = dict(records)


class CustomerRepository(_BaseRepository[Customer]):
    record_type = Customer

    def __init__(self) -> None:
        super().__init__("CUS")


class PetRepository(_BaseRepository[Pet]):
    record_type = Pet

    def __init__(self) -> None:
        super().__init__("PET")

    def list_by_customer(self, customer_id: str) -> Tuple[Pet, ...]:
        return tuple(
            pet for pet in self._records.values() if pet.customer_id == customer_id
        )


class AppointmentRepository(_BaseRepository[Appointment]):
    record_type = Appointment

    def __init__(self) -> None:
        super().__init__("APT")

    def set_status(self, appointment_id: str, status: AppointmentStatus) -> Appointment:
        record = self._records[appointment_id].model_copy(update={"status": status})
        self._records[appointment_id] = record
        return record
