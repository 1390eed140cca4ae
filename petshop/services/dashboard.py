from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Tuple, Union

from petshop.schemas.appointment import Appointment, AppointmentStatus
from petshop.schemas.dashboard import DashboardStats
from petshop.services.exceptions import ValidationError
from petshop.services.store import PetShopStore

logger = logging.getLogger(__name__)

DateLike = Union[date, str, None]


class DashboardService:
    """Today-scoped appointment views and headline counts for the dashboard."""

    def __init__(self, store: PetShopStore) -> None:
        self._store = store

    def today_appointments(self, today: DateLike = None) -> Tuple[Appointment, ...]:
        """Appointments on the target calendar day, earliest time first."""
        target = self._resolve_target_date(today)
        matches = [
            appointment
            for appointment in self._store.appointments
            if self._same_day(appointment.date, target)
        ]
        # HH:MM is fixed width, so string order is chronological.
        matches.sort(key=lambda appointment: appointment.time)
        return tuple(matches)

    def stats(self, today: DateLike = None) -> DashboardStats:
        target = self._resolve_target_date(today)
        logger.debug("Building dashboard stats for %s", target.isoformat())
        todays = self.today_appointments(target)
        return DashboardStats(
            total_customers=len(self._store.customers),
            total_pets=len(self._store.pets),
            appointments_today=len(todays),
            completed_today=sum(
                1
                for appointment in todays
                if appointment.status == AppointmentStatus.COMPLETED
            ),
        )

    def pet_count(self, customer_id: str) -> int:
        return len(self._store.get_pets_by_customer_id(customer_id))

    @staticmethod
    def _same_day(value: date, target: date) -> bool:
        return (value.year, value.month, value.day) == (
            target.year,
            target.month,
            target.day,
        )

    @staticmethod
    def _resolve_target_date(value: DateLike) -> date:
        if value is None:
            return date.today()
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(str(value))
        except ValueError as exc:
            raise ValidationError(
                {"date": "Invalid date format. Expected YYYY-MM-DD."}, cause=exc
            ) from exc
