"""Выборки записей для дашбордов и агенды"""

from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple

from database.models import ActorRole, Appointment, AppointmentStatus, DisplayStatus
from services.status_machine import display_status
from utils.i18n import t


def _start_key(appointment: Appointment):
    return (appointment.date or date.min, appointment.time)


def mask_appointment(appointment: Appointment) -> Appointment:
    """Чужая запись глазами клиента: "Reservado"/"Ocupado", без цены и контактов

    Время, длительность, мастер и статус остаются, иначе отменённая запись
    снова заняла бы слот, а занятый слот показался бы свободным.
    """
    return replace(
        appointment,
        client_id=None,
        client_name=t("agenda.reserved"),
        service=t("agenda.busy"),
        price=None,
        avatar="",
    )


class AgendaService:
    """Сервис для работы с агендой"""

    @staticmethod
    def visible_appointments(
        appointments: Iterable[Appointment],
        role: ActorRole,
        client_id: Optional[int] = None,
        professional_id: Optional[int] = None,
    ) -> List[Appointment]:
        """Записи, которые видит роль

        admin - все как есть; professional - только свои (без привязки к
        мастеру - ничего); client - все, но чужие замаскированы, чтобы по
        ним можно было считать занятость.
        """
        if role is ActorRole.ADMIN:
            return list(appointments)

        if role is ActorRole.PROFESSIONAL:
            if professional_id is None:
                return []
            return [a for a in appointments if a.professional_id == professional_id]

        return [
            appointment
            if client_id is not None and appointment.client_id == client_id
            else mask_appointment(appointment)
            for appointment in appointments
        ]

    @staticmethod
    def client_history(appointments: Iterable[Appointment], client_id: int) -> List[Appointment]:
        """Все записи клиента, новые первыми (по дате, затем по времени)"""
        result = [a for a in appointments if a.client_id == client_id]
        result.sort(key=_start_key, reverse=True)
        return result

    @staticmethod
    def upcoming_today(appointments: Iterable[Appointment], now: datetime) -> List[Appointment]:
        """Сегодняшние неотменённые записи, которые ещё не закончились"""
        today = now.date()
        result = [
            appointment
            for appointment in appointments
            if appointment.status != AppointmentStatus.CANCELLED
            and appointment.date == today
            and now < appointment.end
        ]
        return sorted(result, key=_start_key)

    @staticmethod
    def recent_history(
        appointments: Iterable[Appointment], now: datetime, limit: int = 10
    ) -> List[Appointment]:
        """Отменённые и завершившиеся записи, новые первыми"""
        result = []
        for appointment in appointments:
            if appointment.status == AppointmentStatus.CANCELLED:
                result.append(appointment)
            elif appointment.date is not None and now >= appointment.end:
                result.append(appointment)
        result.sort(key=_start_key, reverse=True)
        return result[:limit]

    @staticmethod
    def today_count(appointments: Iterable[Appointment], now: datetime) -> int:
        today = now.date()
        return sum(
            1
            for appointment in appointments
            if appointment.status != AppointmentStatus.CANCELLED and appointment.date == today
        )

    @staticmethod
    def future_confirmed_count(appointments: Iterable[Appointment], now: datetime) -> int:
        today = now.date()
        return sum(
            1
            for appointment in appointments
            if appointment.status == AppointmentStatus.CONFIRMED
            and appointment.date is not None
            and appointment.date >= today
        )

    @staticmethod
    def day_agenda(
        appointments: Iterable[Appointment],
        professional_id: int,
        day: date,
        now: datetime,
    ) -> List[Tuple[Appointment, DisplayStatus]]:
        """Записи мастера на день с вычисленным статусом, по времени"""
        result = [
            appointment
            for appointment in appointments
            if appointment.professional_id == professional_id and appointment.date == day
        ]
        result.sort(key=_start_key)
        return [(appointment, display_status(appointment, now)) for appointment in result]
