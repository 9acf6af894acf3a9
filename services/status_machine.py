"""Статусы записи

Хранится только pending/confirmed/cancelled. "В процессе" и "завершена"
никто не записывает в БД: они вычисляются при чтении по текущему времени.
"""

from datetime import datetime

from database.models import Appointment, AppointmentStatus, DisplayStatus
from services.exceptions import StatusTransitionError

ALLOWED_TRANSITIONS = {
    AppointmentStatus.PENDING: {AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED},
    AppointmentStatus.CONFIRMED: {AppointmentStatus.PENDING, AppointmentStatus.CANCELLED},
    AppointmentStatus.CANCELLED: set(),
}


def display_status(appointment: Appointment, now: datetime) -> DisplayStatus:
    """Статус для отображения. Порядок проверок важен:

    1. cancelled -> Cancelled
    2. confirmed и now в [start, end) -> InService
    3. now >= end -> Finished (даже если запись так и осталась pending)
    4. confirmed -> Confirmed
    5. иначе Pending (в том числе без даты)
    """
    if appointment.status == AppointmentStatus.CANCELLED:
        return DisplayStatus.CANCELLED

    if appointment.date is not None:
        start = appointment.start
        end = appointment.end
        if start <= now < end and appointment.status == AppointmentStatus.CONFIRMED:
            return DisplayStatus.IN_SERVICE
        if now >= end:
            return DisplayStatus.FINISHED

    if appointment.status == AppointmentStatus.CONFIRMED:
        return DisplayStatus.CONFIRMED
    return DisplayStatus.PENDING


def can_transition(current: AppointmentStatus, target: AppointmentStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def ensure_transition(current: AppointmentStatus, target: AppointmentStatus):
    """Raises:
    StatusTransitionError: переход не из списка разрешённых
    """
    if not can_transition(current, target):
        raise StatusTransitionError(current.value, target.value)


def can_erase(appointment: Appointment, force: bool = False) -> bool:
    """Физически удалить можно отменённую запись или явно (force) по решению персонала"""
    return force or appointment.status == AppointmentStatus.CANCELLED
