"""Проверка пересечения слота с существующими записями"""

from typing import Iterable, List

from database.models import Appointment, AppointmentStatus
from utils.datetime_utils import DateLike, time_to_minutes, to_date_key


def find_conflicts(
    professional_id: int,
    day: DateLike,
    start_time: str,
    duration_minutes: int,
    appointments: Iterable[Appointment],
) -> List[Appointment]:
    """Записи мастера на тот же день, пересекающиеся с [start, start + duration)

    Отменённые записи не учитываются. Касание концов не конфликт.
    """
    day_key = to_date_key(day)
    new_start = time_to_minutes(start_time)
    new_end = new_start + duration_minutes

    conflicts = []
    for appointment in appointments:
        if appointment.status == AppointmentStatus.CANCELLED:
            continue
        if appointment.professional_id != professional_id:
            continue
        if appointment.date is None or to_date_key(appointment.date) != day_key:
            continue

        exist_start = time_to_minutes(appointment.time)
        exist_end = exist_start + appointment.duration_minutes

        # Интервалы пересекаются если:
        # new_start < exist_end AND new_end > exist_start
        if new_start < exist_end and new_end > exist_start:
            conflicts.append(appointment)
    return conflicts


def is_slot_occupied(
    professional_id: int,
    day: DateLike,
    start_time: str,
    duration_minutes: int,
    appointments: Iterable[Appointment],
) -> bool:
    return bool(find_conflicts(professional_id, day, start_time, duration_minutes, appointments))


def free_slots(
    professional_id: int,
    day: DateLike,
    slots: Iterable[str],
    duration_minutes: int,
    appointments: Iterable[Appointment],
) -> List[str]:
    """Оставить только незанятые слоты (порядок сохраняется)"""
    appointments = list(appointments)
    return [
        slot
        for slot in slots
        if not is_slot_occupied(professional_id, day, slot, duration_minutes, appointments)
    ]
