"""Расчёт доступных дней и слотов по недельному расписанию мастера"""

from datetime import date, datetime
from typing import List, Optional, Sequence

from config import (
    BOOKING_HORIZON_DAYS,
    DEFAULT_SCHEDULE,
    SLOT_STEP_MINUTES,
)
from database.models import DaySchedule
from utils.datetime_utils import get_date_range, minutes_to_time
from utils.i18n import WEEKDAY_KEYS, i18n, t

DEFAULT_DAY_SCHEDULES = [DaySchedule.from_dict(entry) for entry in DEFAULT_SCHEDULE]


def _weekday_names(day: date) -> set:
    """Название дня недели во всех загруженных локалях (Lunes, Monday)"""
    key = f"days.{WEEKDAY_KEYS[day.weekday()]}"
    return {t(key, locale).casefold() for locale in i18n.locales}


class ScheduleResolver:
    """Недельное расписание -> конкретные даты и время начала"""

    def __init__(
        self,
        horizon_days: int = BOOKING_HORIZON_DAYS,
        step_minutes: int = SLOT_STEP_MINUTES,
        default_schedule: Optional[Sequence[DaySchedule]] = None,
    ):
        self.horizon_days = horizon_days
        self.step_minutes = step_minutes
        self.default_schedule = (
            list(default_schedule) if default_schedule is not None else DEFAULT_DAY_SCHEDULES
        )

    def effective_schedule(self, schedule: Optional[Sequence[DaySchedule]]) -> Sequence[DaySchedule]:
        """Своё расписание мастера или расписание салона, если своего нет"""
        return schedule if schedule else self.default_schedule

    def schedule_for_day(
        self, schedule: Optional[Sequence[DaySchedule]], day: date
    ) -> Optional[DaySchedule]:
        """Запись расписания на день недели (регистр не важен)"""
        names = _weekday_names(day)
        for entry in self.effective_schedule(schedule):
            if entry.day.strip().casefold() in names:
                return entry
        return None

    def available_days(
        self, schedule: Optional[Sequence[DaySchedule]], today: date
    ) -> List[date]:
        """Рабочие дни в окне [today, today + horizon), по возрастанию"""
        days = []
        for day in get_date_range(today, self.horizon_days):
            entry = self.schedule_for_day(schedule, day)
            if entry is not None and entry.enabled:
                days.append(day)
        return days

    def time_slots(
        self,
        schedule: Optional[Sequence[DaySchedule]],
        day: date,
        duration_minutes: int,
        now: datetime,
        min_lead_minutes: int = 0,
    ) -> List[str]:
        """Время начала с шагом 30 минут, чтобы услуга закончилась до закрытия

        Для сегодняшнего дня остаются только слоты строго позже
        now + min_lead_minutes.
        """
        entry = self.schedule_for_day(schedule, day)
        if entry is None or not entry.enabled:
            return []

        cutoff = None
        if day == now.date():
            cutoff = now.hour * 60 + now.minute + min_lead_minutes

        slots = []
        current = entry.start_minutes
        end = entry.end_minutes
        while current + duration_minutes <= end:
            if cutoff is None or current > cutoff:
                slots.append(minutes_to_time(current))
            current += self.step_minutes
        return slots
