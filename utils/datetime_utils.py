"""Утилиты для работы с датами и временем

Движок работает с локальным "настенным" временем салона: все datetime
наивные (без tzinfo), зона используется только чтобы узнать текущий момент.
"""

from datetime import date, datetime, timedelta
from typing import List, Union

from config import TIMEZONE

DateLike = Union[date, datetime, str]


def now_local() -> datetime:
    """Текущее локальное время салона (naive)"""
    return datetime.now(TIMEZONE).replace(tzinfo=None)


def localize_datetime(dt: datetime) -> datetime:
    """Привести datetime к локальному naive времени салона

    Args:
        dt: naive (уже локальный) или aware datetime

    Returns:
        Naive datetime в TIMEZONE приложения
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(TIMEZONE).replace(tzinfo=None)


def time_to_minutes(time_str: str) -> int:
    """"HH:MM" -> минуты от полуночи

    Raises:
        ValueError: если строка не в формате HH:MM
    """
    parts = time_str.strip().split(":")
    if len(parts) != 2 or not parts[0].isdigit() or not parts[1].isdigit():
        raise ValueError(f"Invalid time {time_str!r}, expected HH:MM")
    hours, minutes = int(parts[0]), int(parts[1])
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"Invalid time {time_str!r}, expected HH:MM")
    return hours * 60 + minutes


def minutes_to_time(total_minutes: int) -> str:
    """Минуты от полуночи -> "HH:MM" """
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def is_valid_time(time_str: str) -> bool:
    """Проверка формата HH:MM"""
    try:
        time_to_minutes(time_str)
        return True
    except (ValueError, AttributeError):
        return False


def to_date_key(value: DateLike) -> date:
    """Нормализация к календарному дню (время отбрасывается)

    Принимает date, datetime или строку ISO ("2024-06-10" или
    "2024-06-10T10:00:00").
    """
    if isinstance(value, datetime):
        return localize_datetime(value).date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(value.strip()[:10]).date()


def combine(day: date, time_str: str) -> datetime:
    """Дата + "HH:MM" -> naive datetime"""
    minutes = time_to_minutes(time_str)
    return datetime(day.year, day.month, day.day) + timedelta(minutes=minutes)


def get_date_range(start_date: date, days: int) -> List[date]:
    """Генерация диапазона дат

    Args:
        start_date: Начальная дата
        days: Количество дней

    Returns:
        Список дат
    """
    return [start_date + timedelta(days=i) for i in range(days)]
