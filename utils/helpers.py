"""Вспомогательные функции форматирования и разбора"""

import re
from typing import Optional, Union
from urllib.parse import quote

from config import CURRENCY_SYMBOL, DEFAULT_DURATION_MINUTES, PHONE_LENGTH

_HOURS_RE = re.compile(r"(\d+)\s*h")
_MINUTES_RE = re.compile(r"(\d+)\s*m")
_DIGITS_RE = re.compile(r"\d+")


def parse_duration(duration: Union[str, int, None]) -> int:
    """Разбор длительности в минуты

    Понимает "2h", "1h 30m", "45m" и строку с голым числом (минуты).
    Всё остальное (включая пустое значение) -> 60 минут.
    """
    if duration is None:
        return DEFAULT_DURATION_MINUTES
    if isinstance(duration, int):
        return duration

    hours = _HOURS_RE.search(duration)
    minutes = _MINUTES_RE.search(duration)
    total = 0
    if hours:
        total += int(hours.group(1)) * 60
    if minutes:
        total += int(minutes.group(1))

    if total == 0:
        digits = _DIGITS_RE.search(duration)
        return int(digits.group(0)) if digits else DEFAULT_DURATION_MINUTES
    return total


def format_duration(minutes: int) -> str:
    """90 -> "1h 30m", 120 -> "2h", 45 -> "45m" """
    hours, rest = divmod(minutes, 60)
    if hours and rest:
        return f"{hours}h {rest}m"
    if hours:
        return f"{hours}h"
    return f"{rest}m"


def format_price(amount: int) -> str:
    """45000 -> "$45.000" (разделитель тысяч - точка)"""
    return f"{CURRENCY_SYMBOL}{amount:,}".replace(",", ".")


def parse_price(price: Union[str, int, None]) -> int:
    """"$45.000" -> 45000, всё нечисловое отбрасывается"""
    if price is None:
        return 0
    if isinstance(price, int):
        return price
    digits = "".join(_DIGITS_RE.findall(price))
    return int(digits) if digits else 0


def normalize_phone(phone: Optional[str]) -> str:
    """Оставить только цифры: "300 123-4567" -> "3001234567" """
    if not phone:
        return ""
    return "".join(ch for ch in phone if ch.isdigit())


def is_valid_phone(phone: Optional[str]) -> bool:
    return bool(phone) and phone.isdigit() and len(phone) == PHONE_LENGTH


def is_valid_email(email: Optional[str]) -> bool:
    if not email:
        return False
    local, _, domain = email.strip().partition("@")
    return bool(local) and "." in domain


def avatar_url(name: str) -> str:
    """Аватар-заглушка по имени клиента"""
    return (
        f"https://ui-avatars.com/api/?name={quote(name)}"
        "&background=random&color=fff"
    )
