"""Конфигурация приложения"""

import os

import pytz
from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    """Целое значение из окружения с понятной ошибкой"""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


# База данных
DATABASE_PATH = os.getenv("DATABASE_PATH", "salon.db")

# Временная зона (только локальное время салона)
TIMEZONE = pytz.timezone(os.getenv("TIMEZONE", "America/Bogota"))

# Локализация
DEFAULT_LOCALE = os.getenv("LOCALE", "es")

# Настройки бронирования
BOOKING_HORIZON_DAYS = _int_env("BOOKING_HORIZON_DAYS", 14)
SLOT_STEP_MINUTES = _int_env("SLOT_STEP_MINUTES", 30)
DEFAULT_DURATION_MINUTES = 60

# Минимальный запас до начала слота "сегодня" (в минутах)
CLIENT_MIN_LEAD_MINUTES = _int_env("CLIENT_MIN_LEAD_MINUTES", 30)
STAFF_MIN_LEAD_MINUTES = _int_env("STAFF_MIN_LEAD_MINUTES", 0)

# Доп. услуга "Retiro" (снятие покрытия)
REMOVAL_EXTRA_MINUTES = 30
ADDON_SURCHARGES = {
    "none": 0,
    "semi": 10000,
    "acrylic": 15000,
    "feet": 8000,
}

# Услуги, к которым снятие не добавляет времени
NO_ADDON_MARKERS = ("Corte", "Masaje", "Depilación", "Epilación", "Retiro")

PHONE_LENGTH = 10

# Салон
SALON_NAME = os.getenv("SALON_NAME", "BeautyManager Pro")
SALON_LOCATION = os.getenv("SALON_LOCATION", "Salón de Belleza")
CURRENCY_SYMBOL = "$"

# Расписание салона по умолчанию (если у мастера нет своего)
DEFAULT_SCHEDULE = [
    {"day": "Lunes", "enabled": True, "start": "09:00", "end": "19:00"},
    {"day": "Martes", "enabled": True, "start": "09:00", "end": "19:00"},
    {"day": "Miércoles", "enabled": True, "start": "09:00", "end": "19:00"},
    {"day": "Jueves", "enabled": True, "start": "09:00", "end": "19:00"},
    {"day": "Viernes", "enabled": True, "start": "09:00", "end": "19:00"},
    {"day": "Sábado", "enabled": True, "start": "09:00", "end": "17:00"},
    {"day": "Domingo", "enabled": False, "start": "09:00", "end": "14:00"},
]

# Каталог услуг по умолчанию: (название, категория, цена, минуты)
DEFAULT_SERVICES = [
    ("Semipermanente Manos", "Servicios de Uñas", 45000, 60),
    ("Semipermanente Pies", "Servicios de Uñas", 40000, 60),
    ("Semipermanente Hombre", "Servicios de Uñas", 35000, 45),
    ("Nivelación Base Ruber", "Servicios de Uñas", 55000, 90),
    ("Builder Gel", "Servicios de Uñas", 70000, 120),
    ("Dipping", "Servicios de Uñas", 60000, 90),
    ("Soft Gel", "Servicios de Uñas", 80000, 120),
    ("Retiro (Solo Retiro)", "Retiros", 15000, 30),
    ("Depilación de Axilas", "Depilación", 20000, 30),
    ("Epilación de Cejas", "Cejas", 18000, 30),
    ("Epilación y Sombreado de Cejas en Henna", "Cejas", 35000, 60),
    ("Masaje Relajante", "Spa", 90000, 60),
    ("Corte de Cabello", "Peluquería", 30000, 45),
]
