"""Модели данных"""

import json
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import List, Optional, Union

from config import ADDON_SURCHARGES
from utils.datetime_utils import combine, time_to_minutes, to_date_key
from utils.helpers import format_duration, format_price, parse_duration, parse_price
from utils.i18n import t


class AppointmentStatus(str, Enum):
    """Хранимый статус записи (ровно три значения)"""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class DisplayStatus(str, Enum):
    """Статус для отображения, вычисляется из хранимого статуса и времени"""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_SERVICE = "in_service"
    FINISHED = "finished"
    CANCELLED = "cancelled"

    def label(self, locale: Optional[str] = None) -> str:
        if locale:
            return t(f"status.{self.value}", locale)
        return t(f"status.{self.value}")


class AddOn(str, Enum):
    """Снятие покрытия (Retiro), добавляемое к основной услуге"""

    NONE = "none"
    SEMI = "semi"
    ACRYLIC = "acrylic"
    FEET = "feet"

    @property
    def surcharge(self) -> int:
        return ADDON_SURCHARGES[self.value]

    @classmethod
    def from_value(cls, value: Union["AddOn", str, None]) -> "AddOn":
        """None и пустая строка означают "без снятия" """
        if isinstance(value, AddOn):
            return value
        if not value:
            return cls.NONE
        return cls(value)


class ActorRole(str, Enum):
    """Роль того, кто выполняет действие"""

    ADMIN = "admin"
    PROFESSIONAL = "professional"
    CLIENT = "client"

    @property
    def is_staff(self) -> bool:
        return self is not ActorRole.CLIENT


@dataclass
class Service:
    """Модель услуги/процедуры"""

    id: Optional[int]
    name: str
    category: str
    price: int
    duration_minutes: int
    allows_removal_addon: Optional[bool] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row) -> "Service":
        flag = row["allows_removal_addon"]
        return cls(
            id=row["id"],
            name=row["name"],
            category=row["category"] or "",
            price=parse_price(row["price"]),
            duration_minutes=parse_duration(row["duration_minutes"]),
            allows_removal_addon=None if flag is None else bool(flag),
            is_active=bool(row["is_active"]),
        )


@dataclass
class DaySchedule:
    """Часы работы на один день недели"""

    day: str
    enabled: bool
    start: str
    end: str

    def __post_init__(self):
        if self.enabled and time_to_minutes(self.start) >= time_to_minutes(self.end):
            raise ValueError(
                f"Schedule for {self.day}: start {self.start} must be before end {self.end}"
            )

    @property
    def start_minutes(self) -> int:
        return time_to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return time_to_minutes(self.end)

    @classmethod
    def from_dict(cls, data: dict) -> "DaySchedule":
        return cls(
            day=data["day"],
            enabled=bool(data.get("enabled", False)),
            start=data.get("start", "09:00"),
            end=data.get("end", "19:00"),
        )

    @classmethod
    def load(cls, data: dict) -> "DaySchedule":
        """Чтение сохранённой записи без исключений

        Неверные часы (start >= end, не HH:MM) превращают день в выходной:
        одна испорченная запись не должна ломать расписание остальных.
        """
        try:
            return cls.from_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logging.warning(f"Invalid schedule entry {data!r}, day disabled: {e}")
            entry = data if isinstance(data, dict) else {}
            return cls(
                day=str(entry.get("day", "")),
                enabled=False,
                start=str(entry.get("start", "")),
                end=str(entry.get("end", "")),
            )

    def to_dict(self) -> dict:
        return {"day": self.day, "enabled": self.enabled, "start": self.start, "end": self.end}


@dataclass
class Professional:
    """Мастер салона"""

    id: Optional[int]
    name: str
    email: Optional[str] = None
    role: str = ""
    specialties: List[str] = field(default_factory=list)
    schedule: List[DaySchedule] = field(default_factory=list)
    avatar: str = ""

    def offers(self, service_name: str) -> bool:
        return service_name in self.specialties

    @classmethod
    def from_row(cls, row) -> "Professional":
        specialties = json.loads(row["specialties"]) if row["specialties"] else []
        schedule = json.loads(row["schedule"]) if row["schedule"] else []
        return cls(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            role=row["role"] or "",
            specialties=list(specialties),
            schedule=[DaySchedule.load(entry) for entry in schedule],
            avatar=row["avatar"] or "",
        )


@dataclass
class Client:
    """Клиент салона; phone и email уникальны"""

    id: Optional[int]
    name: str
    phone: str
    email: str
    avatar: str = ""
    last_visit: str = ""

    @classmethod
    def from_row(cls, row) -> "Client":
        return cls(
            id=row["id"],
            name=row["name"],
            phone=row["phone"],
            email=row["email"],
            avatar=row["avatar"] or "",
            last_visit=row["last_visit"] or "",
        )


@dataclass
class Appointment:
    """Запись на услугу

    Длительность и цена хранятся целыми числами; строки вида "1h 30m" и
    "$45.000" получаются только при отображении.
    """

    id: Optional[int]
    client_id: Optional[int]
    client_name: str
    service: str
    date: Optional[date]
    time: str
    duration_minutes: int
    price: Optional[int]
    professional_id: int
    professional_name: str
    status: AppointmentStatus = AppointmentStatus.PENDING
    avatar: str = ""
    created_at: Optional[str] = None

    @property
    def start(self) -> Optional[datetime]:
        if self.date is None:
            return None
        return combine(self.date, self.time)

    @property
    def end(self) -> Optional[datetime]:
        start = self.start
        if start is None:
            return None
        return start + timedelta(minutes=self.duration_minutes)

    @property
    def duration_label(self) -> str:
        return format_duration(self.duration_minutes)

    @property
    def price_label(self) -> str:
        # Скрытая цена (чужая запись для клиента) -> пустая подпись
        return format_price(self.price) if self.price is not None else ""

    @classmethod
    def from_row(cls, row) -> "Appointment":
        """Строка БД (или dict) -> Appointment

        Длительность и цена принимаются и в старом строковом виде.
        """
        raw_date = row["date"]
        return cls(
            id=row["id"],
            client_id=row["client_id"],
            client_name=row["client_name"] or "",
            service=row["service"],
            date=to_date_key(raw_date) if raw_date else None,
            time=row["time"],
            duration_minutes=parse_duration(row["duration_minutes"]),
            price=parse_price(row["price"]),
            professional_id=row["professional_id"],
            professional_name=row["professional_name"] or "",
            status=AppointmentStatus(row["status"]),
            avatar=row["avatar"] or "",
            created_at=row["created_at"],
        )


@dataclass
class ActorProfile:
    """Контактные данные того, кто бронирует (для роли client)"""

    name: str = ""
    phone: str = ""
    email: str = ""
    avatar: str = ""


@dataclass
class Actor:
    role: ActorRole
    profile: Optional[ActorProfile] = None


@dataclass
class BookingRequest:
    """Данные формы бронирования"""

    service: str
    professional_id: Optional[int]
    date: Optional[date]
    time: str
    client_phone: str = ""
    client_name: str = ""
    client_email: str = ""
    add_on: AddOn = AddOn.NONE
