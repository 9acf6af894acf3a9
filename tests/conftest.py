"""Конфигурация pytest и общие фикстуры для всех тестов

Этот файл содержит:
- Настройку тестовой среды
- Фиксированный понедельник и построители моделей
- In-memory хранилище (FakeStore) для BookingService
- Фикстуры для SQLite-хранилища на временном файле
"""

import os
import sys
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# Добавляем корневую папку в PYTHONPATH
sys.path.insert(0, str(Path(__file__).parent.parent))

# ============================================================================
# НАСТРОЙКА ТЕСТОВОЙ СРЕДЫ
# ============================================================================

# Настройка переменных окружения ДО импорта config
os.environ["DATABASE_PATH"] = "./test_salon.db"
os.environ["TIMEZONE"] = "America/Bogota"
os.environ["LOCALE"] = "es"

import config  # noqa: E402
from database.models import (  # noqa: E402
    Actor,
    ActorProfile,
    ActorRole,
    Appointment,
    AppointmentStatus,
    Client,
    DaySchedule,
    Professional,
    Service,
)
from database.queries import Database  # noqa: E402
from services.booking_service import BookingService  # noqa: E402
from services.exceptions import IdentityConflictError  # noqa: E402
from utils.i18n import weekday_names  # noqa: E402

# Понедельник
MONDAY = date(2024, 6, 10)


# ============================================================================
# PYTEST КОНФИГУРАЦИЯ
# ============================================================================


def pytest_configure(config):
    """Регистрация пользовательских маркеров"""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: integration test")
    config.addinivalue_line("markers", "unit: unit test")


# ============================================================================
# ВРЕМЯ
# ============================================================================


@pytest.fixture
def monday():
    return MONDAY


# ============================================================================
# ПОСТРОИТЕЛИ МОДЕЛЕЙ
# ============================================================================


def week_schedule(start: str = "09:00", end: str = "19:00", disabled=("Domingo",)) -> List[DaySchedule]:
    return [
        DaySchedule(day=name, enabled=name not in disabled, start=start, end=end)
        for name in weekday_names("es")
    ]


@pytest.fixture
def services():
    return [
        Service(id=1, name="Semipermanente Manos", category="Uñas", price=45000, duration_minutes=60),
        Service(id=2, name="Builder Gel", category="Uñas", price=70000, duration_minutes=120),
        Service(id=3, name="Corte de Cabello", category="Peluquería", price=30000, duration_minutes=45),
        Service(id=4, name="Masaje Relajante", category="Spa", price=90000, duration_minutes=60),
        Service(id=5, name="Retiro (Solo Retiro)", category="Retiros", price=15000, duration_minutes=30),
        Service(id=6, name="Depilación de Axilas", category="Depilación", price=20000, duration_minutes=30),
        Service(id=7, name="Epilación de Cejas", category="Cejas", price=18000, duration_minutes=30),
    ]


@pytest.fixture
def professionals():
    return [
        Professional(
            id=5,
            name="Laura Gómez",
            email="laura@salon.co",
            specialties=["Semipermanente Manos", "Builder Gel", "Retiro (Solo Retiro)"],
            schedule=week_schedule(),
        ),
        Professional(
            id=6,
            name="Andrés Ruiz",
            email="andres@salon.co",
            specialties=["Corte de Cabello", "Masaje Relajante"],
            schedule=[],  # без своего расписания -> расписание салона
        ),
    ]


@pytest.fixture
def clients():
    return [
        Client(
            id=1,
            name="María Pérez",
            phone="3001234567",
            email="maria@mail.com",
            avatar="https://example.com/maria.png",
        ),
    ]


@pytest.fixture
def make_appointment():
    """Фабрика записей"""

    def _create(
        id: int = 100,
        professional_id: int = 5,
        day: Optional[date] = MONDAY,
        time: str = "10:00",
        duration_minutes: int = 60,
        status: AppointmentStatus = AppointmentStatus.CONFIRMED,
        service: str = "Semipermanente Manos",
    ) -> Appointment:
        return Appointment(
            id=id,
            client_id=1,
            client_name="María Pérez",
            service=service,
            date=day,
            time=time,
            duration_minutes=duration_minutes,
            price=45000,
            professional_id=professional_id,
            professional_name="Laura Gómez",
            status=status,
        )

    return _create


# ============================================================================
# АКТОРЫ
# ============================================================================


@pytest.fixture
def admin_actor():
    return Actor(ActorRole.ADMIN)


@pytest.fixture
def professional_actor():
    return Actor(ActorRole.PROFESSIONAL)


@pytest.fixture
def client_actor():
    return Actor(
        ActorRole.CLIENT,
        ActorProfile(name="Sofía Torres", phone="3109876543", email="sofia@mail.com"),
    )


# ============================================================================
# FAKE STORE
# ============================================================================


class FakeStore:
    """In-memory хранилище с историей вызовов"""

    def __init__(self, services, professionals, clients=None, appointments=None):
        self.services = list(services)
        self.professionals = list(professionals)
        self.clients = list(clients or [])
        self.appointments = list(appointments or [])
        self.calls: List[Dict[str, Any]] = []
        self.fail_on = set()
        self._next_id = 1000

    def _record(self, name: str, *args):
        self.calls.append({"method": name, "args": args})
        if name in self.fail_on:
            raise RuntimeError(f"{name} failed")

    def called(self, name: str) -> int:
        return sum(1 for call in self.calls if call["method"] == name)

    async def list_services(self):
        self._record("list_services")
        return list(self.services)

    async def list_professionals(self):
        self._record("list_professionals")
        return list(self.professionals)

    async def list_clients(self):
        self._record("list_clients")
        return list(self.clients)

    async def list_appointments(self):
        self._record("list_appointments")
        return list(self.appointments)

    async def list_client_appointments(self, client_id):
        self._record("list_client_appointments", client_id)
        return [a for a in self.appointments if a.client_id == client_id]

    async def get_appointment(self, appointment_id):
        self._record("get_appointment", appointment_id)
        for appointment in self.appointments:
            if appointment.id == appointment_id:
                return replace(appointment)
        return None

    async def create_client(self, client):
        self._record("create_client", client)
        for existing in self.clients:
            if existing.phone == client.phone or existing.email == client.email:
                raise IdentityConflictError(existing.name)
        self._next_id += 1
        created = replace(client, id=self._next_id)
        self.clients.append(created)
        return created

    async def create_appointment(self, appointment):
        self._record("create_appointment", appointment)
        self._next_id += 1
        created = replace(appointment, id=self._next_id, created_at="2024-06-01T12:00:00")
        self.appointments.append(created)
        return created

    async def update_appointment_status(self, appointment_id, status):
        self._record("update_appointment_status", appointment_id, status)
        for index, appointment in enumerate(self.appointments):
            if appointment.id == appointment_id:
                self.appointments[index] = replace(appointment, status=status)
                return True
        return False

    async def delete_appointment(self, appointment_id):
        self._record("delete_appointment", appointment_id)
        before = len(self.appointments)
        self.appointments = [a for a in self.appointments if a.id != appointment_id]
        return len(self.appointments) < before


@pytest.fixture
def fake_store(services, professionals, clients):
    return FakeStore(services, professionals, clients)


@pytest.fixture
def booking_service(fake_store):
    """BookingService поверх in-memory хранилища"""
    return BookingService(store=fake_store)


# ============================================================================
# SQLITE
# ============================================================================


@pytest.fixture
async def init_database(tmp_path, monkeypatch):
    """Свежая БД на временном файле со всеми миграциями"""
    db_path = str(tmp_path / "test_salon.db")
    monkeypatch.setattr(config, "DATABASE_PATH", db_path)
    await Database.init_db()
    yield db_path


@pytest.fixture
async def seeded_database(init_database, professionals):
    """БД с мастерами из фикстуры professionals; id берутся из БД"""
    stored = []
    for professional in professionals:
        professional_id = await Database.add_professional(professional)
        stored.append(replace(professional, id=professional_id))
    yield stored
