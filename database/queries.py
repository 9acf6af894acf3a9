"""Запросы к базе данных

Database - хранилище, которым пользуется BookingService: списки
сущностей, создание клиента и записи, смена статуса и удаление.
Любой объект с теми же корутинами может его заменить.
"""

import logging
from typing import List, Optional

import config
from database.migrations.migration_manager import MigrationManager
from database.migrations.versions import ALL_MIGRATIONS
from database.models import Appointment, AppointmentStatus, Client, Professional, Service
from database.repositories import (
    AppointmentRepository,
    ClientRepository,
    ProfessionalRepository,
    ServiceRepository,
)


class Database:
    """Класс для работы с базой данных"""

    @staticmethod
    async def init_db() -> int:
        """Инициализация БД: применяет все недостающие миграции"""
        manager = MigrationManager(config.DATABASE_PATH, ALL_MIGRATIONS)
        version = await manager.migrate()
        logging.info(f"Database {config.DATABASE_PATH} ready at schema version {version}")
        return version

    # === ЧТЕНИЕ ===

    @staticmethod
    async def list_appointments() -> List[Appointment]:
        return await AppointmentRepository.get_all_appointments()

    @staticmethod
    async def list_clients() -> List[Client]:
        return await ClientRepository.get_all_clients()

    @staticmethod
    async def list_professionals() -> List[Professional]:
        return await ProfessionalRepository.get_all_professionals()

    @staticmethod
    async def list_services() -> List[Service]:
        return await ServiceRepository.get_all_services()

    @staticmethod
    async def list_client_appointments(client_id: int) -> List[Appointment]:
        return await AppointmentRepository.get_client_appointments(client_id)

    @staticmethod
    async def get_appointment(appointment_id: int) -> Optional[Appointment]:
        return await AppointmentRepository.get_appointment_by_id(appointment_id)

    # === ЗАПИСЬ ===

    @staticmethod
    async def create_client(client: Client) -> Client:
        return await ClientRepository.create_client(client)

    @staticmethod
    async def create_appointment(appointment: Appointment) -> Appointment:
        return await AppointmentRepository.create_appointment(appointment)

    @staticmethod
    async def update_appointment_status(appointment_id: int, status: AppointmentStatus) -> bool:
        return await AppointmentRepository.update_status(appointment_id, status)

    @staticmethod
    async def delete_appointment(appointment_id: int) -> bool:
        return await AppointmentRepository.delete_appointment(appointment_id)

    # === НАСТРОЙКА ===

    @staticmethod
    async def add_service(service: Service) -> int:
        return await ServiceRepository.create_service(service)

    @staticmethod
    async def add_professional(professional: Professional) -> int:
        return await ProfessionalRepository.create_professional(professional)
