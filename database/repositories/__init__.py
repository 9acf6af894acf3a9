"""Репозитории для работы с базой данных"""

from database.repositories.appointment_repository import AppointmentRepository
from database.repositories.client_repository import ClientRepository
from database.repositories.professional_repository import ProfessionalRepository
from database.repositories.service_repository import ServiceRepository

__all__ = [
    "AppointmentRepository",
    "ClientRepository",
    "ProfessionalRepository",
    "ServiceRepository",
]
