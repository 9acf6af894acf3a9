"""Репозиторий для работы с услугами"""

from typing import List, Optional

from database.base_repository import BaseRepository
from database.models import Service


class ServiceRepository(BaseRepository):
    """Репозиторий для услуг"""

    @staticmethod
    async def get_all_services(active_only: bool = True) -> List[Service]:
        """Получить все услуги"""
        query = (
            "SELECT * FROM services WHERE is_active=1 ORDER BY category, name"
            if active_only
            else "SELECT * FROM services ORDER BY category, name"
        )
        rows = await ServiceRepository._execute_query(query, fetch_all=True)
        return [Service.from_row(row) for row in rows or []]

    @staticmethod
    async def get_service_by_name(name: str) -> Optional[Service]:
        row = await ServiceRepository._execute_query(
            "SELECT * FROM services WHERE name=?", (name,), fetch_one=True
        )
        return Service.from_row(row) if row else None

    @staticmethod
    async def create_service(service: Service) -> int:
        """Создать новую услугу"""
        return await ServiceRepository._insert(
            """INSERT INTO services
            (name, category, price, duration_minutes, allows_removal_addon, is_active)
            VALUES (?, ?, ?, ?, ?, ?)""",
            (
                service.name,
                service.category,
                service.price,
                service.duration_minutes,
                None if service.allows_removal_addon is None else int(service.allows_removal_addon),
                int(service.is_active),
            ),
        )

    @staticmethod
    async def update_service(service_id: int, service: Service) -> bool:
        """Обновить услугу"""
        updated = await ServiceRepository._execute_query(
            """UPDATE services
            SET name=?, category=?, price=?, duration_minutes=?,
                allows_removal_addon=?, is_active=?
            WHERE id=?""",
            (
                service.name,
                service.category,
                service.price,
                service.duration_minutes,
                None if service.allows_removal_addon is None else int(service.allows_removal_addon),
                int(service.is_active),
                service_id,
            ),
            commit=True,
        )
        return updated > 0

    @staticmethod
    async def delete_service(service_id: int) -> bool:
        """Удалить услугу (мягкое удаление)"""
        updated = await ServiceRepository._execute_query(
            "UPDATE services SET is_active=0 WHERE id=?", (service_id,), commit=True
        )
        return updated > 0
