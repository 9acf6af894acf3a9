"""Репозиторий для работы с мастерами"""

import json
from typing import List, Optional, Sequence

from database.base_repository import BaseRepository
from database.models import DaySchedule, Professional


class ProfessionalRepository(BaseRepository):
    """Специализации и расписание хранятся JSON-строками"""

    @staticmethod
    async def get_all_professionals() -> List[Professional]:
        rows = await ProfessionalRepository._execute_query(
            "SELECT * FROM professionals ORDER BY name", fetch_all=True
        )
        return [Professional.from_row(row) for row in rows or []]

    @staticmethod
    async def get_professional_by_id(professional_id: int) -> Optional[Professional]:
        row = await ProfessionalRepository._execute_query(
            "SELECT * FROM professionals WHERE id=?", (professional_id,), fetch_one=True
        )
        return Professional.from_row(row) if row else None

    @staticmethod
    async def create_professional(professional: Professional) -> int:
        return await ProfessionalRepository._insert(
            """INSERT INTO professionals (name, email, role, avatar, specialties, schedule)
            VALUES (?, ?, ?, ?, ?, ?)""",
            (
                professional.name,
                professional.email,
                professional.role,
                professional.avatar,
                json.dumps(professional.specialties, ensure_ascii=False),
                json.dumps([entry.to_dict() for entry in professional.schedule], ensure_ascii=False),
            ),
        )

    @staticmethod
    async def update_schedule(professional_id: int, schedule: Sequence[DaySchedule]) -> bool:
        updated = await ProfessionalRepository._execute_query(
            "UPDATE professionals SET schedule=? WHERE id=?",
            (json.dumps([entry.to_dict() for entry in schedule], ensure_ascii=False), professional_id),
            commit=True,
        )
        return updated > 0

    @staticmethod
    async def update_specialties(professional_id: int, specialties: Sequence[str]) -> bool:
        updated = await ProfessionalRepository._execute_query(
            "UPDATE professionals SET specialties=? WHERE id=?",
            (json.dumps(list(specialties), ensure_ascii=False), professional_id),
            commit=True,
        )
        return updated > 0
