"""Репозиторий для работы с записями"""

import logging
from dataclasses import replace
from typing import List, Optional

import aiosqlite

from database.base_repository import BaseRepository
from database.models import Appointment, AppointmentStatus
from services.conflict_detector import find_conflicts
from services.exceptions import SlotConflictError
from utils.datetime_utils import now_local


class AppointmentRepository(BaseRepository):
    """Репозиторий для записей"""

    @staticmethod
    async def get_all_appointments() -> List[Appointment]:
        rows = await AppointmentRepository._execute_query(
            "SELECT * FROM appointments ORDER BY date, time", fetch_all=True
        )
        return [Appointment.from_row(row) for row in rows or []]

    @staticmethod
    async def get_appointment_by_id(appointment_id: int) -> Optional[Appointment]:
        row = await AppointmentRepository._execute_query(
            "SELECT * FROM appointments WHERE id=?", (appointment_id,), fetch_one=True
        )
        return Appointment.from_row(row) if row else None

    @staticmethod
    async def get_client_appointments(client_id: int) -> List[Appointment]:
        rows = await AppointmentRepository._execute_query(
            "SELECT * FROM appointments WHERE client_id=? ORDER BY date, time",
            (client_id,),
            fetch_all=True,
        )
        return [Appointment.from_row(row) for row in rows or []]

    @staticmethod
    async def create_appointment(appointment: Appointment) -> Appointment:
        """Создание записи с атомарной проверкой пересечений

        Проверка и INSERT выполняются в одной транзакции BEGIN IMMEDIATE,
        поэтому две одновременные брони одного слота не пройдут обе.

        Raises:
            SlotConflictError: слот занят другой записью
        """
        date_str = appointment.date.isoformat()
        created_at = now_local().isoformat(timespec="seconds")

        async with aiosqlite.connect(AppointmentRepository._db_path()) as db:
            db.row_factory = aiosqlite.Row
            await db.execute("BEGIN IMMEDIATE")
            try:
                async with db.execute(
                    """SELECT * FROM appointments
                    WHERE professional_id=? AND date=? AND status != ?""",
                    (appointment.professional_id, date_str, AppointmentStatus.CANCELLED.value),
                ) as cursor:
                    existing = [Appointment.from_row(row) for row in await cursor.fetchall()]

                if find_conflicts(
                    appointment.professional_id,
                    appointment.date,
                    appointment.time,
                    appointment.duration_minutes,
                    existing,
                ):
                    await db.rollback()
                    logging.info(
                        f"Slot {date_str} {appointment.time} taken for professional "
                        f"{appointment.professional_id}"
                    )
                    raise SlotConflictError(appointment.time, appointment.professional_name)

                cursor = await db.execute(
                    """INSERT INTO appointments
                    (client_id, client_name, service, date, time, duration_minutes, price,
                     professional_id, professional_name, status, avatar, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                    (
                        appointment.client_id,
                        appointment.client_name,
                        appointment.service,
                        date_str,
                        appointment.time,
                        appointment.duration_minutes,
                        appointment.price,
                        appointment.professional_id,
                        appointment.professional_name,
                        appointment.status.value,
                        appointment.avatar,
                        created_at,
                    ),
                )
                appointment_id = cursor.lastrowid
                await db.commit()
            except aiosqlite.Error:
                await db.rollback()
                raise

        logging.info(f"Appointment created: {appointment_id} ({date_str} {appointment.time})")
        return replace(appointment, id=appointment_id, created_at=created_at)

    @staticmethod
    async def update_status(appointment_id: int, status: AppointmentStatus) -> bool:
        updated = await AppointmentRepository._execute_query(
            "UPDATE appointments SET status=? WHERE id=?",
            (status.value, appointment_id),
            commit=True,
        )
        return updated > 0

    @staticmethod
    async def delete_appointment(appointment_id: int) -> bool:
        """Физическое удаление записи"""
        deleted = await AppointmentRepository._execute_query(
            "DELETE FROM appointments WHERE id=?", (appointment_id,), commit=True
        )
        if deleted:
            logging.info(f"Appointment {appointment_id} deleted")
        else:
            logging.warning(f"Appointment {appointment_id} not found for delete")
        return deleted > 0
