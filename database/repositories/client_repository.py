"""Репозиторий для работы с клиентами"""

import logging
from dataclasses import replace
from typing import List, Optional

import aiosqlite

from database.base_repository import BaseRepository
from database.models import Client
from services.exceptions import IdentityConflictError


class ClientRepository(BaseRepository):
    """Клиенты; phone и email уникальны на уровне схемы"""

    @staticmethod
    async def get_all_clients() -> List[Client]:
        rows = await ClientRepository._execute_query(
            "SELECT * FROM clients ORDER BY name", fetch_all=True
        )
        return [Client.from_row(row) for row in rows or []]

    @staticmethod
    async def get_client_by_phone(phone: str) -> Optional[Client]:
        row = await ClientRepository._execute_query(
            "SELECT * FROM clients WHERE phone=?", (phone,), fetch_one=True
        )
        return Client.from_row(row) if row else None

    @staticmethod
    async def get_client_by_email(email: str) -> Optional[Client]:
        row = await ClientRepository._execute_query(
            "SELECT * FROM clients WHERE lower(email)=lower(?)", (email,), fetch_one=True
        )
        return Client.from_row(row) if row else None

    @staticmethod
    async def create_client(client: Client) -> Client:
        """Создать клиента

        Raises:
            IdentityConflictError: телефон или email уже заняты
        """
        try:
            client_id = await ClientRepository._insert(
                """INSERT INTO clients (name, phone, email, avatar, last_visit)
                VALUES (?, ?, ?, ?, ?)""",
                (client.name, client.phone, client.email, client.avatar, client.last_visit),
            )
        except aiosqlite.IntegrityError as e:
            logging.warning(f"Duplicate client identity {client.phone} / {client.email}: {e}")
            owner = await ClientRepository.get_client_by_phone(client.phone)
            if owner is None:
                owner = await ClientRepository.get_client_by_email(client.email)
            raise IdentityConflictError(owner.name if owner else client.email) from e

        logging.info(f"Client created: {client_id} ({client.phone})")
        return replace(client, id=client_id)
