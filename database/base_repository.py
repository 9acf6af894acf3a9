"""Базовый репозиторий с общими запросами"""

from typing import Any, Optional, Sequence

import aiosqlite

import config


class BaseRepository:
    """Общие помощники поверх aiosqlite"""

    @staticmethod
    def _db_path() -> str:
        # Читаем при каждом вызове, чтобы тесты могли подменить путь
        return config.DATABASE_PATH

    @staticmethod
    async def _execute_query(
        query: str,
        params: Sequence[Any] = (),
        fetch_one: bool = False,
        fetch_all: bool = False,
        commit: bool = False,
    ) -> Optional[Any]:
        """Выполнить запрос; строки возвращаются как aiosqlite.Row"""
        async with aiosqlite.connect(BaseRepository._db_path()) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(query, params) as cursor:
                if fetch_one:
                    result = await cursor.fetchone()
                elif fetch_all:
                    result = await cursor.fetchall()
                else:
                    result = cursor.rowcount
            if commit:
                await db.commit()
            return result

    @staticmethod
    async def _insert(query: str, params: Sequence[Any] = ()) -> int:
        """INSERT с коммитом; возвращает id новой строки"""
        async with aiosqlite.connect(BaseRepository._db_path()) as db:
            cursor = await db.execute(query, params)
            await db.commit()
            return cursor.lastrowid
