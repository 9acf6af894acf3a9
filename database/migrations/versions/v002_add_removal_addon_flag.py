"""Миграция: явный флаг "к услуге можно добавить снятие"

Раньше это определялось только по подстроке в названии. Флаг заполняется
тем же правилом и дальше считается источником истины.
"""

from database.migrations.migration_manager import Migration
from database.migrations.versions.v001_initial_schema import (
    SERVICES_ACTIVE_INDEX_SQL,
    SERVICES_TABLE_SQL,
)
from services.catalog import name_allows_removal_addon

SERVICES_V1_COLUMNS = "id, name, category, price, duration_minutes, is_active, created_at"


class AddRemovalAddonFlag(Migration):
    version = 2
    description = "Add services.allows_removal_addon backfilled from service names"

    async def upgrade(self, db):
        async with db.execute("PRAGMA table_info(services)") as cursor:
            columns = await cursor.fetchall()
            column_names = [col[1] for col in columns]

        if "allows_removal_addon" not in column_names:
            await db.execute("ALTER TABLE services ADD COLUMN allows_removal_addon BOOLEAN")

        async with db.execute(
            "SELECT id, name FROM services WHERE allows_removal_addon IS NULL"
        ) as cursor:
            rows = await cursor.fetchall()

        await db.executemany(
            "UPDATE services SET allows_removal_addon=? WHERE id=?",
            [(int(name_allows_removal_addon(name)), service_id) for service_id, name in rows],
        )

    async def downgrade(self, db):
        # Пересоздаём таблицу по схеме v001 (ключ, ограничения и значения
        # по умолчанию сохраняются), затем переносим строки
        await db.execute(SERVICES_TABLE_SQL.format(table="services_v1"))
        await db.execute(
            f"""INSERT INTO services_v1 ({SERVICES_V1_COLUMNS})
            SELECT {SERVICES_V1_COLUMNS} FROM services"""
        )
        await db.execute("DROP TABLE services")
        await db.execute("ALTER TABLE services_v1 RENAME TO services")
        await db.execute(SERVICES_ACTIVE_INDEX_SQL)
