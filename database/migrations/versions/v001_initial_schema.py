"""Начальная схема базы данных салона"""

from config import DEFAULT_SERVICES
from database.migrations.migration_manager import Migration

SERVICES_TABLE_SQL = """CREATE TABLE IF NOT EXISTS {table}
    (id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE,
    category TEXT,
    price INTEGER NOT NULL DEFAULT 0,
    duration_minutes INTEGER NOT NULL DEFAULT 60,
    is_active BOOLEAN NOT NULL DEFAULT 1,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP)"""

SERVICES_ACTIVE_INDEX_SQL = (
    "CREATE INDEX IF NOT EXISTS idx_services_active ON services(is_active, name)"
)


class InitialSchema(Migration):
    version = 1
    description = "Services, professionals, clients and appointments"

    async def upgrade(self, db):
        await db.execute(SERVICES_TABLE_SQL.format(table="services"))

        await db.execute(
            """CREATE TABLE IF NOT EXISTS professionals
            (id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT,
            role TEXT,
            avatar TEXT,
            specialties TEXT NOT NULL DEFAULT '[]',
            schedule TEXT NOT NULL DEFAULT '[]')"""
        )

        # phone и email - ключи идентичности клиента
        await db.execute(
            """CREATE TABLE IF NOT EXISTS clients
            (id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            phone TEXT NOT NULL UNIQUE,
            email TEXT NOT NULL UNIQUE,
            avatar TEXT,
            last_visit TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP)"""
        )

        await db.execute(
            """CREATE TABLE IF NOT EXISTS appointments
            (id INTEGER PRIMARY KEY AUTOINCREMENT,
            client_id INTEGER REFERENCES clients(id),
            client_name TEXT,
            service TEXT NOT NULL,
            date TEXT NOT NULL,
            time TEXT NOT NULL,
            duration_minutes INTEGER NOT NULL,
            price INTEGER NOT NULL DEFAULT 0,
            professional_id INTEGER NOT NULL REFERENCES professionals(id),
            professional_name TEXT,
            status TEXT NOT NULL DEFAULT 'pending'
                CHECK (status IN ('pending', 'confirmed', 'cancelled')),
            avatar TEXT,
            created_at TEXT NOT NULL)"""
        )

        # Индексы для производительности
        await db.execute(
            "CREATE INDEX IF NOT EXISTS idx_appointments_pro_date ON appointments(professional_id, date)"
        )
        await db.execute(
            "CREATE INDEX IF NOT EXISTS idx_appointments_client ON appointments(client_id)"
        )
        await db.execute(SERVICES_ACTIVE_INDEX_SQL)

        # Каталог по умолчанию
        await db.executemany(
            """INSERT OR IGNORE INTO services (name, category, price, duration_minutes)
            VALUES (?, ?, ?, ?)""",
            DEFAULT_SERVICES,
        )

    async def downgrade(self, db):
        await db.execute("DROP TABLE IF EXISTS appointments")
        await db.execute("DROP TABLE IF EXISTS clients")
        await db.execute("DROP TABLE IF EXISTS professionals")
        await db.execute("DROP TABLE IF EXISTS services")
