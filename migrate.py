"""
CLI для миграций схемы салона

Использование:
    python migrate.py migrate        # Применить все миграции
    python migrate.py migrate 1      # Применить до версии 1
    python migrate.py rollback 1     # Откатить до версии 1
    python migrate.py current        # Текущая версия и неприменённые миграции
"""

import asyncio
import logging
import sys

import aiosqlite

from config import DATABASE_PATH
from database.migrations.migration_manager import MigrationManager
from database.migrations.versions import ALL_MIGRATIONS

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def print_usage():
    print(__doc__)
    sys.exit(1)


async def cmd_migrate(manager: MigrationManager, args):
    target = int(args[0]) if args else None
    version = await manager.migrate(target)
    print(f"\n{DATABASE_PATH}: schema version {version}")


async def cmd_rollback(manager: MigrationManager, args):
    if not args:
        print("Error: rollback requires target version")
        print_usage()
    version = await manager.rollback(int(args[0]))
    print(f"\n{DATABASE_PATH}: rolled back to version {version}")


async def cmd_current(manager: MigrationManager, args):
    version = await manager.get_current_version()
    print(f"\n{DATABASE_PATH}: version {version} (latest {manager.latest_version})")

    pending = await manager.pending()
    if not pending:
        print("Database is up to date")
        return
    print("Pending migrations:")
    for migration in pending:
        print(f"  {migration.version}: {migration.description}")


COMMANDS = {
    "migrate": cmd_migrate,
    "rollback": cmd_rollback,
    "current": cmd_current,
}


async def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv or argv[0].lower() not in COMMANDS:
        print_usage()

    manager = MigrationManager(DATABASE_PATH, ALL_MIGRATIONS)
    try:
        await COMMANDS[argv[0].lower()](manager, argv[1:])
    except (ValueError, aiosqlite.Error) as e:
        logging.error(f"Migration failed: {e}")
        sys.exit(1)


def run():
    """Точка входа для скрипта salon-migrate"""
    asyncio.run(main())


if __name__ == "__main__":
    run()
