"""Пакет для версий миграций"""

from database.migrations.versions.v001_initial_schema import InitialSchema
from database.migrations.versions.v002_add_removal_addon_flag import AddRemovalAddonFlag

ALL_MIGRATIONS = [InitialSchema, AddRemovalAddonFlag]

__all__ = ["InitialSchema", "AddRemovalAddonFlag", "ALL_MIGRATIONS"]
