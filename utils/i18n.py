"""Подписи для отображения (i18n)

Переводы лежат в locales/<код>.json. Ключи вложенные: "status.pending",
"errors.slot_taken". Если ключа нет в запрошенной локали, берётся локаль
салона; если нет и там, возвращается сам ключ.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from config import DEFAULT_LOCALE

LOCALES_DIR = Path(__file__).parent.parent / "locales"

# Ключи days.* по индексу date.weekday()
WEEKDAY_KEYS = [
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
]


class I18n:
    """Синглтон с загруженными переводами"""

    _instance: Optional["I18n"] = None

    def __new__(cls):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance.translations = instance._load(LOCALES_DIR)
            cls._instance = instance
        return cls._instance

    @staticmethod
    def _load(directory: Path) -> Dict[str, dict]:
        translations = {}
        for locale_file in sorted(directory.glob("*.json")):
            try:
                with open(locale_file, "r", encoding="utf-8") as f:
                    translations[locale_file.stem] = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logging.error(f"Error loading translations from {locale_file.name}: {e}")
                continue
            logging.debug(f"Loaded translations for locale: {locale_file.stem}")
        return translations

    @property
    def locales(self) -> List[str]:
        return list(self.translations)

    def _lookup(self, locale: str, key: str) -> Optional[str]:
        node = self.translations.get(locale)
        for part in key.split("."):
            if not isinstance(node, dict):
                return None
            node = node.get(part)
        return node if isinstance(node, str) else None

    def get(self, key: str, locale: str = DEFAULT_LOCALE, **kwargs) -> str:
        """Перевод по ключу с подстановкой параметров

        Args:
            key: Ключ в формате "section.key"
            locale: Код языка (es, en)
            **kwargs: Параметры для str.format
        """
        value = self._lookup(locale, key)
        if value is None and locale != DEFAULT_LOCALE:
            value = self._lookup(DEFAULT_LOCALE, key)
        if value is None:
            logging.warning(f"Translation key not found: {key} ({locale})")
            return key

        if not kwargs:
            return value
        try:
            return value.format(**kwargs)
        except KeyError as e:
            logging.warning(f"Missing formatting parameter {e} for key {key}")
            return value


i18n = I18n()


def t(key: str, locale: str = DEFAULT_LOCALE, **kwargs) -> str:
    """Короткий алиас: t("status.in_service") -> "En Servicio" """
    return i18n.get(key, locale, **kwargs)


def weekday_names(locale: str = DEFAULT_LOCALE) -> List[str]:
    """Названия дней недели с понедельника: weekday_names("es")[0] -> "Lunes" """
    return [t(f"days.{key}", locale) for key in WEEKDAY_KEYS]
