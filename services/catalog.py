"""Каталог услуг: базовые цена и длительность по названию"""

from typing import Dict, Iterable, List, Optional

from config import DEFAULT_DURATION_MINUTES, NO_ADDON_MARKERS
from database.models import Service


def name_allows_removal_addon(service_name: str) -> bool:
    """Правило по подстроке названия: стрижка, массаж, депиляция,
    эпиляция и само снятие (Retiro) не допускают доп. времени на снятие"""
    return not any(marker in service_name for marker in NO_ADDON_MARKERS)


class ServiceCatalog:
    """Справочник услуг, ключ - название"""

    def __init__(self, services: Iterable[Service]):
        self._by_name: Dict[str, Service] = {}
        for service in services:
            if service.is_active:
                self._by_name[service.name] = service

    def get(self, service_name: str) -> Optional[Service]:
        return self._by_name.get(service_name)

    def __contains__(self, service_name: str) -> bool:
        return service_name in self._by_name

    def names(self) -> List[str]:
        """Названия активных услуг по алфавиту"""
        return sorted(self._by_name)

    def lookup_price(self, service_name: str) -> int:
        """Базовая цена; неизвестная услуга -> 0"""
        service = self._by_name.get(service_name)
        return service.price if service else 0

    def lookup_duration(self, service_name: str) -> int:
        """Базовая длительность; неизвестная услуга -> 60 минут"""
        service = self._by_name.get(service_name)
        return service.duration_minutes if service else DEFAULT_DURATION_MINUTES

    def allows_removal_addon(self, service_name: str) -> bool:
        """Явный флаг услуги, если он задан, иначе правило по названию"""
        service = self._by_name.get(service_name)
        if service is not None and service.allows_removal_addon is not None:
            return service.allows_removal_addon
        return name_allows_removal_addon(service_name)
