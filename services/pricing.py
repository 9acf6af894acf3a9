"""Расчёт цены и длительности с учётом снятия покрытия"""

from typing import Union

from config import DEFAULT_LOCALE, REMOVAL_EXTRA_MINUTES
from database.models import AddOn
from services.catalog import ServiceCatalog
from utils.i18n import t

AddOnLike = Union[AddOn, str, None]


class PriceDurationCalculator:
    """Цена = база + надбавка за снятие; длительность = база + 30 мин,
    если услуга допускает снятие"""

    def __init__(self, catalog: ServiceCatalog):
        self.catalog = catalog

    def compute_duration(self, service_name: str, add_on: AddOnLike = AddOn.NONE) -> int:
        add_on = AddOn.from_value(add_on)
        minutes = self.catalog.lookup_duration(service_name)
        if add_on is not AddOn.NONE and self.catalog.allows_removal_addon(service_name):
            minutes += REMOVAL_EXTRA_MINUTES
        return minutes

    def compute_total_price(self, service_name: str, add_on: AddOnLike = AddOn.NONE) -> int:
        add_on = AddOn.from_value(add_on)
        return self.catalog.lookup_price(service_name) + add_on.surcharge

    def service_label(self, service_name: str, add_on: AddOnLike = AddOn.NONE) -> str:
        """Название для записи: "Semipermanente Manos + Retiro Semi" """
        add_on = AddOn.from_value(add_on)
        if add_on is AddOn.NONE:
            return service_name
        # Название хранится в записи, поэтому всегда в локали салона
        addon_label = t(f"addon.{add_on.value}", DEFAULT_LOCALE)
        return t("addon.suffix", DEFAULT_LOCALE, label=service_name, addon=addon_label)
