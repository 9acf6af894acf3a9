"""Ссылка "Добавить в Google Calendar" для готовой записи"""

from urllib.parse import quote

from config import SALON_LOCATION, SALON_NAME
from database.models import Appointment
from utils.i18n import t

GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/render"


def _format_google_date(value) -> str:
    # Локальное время без "Z": календарь подставит зону пользователя
    return value.strftime("%Y%m%dT%H%M%S")


def google_calendar_url(appointment: Appointment) -> str:
    """URL шаблона события; пустая строка, если у записи нет даты или времени"""
    if appointment.date is None or not appointment.time:
        return ""

    start = _format_google_date(appointment.start)
    end = _format_google_date(appointment.end)
    professional = appointment.professional_name or t("calendar.default_professional")

    title = t("calendar.title", professional=professional, client=appointment.client_name)
    details = t(
        "calendar.details",
        service=appointment.service,
        client=appointment.client_name,
        professional=appointment.professional_name or t("calendar.unassigned"),
        price=appointment.price_label,
        salon=SALON_NAME,
    )

    return (
        f"{GOOGLE_CALENDAR_URL}?action=TEMPLATE"
        f"&text={quote(title)}"
        f"&dates={start}/{end}"
        f"&details={quote(details)}"
        f"&location={quote(SALON_LOCATION)}"
    )
