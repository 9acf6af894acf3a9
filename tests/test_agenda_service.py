"""Тесты выборок для агенды и ссылки на календарь"""

from dataclasses import replace
from datetime import date, datetime
from urllib.parse import unquote

import pytest

from database.models import ActorRole, AppointmentStatus, DisplayStatus
from services.agenda_service import AgendaService
from services.conflict_detector import free_slots
from utils.calendar_link import google_calendar_url

TUESDAY = date(2024, 6, 11)


@pytest.fixture
def day_appointments(make_appointment):
    return [
        make_appointment(id=1, time="09:00", duration_minutes=60),
        make_appointment(id=2, time="12:00", duration_minutes=60, status=AppointmentStatus.PENDING),
        make_appointment(id=3, time="10:30", duration_minutes=60),
        make_appointment(id=4, time="15:00", status=AppointmentStatus.CANCELLED),
        make_appointment(id=5, day=TUESDAY, time="09:00"),
        make_appointment(id=6, professional_id=6, time="11:00"),
    ]


class TestAgenda:
    """Дашборд на понедельник 11:00"""

    @pytest.mark.unit
    def test_upcoming_today(self, day_appointments):
        now = datetime(2024, 6, 10, 11, 0)

        upcoming = AgendaService.upcoming_today(day_appointments, now)

        assert [a.id for a in upcoming] == [3, 6, 2]

    @pytest.mark.unit
    def test_recent_history_newest_first(self, day_appointments):
        now = datetime(2024, 6, 10, 11, 0)

        history = AgendaService.recent_history(day_appointments, now)

        assert [a.id for a in history] == [4, 1]

    @pytest.mark.unit
    def test_recent_history_limit(self, make_appointment):
        appointments = [
            make_appointment(id=i, day=date(2024, 6, i), time="10:00") for i in range(1, 16)
        ]

        history = AgendaService.recent_history(appointments, datetime(2024, 6, 20, 8, 0))

        assert len(history) == 10
        assert history[0].id == 15

    @pytest.mark.unit
    def test_counters(self, day_appointments):
        now = datetime(2024, 6, 10, 11, 0)

        assert AgendaService.today_count(day_appointments, now) == 4
        assert AgendaService.future_confirmed_count(day_appointments, now) == 4

    @pytest.mark.unit
    def test_day_agenda_with_display_status(self, day_appointments):
        now = datetime(2024, 6, 10, 11, 0)

        agenda = AgendaService.day_agenda(day_appointments, 5, date(2024, 6, 10), now)

        assert [(a.id, status) for a, status in agenda] == [
            (1, DisplayStatus.FINISHED),
            (3, DisplayStatus.IN_SERVICE),
            (2, DisplayStatus.PENDING),
            (4, DisplayStatus.CANCELLED),
        ]


class TestCalendarLink:
    """Ссылка на Google Calendar"""

    @pytest.mark.unit
    def test_link_contents(self, make_appointment):
        link = google_calendar_url(make_appointment(time="16:30", duration_minutes=90))
        text = unquote(link)

        assert "dates=20240610T163000/20240610T180000" in link
        assert "Cita: Laura Gómez - Cliente: María Pérez" in text
        assert "Precio: $45.000" in text
        assert "Servicio: Semipermanente Manos" in text

    @pytest.mark.unit
    def test_no_date_gives_empty_link(self, make_appointment):
        assert google_calendar_url(make_appointment(day=None)) == ""

    @pytest.mark.unit
    def test_presentation_labels(self, make_appointment):
        appointment = make_appointment(duration_minutes=90)

        assert appointment.duration_label == "1h 30m"
        assert appointment.price_label == "$45.000"


class TestVisibility:
    """Маскирование чужих записей для клиента и история клиента"""

    @pytest.mark.unit
    def test_client_view_keeps_slots_blocked(self, make_appointment):
        others = [
            replace(make_appointment(id=1, time="10:00"), client_id=2),
            replace(make_appointment(id=2, time="12:00", status=AppointmentStatus.CANCELLED), client_id=2),
        ]

        masked = AgendaService.visible_appointments(others, ActorRole.CLIENT, client_id=1)
        slots = free_slots(5, date(2024, 6, 10), ["09:00", "10:00", "11:00", "12:00"], 60, masked)

        assert {a.service for a in masked} == {"Ocupado"}
        assert masked[1].status is AppointmentStatus.CANCELLED
        assert slots == ["09:00", "11:00", "12:00"]

    @pytest.mark.unit
    def test_client_without_profile_sees_everything_masked(self, make_appointment):
        masked = AgendaService.visible_appointments([make_appointment()], ActorRole.CLIENT)

        assert masked[0].client_name == "Reservado"
        assert masked[0].duration_minutes == 60

    @pytest.mark.unit
    def test_client_history_newest_first(self, make_appointment):
        appointments = [
            make_appointment(id=1, day=date(2024, 6, 10), time="16:00"),
            make_appointment(id=2, day=date(2024, 6, 12), time="09:00"),
            make_appointment(id=3, day=date(2024, 6, 10), time="09:00"),
            replace(make_appointment(id=4, day=date(2024, 6, 20)), client_id=2),
        ]

        history = AgendaService.client_history(appointments, 1)

        assert [a.id for a in history] == [2, 1, 3]
