"""Тесты для проверки пересечений слотов"""

from datetime import date, datetime

import pytest

from database.models import AppointmentStatus
from services.conflict_detector import find_conflicts, free_slots, is_slot_occupied


class TestIsSlotOccupied:
    """Интервалы [start, end) одного мастера в один день"""

    @pytest.mark.unit
    def test_overlap_inside_existing(self, make_appointment, monday):
        """Запись 10:00-11:00, кандидат 10:30 на 30 минут -> занято"""
        existing = [make_appointment(time="10:00", duration_minutes=60)]

        assert is_slot_occupied(5, monday, "10:30", 30, existing) is True

    @pytest.mark.unit
    def test_touching_end_is_free(self, make_appointment, monday):
        """Кандидат 11:00 сразу после записи 10:00-11:00 -> свободно"""
        existing = [make_appointment(time="10:00", duration_minutes=60)]

        assert is_slot_occupied(5, monday, "11:00", 30, existing) is False

    @pytest.mark.unit
    def test_touching_start_is_free(self, make_appointment, monday):
        existing = [make_appointment(time="10:00", duration_minutes=60)]

        assert is_slot_occupied(5, monday, "09:00", 60, existing) is False

    @pytest.mark.unit
    def test_candidate_containing_existing(self, make_appointment, monday):
        existing = [make_appointment(time="10:30", duration_minutes=30)]

        assert is_slot_occupied(5, monday, "10:00", 120, existing) is True

    @pytest.mark.unit
    def test_existing_containing_candidate(self, make_appointment, monday):
        existing = [make_appointment(time="09:00", duration_minutes=180)]

        assert is_slot_occupied(5, monday, "10:00", 30, existing) is True

    @pytest.mark.unit
    def test_cancelled_is_ignored(self, make_appointment, monday):
        existing = [make_appointment(status=AppointmentStatus.CANCELLED)]

        assert is_slot_occupied(5, monday, "10:00", 60, existing) is False

    @pytest.mark.unit
    def test_pending_blocks_slot(self, make_appointment, monday):
        existing = [make_appointment(status=AppointmentStatus.PENDING)]

        assert is_slot_occupied(5, monday, "10:00", 60, existing) is True

    @pytest.mark.unit
    def test_other_professional_is_ignored(self, make_appointment, monday):
        existing = [make_appointment(professional_id=6)]

        assert is_slot_occupied(5, monday, "10:00", 60, existing) is False

    @pytest.mark.unit
    def test_other_day_is_ignored(self, make_appointment, monday):
        existing = [make_appointment(day=date(2024, 6, 11))]

        assert is_slot_occupied(5, monday, "10:00", 60, existing) is False

    @pytest.mark.unit
    def test_date_with_time_component_is_normalized(self, make_appointment):
        existing = [make_appointment(time="10:00")]

        assert is_slot_occupied(5, datetime(2024, 6, 10, 23, 59), "10:15", 30, existing) is True
        assert is_slot_occupied(5, "2024-06-10", "10:15", 30, existing) is True

    @pytest.mark.unit
    def test_appointment_without_date_is_ignored(self, make_appointment, monday):
        existing = [make_appointment(day=None)]

        assert is_slot_occupied(5, monday, "10:00", 60, existing) is False

    @pytest.mark.unit
    def test_no_appointments(self, monday):
        assert is_slot_occupied(5, monday, "10:00", 60, []) is False


class TestFreeSlots:
    """Фильтрация списка слотов"""

    @pytest.mark.unit
    def test_find_conflicts_returns_overlapping(self, make_appointment, monday):
        first = make_appointment(id=1, time="10:00", duration_minutes=60)
        second = make_appointment(id=2, time="11:00", duration_minutes=60)
        third = make_appointment(id=3, time="14:00", duration_minutes=60)

        conflicts = find_conflicts(5, monday, "10:30", 60, [first, second, third])

        assert [a.id for a in conflicts] == [1, 2]

    @pytest.mark.unit
    def test_free_slots_keeps_order(self, make_appointment, monday):
        existing = [make_appointment(time="10:00", duration_minutes=60)]
        slots = ["09:00", "09:30", "10:00", "10:30", "11:00", "11:30"]

        assert free_slots(5, monday, slots, 60, existing) == ["09:00", "11:00", "11:30"]
