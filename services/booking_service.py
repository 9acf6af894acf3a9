"""Сервис управления бронированием"""

import logging
from datetime import date, datetime
from typing import List, Optional

from config import CLIENT_MIN_LEAD_MINUTES, STAFF_MIN_LEAD_MINUTES
from database.models import (
    Actor,
    ActorRole,
    AddOn,
    Appointment,
    AppointmentStatus,
    BookingRequest,
    Client,
    DisplayStatus,
    Professional,
)
from database.queries import Database
from services.agenda_service import AgendaService
from services.catalog import ServiceCatalog
from services.conflict_detector import free_slots, is_slot_occupied
from services.exceptions import (
    AppointmentNotFoundError,
    BookingError,
    IdentityConflictError,
    PersistenceError,
    SlotConflictError,
    StatusTransitionError,
    ValidationError,
)
from services.pricing import PriceDurationCalculator
from services.schedule_resolver import ScheduleResolver
from services.status_machine import can_erase, display_status, ensure_transition
from utils.calendar_link import google_calendar_url
from utils.datetime_utils import is_valid_time, now_local
from utils.helpers import avatar_url, is_valid_email, is_valid_phone, normalize_phone


def min_lead_minutes(actor: Actor) -> int:
    """Запас до ближайшего слота сегодня: клиенту 30 минут, персоналу 0"""
    return STAFF_MIN_LEAD_MINUTES if actor.role.is_staff else CLIENT_MIN_LEAD_MINUTES


def parse_add_on(value) -> Optional[AddOn]:
    """AddOn из значения формы; None, если значение неизвестно"""
    try:
        return AddOn.from_value(value)
    except ValueError:
        return None


class BookingService:
    """Сервис для работы с бронированием

    store - хранилище с корутинами list_*/create_*/update_appointment_status/
    delete_appointment (по умолчанию SQLite-хранилище Database).
    """

    def __init__(self, store=Database, resolver: Optional[ScheduleResolver] = None):
        self.store = store
        self.resolver = resolver or ScheduleResolver()

    async def _catalog(self) -> ServiceCatalog:
        return ServiceCatalog(await self.store.list_services())

    async def _find_professional(self, professional_id: Optional[int]) -> Optional[Professional]:
        if professional_id is None:
            return None
        for professional in await self.store.list_professionals():
            if professional.id == professional_id:
                return professional
        return None

    # === ДОСТУПНОСТЬ ===

    async def professionals_for_service(self, service_name: Optional[str]) -> List[Professional]:
        """Мастера, у которых услуга в специализациях (без услуги - все)"""
        professionals = await self.store.list_professionals()
        if not service_name:
            return professionals
        return [p for p in professionals if p.offers(service_name)]

    async def available_days(
        self, professional_id: int, today: Optional[date] = None
    ) -> List[date]:
        professional = await self._find_professional(professional_id)
        if professional is None:
            return []
        today = today or now_local().date()
        return self.resolver.available_days(professional.schedule, today)

    async def available_slots(
        self,
        professional_id: int,
        day: date,
        service_name: str,
        add_on: AddOn = AddOn.NONE,
        actor: Optional[Actor] = None,
        now: Optional[datetime] = None,
    ) -> List[str]:
        """Свободные слоты на день: расписание мастера минус занятые интервалы"""
        professional = await self._find_professional(professional_id)
        if professional is None:
            return []

        parsed_add_on = parse_add_on(add_on)
        if parsed_add_on is None:
            raise ValidationError(["add_on"])

        actor = actor or Actor(ActorRole.CLIENT)
        now = now or now_local()
        calculator = PriceDurationCalculator(await self._catalog())
        duration = calculator.compute_duration(service_name, parsed_add_on)

        slots = self.resolver.time_slots(
            professional.schedule, day, duration, now, min_lead_minutes(actor)
        )
        appointments = await self.store.list_appointments()
        return free_slots(professional_id, day, slots, duration, appointments)

    # === СОЗДАНИЕ ЗАПИСИ ===

    async def create_appointment(self, request: BookingRequest, actor: Actor) -> Appointment:
        """Проверить данные, разрешить клиента и создать запись

        Raises:
            ValidationError: не заполнены/неверны обязательные поля
            SlotConflictError: слот уже занят
            IdentityConflictError: email принадлежит другому клиенту
            PersistenceError: сбой хранилища
        """
        # Клиент бронирует сам за себя: контакты берутся из профиля
        if actor.role is ActorRole.CLIENT and actor.profile is not None:
            client_name = actor.profile.name or request.client_name
            client_phone = actor.profile.phone or request.client_phone
            client_email = actor.profile.email or request.client_email
        else:
            client_name = request.client_name
            client_phone = request.client_phone
            client_email = request.client_email

        client_name = (client_name or "").strip()
        client_phone = normalize_phone(client_phone)
        client_email = (client_email or "").strip()

        # 1. Валидация
        catalog = await self._catalog()
        professional = await self._find_professional(request.professional_id)

        invalid = []
        if not request.service or request.service not in catalog:
            invalid.append("service")
        if professional is None or (request.service and not professional.offers(request.service)):
            invalid.append("professional")
        if request.date is None:
            invalid.append("date")
        if not is_valid_time(request.time or ""):
            invalid.append("time")
        if not is_valid_phone(client_phone):
            invalid.append("client_phone")
        if not client_name:
            invalid.append("client_name")
        if not is_valid_email(client_email):
            invalid.append("client_email")
        add_on = parse_add_on(request.add_on)
        if add_on is None:
            invalid.append("add_on")

        if invalid:
            logging.warning(f"Booking rejected, invalid fields: {invalid}")
            raise ValidationError(invalid)

        calculator = PriceDurationCalculator(catalog)
        duration = calculator.compute_duration(request.service, add_on)

        # 2. Финальная проверка слота (список слотов в UI мог устареть)
        appointments = await self._read(self.store.list_appointments)
        if is_slot_occupied(professional.id, request.date, request.time, duration, appointments):
            logging.info(
                f"Slot {request.date} {request.time} taken for professional {professional.id}"
            )
            raise SlotConflictError(request.time, professional.name)

        # 3. Идентификация клиента: телефон - главный ключ
        client = await self._resolve_client(client_name, client_phone, client_email)

        # 4-5. Цена, длительность, название и статус
        status = AppointmentStatus.CONFIRMED if actor.role.is_staff else AppointmentStatus.PENDING
        appointment = Appointment(
            id=None,
            client_id=client.id,
            client_name=client.name,
            service=calculator.service_label(request.service, add_on),
            date=request.date,
            time=request.time,
            duration_minutes=duration,
            price=calculator.compute_total_price(request.service, add_on),
            professional_id=professional.id,
            professional_name=professional.name,
            status=status,
            avatar=client.avatar,
        )

        # 6. Сохранение
        try:
            created = await self.store.create_appointment(appointment)
        except BookingError:
            raise
        except Exception as e:
            logging.error(f"Error in create_appointment: {e}")
            raise PersistenceError() from e

        logging.info(
            f"Appointment {created.id} booked by {actor.role.value}: "
            f"{created.date} {created.time} with {created.professional_name} ({created.status.value})"
        )
        return created

    async def _resolve_client(self, name: str, phone: str, email: str) -> Client:
        clients = await self._read(self.store.list_clients)

        by_phone = next((c for c in clients if c.phone == phone), None)
        if by_phone is not None:
            return by_phone

        email_key = email.casefold()
        by_email = next((c for c in clients if (c.email or "").casefold() == email_key), None)
        if by_email is not None:
            logging.warning(f"Email {email} already belongs to client {by_email.id}")
            raise IdentityConflictError(by_email.name)

        new_client = Client(id=None, name=name, phone=phone, email=email, avatar=avatar_url(name))
        try:
            return await self.store.create_client(new_client)
        except BookingError:
            raise
        except Exception as e:
            logging.error(f"Error creating client {phone}: {e}")
            raise PersistenceError() from e

    async def _read(self, loader):
        try:
            return await loader()
        except Exception as e:
            logging.error(f"Error reading from store: {e}")
            raise PersistenceError() from e

    # === СТАТУСЫ ===

    async def get_appointment(self, appointment_id: int) -> Appointment:
        appointment = await self.store.get_appointment(appointment_id)
        if appointment is None:
            raise AppointmentNotFoundError(appointment_id)
        return appointment

    async def change_status(self, appointment_id: int, target: AppointmentStatus) -> Appointment:
        """Разрешённые переходы: pending <-> confirmed, {pending, confirmed} -> cancelled"""
        appointment = await self.get_appointment(appointment_id)
        ensure_transition(appointment.status, target)
        await self.store.update_appointment_status(appointment_id, target)
        logging.info(
            f"Appointment {appointment_id}: {appointment.status.value} -> {target.value}"
        )
        appointment.status = target
        return appointment

    async def confirm(self, appointment_id: int) -> Appointment:
        return await self.change_status(appointment_id, AppointmentStatus.CONFIRMED)

    async def revert_to_pending(self, appointment_id: int) -> Appointment:
        return await self.change_status(appointment_id, AppointmentStatus.PENDING)

    async def cancel(self, appointment_id: int) -> Appointment:
        return await self.change_status(appointment_id, AppointmentStatus.CANCELLED)

    async def erase(self, appointment_id: int, force: bool = False) -> bool:
        """Физическое удаление: только отменённые записи, либо force от персонала"""
        appointment = await self.get_appointment(appointment_id)
        if not can_erase(appointment, force):
            raise StatusTransitionError(appointment.status.value, "deleted")
        deleted = await self.store.delete_appointment(appointment_id)
        logging.info(f"Appointment {appointment_id} erased (force={force})")
        return bool(deleted)

    # === ОТОБРАЖЕНИЕ ===

    async def visible_appointments(
        self,
        actor: Actor,
        client_id: Optional[int] = None,
        professional_id: Optional[int] = None,
    ) -> List[Appointment]:
        """Записи в том виде, в каком их видит actor (чужие для клиента замаскированы)"""
        appointments = await self._read(self.store.list_appointments)
        return AgendaService.visible_appointments(
            appointments, actor.role, client_id=client_id, professional_id=professional_id
        )

    async def client_history(self, client_id: int) -> List[Appointment]:
        """История записей клиента, новые первыми"""
        appointments = await self._read(lambda: self.store.list_client_appointments(client_id))
        return AgendaService.client_history(appointments, client_id)


    @staticmethod
    def display_status(appointment: Appointment, now: Optional[datetime] = None) -> DisplayStatus:
        return display_status(appointment, now or now_local())

    @staticmethod
    def calendar_link(appointment: Appointment) -> str:
        return google_calendar_url(appointment)
