"""Ошибки бронирования

Каждая ошибка несёт машинный код (как коды "slot_taken" и т.п. в ответах
сервиса) и человекочитаемое сообщение из локали.
"""

from typing import Iterable, Optional

from utils.i18n import t


class BookingError(Exception):
    """Базовая ошибка движка бронирования"""

    code = "booking_error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.code)
        self.message = message or self.code


class ValidationError(BookingError):
    """Не заполнены или неверны обязательные поля"""

    code = "validation_error"

    def __init__(self, fields: Iterable[str]):
        self.fields = list(fields)
        super().__init__(t("errors.validation_error", fields=", ".join(self.fields)))


class SlotConflictError(BookingError):
    """Слот уже занят (устаревший список слотов или гонка)"""

    code = "slot_taken"

    def __init__(self, time: str, professional_name: str):
        self.time = time
        self.professional_name = professional_name
        super().__init__(
            t("errors.slot_taken", time=time, professional=professional_name)
        )


class IdentityConflictError(BookingError):
    """Email уже принадлежит другому клиенту"""

    code = "identity_conflict"

    def __init__(self, owner_name: str):
        self.owner_name = owner_name
        super().__init__(t("errors.identity_conflict", owner=owner_name))


class PersistenceError(BookingError):
    """Сбой хранилища; частичный результат не гарантированно откатан"""

    code = "persistence_error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or t("errors.persistence_error"))


class StatusTransitionError(BookingError):
    """Недопустимый переход хранимого статуса"""

    code = "invalid_transition"

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(t("errors.invalid_transition", current=current, target=target))


class AppointmentNotFoundError(BookingError):
    code = "not_found"

    def __init__(self, appointment_id: int):
        self.appointment_id = appointment_id
        super().__init__(t("errors.not_found", appointment_id=appointment_id))
