"""Ошибки предметной области, общие для студентов и преподавателей.

Все ожидаемые ошибки наследуются от ``RegistryError``; HTTP-слой
сопоставляет каждому классу свой статус. Всё остальное считается
внутренней ошибкой.
"""


class RegistryError(Exception):
    message = "Registry error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(RegistryError):
    """Некорректный ввод. Содержит список всех нарушенных полей."""

    message = "Validation failed"

    def __init__(self, errors: list[dict], message: str | None = None):
        self.errors = errors
        super().__init__(message)


class ConflictError(RegistryError):
    message = "User already exists"


class NotFound(RegistryError):
    message = "Record not found"


class NotFoundEmpty(NotFound):
    message = "No records found"


class InternalError(RegistryError):
    message = "An error occurred while processing your request."
