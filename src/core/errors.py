# src/core/errors.py
"""
Доменные ошибки.
Бросаются сервисами и переводятся в HTTP статусы на уровне API.
"""


class PlacesError(Exception):
    """Базовая доменная ошибка."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(PlacesError):
    """Некорректные входные данные."""

    status_code = 400


class NotFoundError(PlacesError):
    """Сущность не найдена."""

    status_code = 404


class ConflictError(PlacesError):
    """Операция противоречит текущему состоянию."""

    status_code = 409
