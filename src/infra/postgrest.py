# src/infra/postgrest.py
"""
Клиент REST API Supabase (PostgREST).
Обёртка над postgrest (supabase-py): фильтры, retry при сетевых ошибках, единый PostgrestError.
"""

from __future__ import annotations

import asyncio
from functools import wraps
from typing import Any, Callable, TypeVar

import httpx
from postgrest import APIError, AsyncPostgrestClient, CountMethod

from src.common.constants import PGRST_NO_ROWS, TypeMsg
from src.common.logger import get_logger, log_error, log_info

logger = get_logger("postgrest")

T = TypeVar("T")

Filters = dict[str, str]


class PostgrestError(Exception):
    """Ошибка, возвращённая PostgREST (или сетевая ошибка при обращении к нему)."""

    def __init__(
        self,
        message: str,
        *,
        status: int = 0,
        code: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.details = details

    @property
    def is_no_rows(self) -> bool:
        """Запрос одной строки не нашёл ни одной."""
        return self.code == PGRST_NO_ROWS

    def __repr__(self) -> str:
        return f"PostgrestError(status={self.status}, code={self.code!r}, message={self.message!r})"


def eq(value: Any) -> str:
    """Фильтр равенства PostgREST: {"telegram_id": eq(123)}."""
    if isinstance(value, bool):
        value = str(value).lower()
    return f"eq.{value}"


def retry_on_transport_error(
    max_attempts: int = 3,
    delay: float = 0.5,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Декоратор для ретрая при сетевых ошибках (соединение, таймаут).
    Ответы PostgREST с кодом ошибки не повторяются.

    Args:
        max_attempts: Максимальное количество попыток
        delay: Базовая задержка между попытками (секунды)
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            last_error: Exception | None = None

            for attempt in range(1, max_attempts + 1):
                try:
                    return await func(*args, **kwargs)
                except httpx.TransportError as e:
                    last_error = e
                    if attempt < max_attempts:
                        await log_info(
                            f"Ошибка соединения с PostgREST (попытка {attempt}/{max_attempts}): {e}",
                            type_msg=TypeMsg.WARNING,
                        )
                        await asyncio.sleep(delay * attempt)
                    else:
                        await log_error(f"PostgREST недоступен после {max_attempts} попыток: {e}")

            raise PostgrestError(f"PostgREST недоступен: {last_error}") from last_error

        return wrapper  # type: ignore

    return decorator


class PostgrestClient:
    """
    Клиент PostgREST поверх AsyncPostgrestClient (supabase-py).

    Запросы строятся билдером postgrest, HTTP идёт через общий httpx.AsyncClient.
    Каждая операция возвращает данные ответа или бросает PostgrestError.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        send_api_key: bool = True,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: URL REST API (…/rest/v1)
            api_key: Anon-ключ Supabase
            send_api_key: Отправлять ли apikey/Authorization (не нужно локальному PostgREST)
            timeout: Таймаут запросов (секунды)
            transport: Подменный транспорт (для тестов)
        """
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if send_api_key:
            headers["apikey"] = api_key
            headers["Authorization"] = f"Bearer {api_key}"

        self._base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )
        self._rest = AsyncPostgrestClient(self._base_url, headers=headers, http_client=self._http)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def close(self) -> None:
        """Закрывает HTTP клиент."""
        await self._http.aclose()

    # -------------------------------------------------------------------------
    # Выполнение запросов
    # -------------------------------------------------------------------------

    @retry_on_transport_error()
    async def _execute(self, query: Any) -> Any:
        try:
            return await query.execute()
        except APIError as e:
            raise PostgrestError(
                e.message or "PostgREST error",
                code=e.code,
                details=e.details,
            ) from e

    @staticmethod
    def _apply_filters(query: Any, filters: Filters | None) -> Any:
        """Фильтры вида {"user_id": "eq.5"} переводятся в filter(column, op, value)."""
        for column, expression in (filters or {}).items():
            operator, _, criteria = expression.partition(".")
            query = query.filter(column, operator, criteria)
        return query

    @staticmethod
    def _no_rows(table: str) -> PostgrestError:
        return PostgrestError(f"В таблице {table} нет подходящей строки", code=PGRST_NO_ROWS)

    # -------------------------------------------------------------------------
    # Операции
    # -------------------------------------------------------------------------

    async def select(
        self,
        table: str,
        *,
        columns: str = "*",
        filters: Filters | None = None,
        order: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        Выборка строк.

        Args:
            table: Таблица
            columns: Колонки и вложенные ресурсы (синтаксис select PostgREST)
            filters: Фильтры вида {"user_id": "eq.5"}
            order: Сортировка, например "created_at.desc"
            limit: Максимум строк
        """
        query = self._apply_filters(self._rest.from_(table).select(columns), filters)
        if order:
            column, _, direction = order.partition(".")
            query = query.order(column, desc=direction == "desc")
        if limit is not None:
            query = query.limit(limit)
        response = await self._execute(query)
        return response.data

    async def select_one(
        self,
        table: str,
        *,
        columns: str = "*",
        filters: Filters | None = None,
    ) -> dict[str, Any]:
        """
        Выборка ровно одной строки.

        Raises:
            PostgrestError: code PGRST116, если строк нет (или больше одной)
        """
        query = self._apply_filters(self._rest.from_(table).select(columns), filters)
        response = await self._execute(query.single())
        return response.data

    async def _reselect(self, table: str, row: dict[str, Any], columns: str) -> dict[str, Any]:
        """Перечитывает записанную строку с вложенными ресурсами."""
        if columns == "*":
            return row
        return await self.select_one(table, columns=columns, filters={"id": eq(row["id"])})

    async def insert(
        self,
        table: str,
        row: dict[str, Any],
        *,
        columns: str = "*",
    ) -> dict[str, Any]:
        """Вставляет строку и возвращает её представление."""
        response = await self._execute(self._rest.from_(table).insert(row))
        if not response.data:
            raise self._no_rows(table)
        return await self._reselect(table, response.data[0], columns)

    async def update(
        self,
        table: str,
        values: dict[str, Any],
        *,
        filters: Filters,
        columns: str = "*",
    ) -> dict[str, Any]:
        """
        Обновляет одну строку по фильтру и возвращает её.

        Raises:
            PostgrestError: code PGRST116, если строка не найдена
        """
        query = self._apply_filters(self._rest.from_(table).update(values), filters)
        response = await self._execute(query)
        if not response.data:
            raise self._no_rows(table)
        return await self._reselect(table, response.data[0], columns)

    async def upsert(
        self,
        table: str,
        row: dict[str, Any],
        *,
        on_conflict: str,
        columns: str = "*",
    ) -> dict[str, Any]:
        """Вставка с объединением дубликатов по колонкам on_conflict."""
        response = await self._execute(self._rest.from_(table).upsert(row, on_conflict=on_conflict))
        if not response.data:
            raise self._no_rows(table)
        return await self._reselect(table, response.data[0], columns)

    async def delete(self, table: str, *, filters: Filters) -> None:
        """Удаляет строки по фильтру."""
        await self._execute(self._apply_filters(self._rest.from_(table).delete(), filters))

    async def count(self, table: str, *, filters: Filters | None = None) -> int:
        """Точное количество строк по фильтру (HEAD + Content-Range)."""
        query = self._rest.from_(table).select("id", count=CountMethod.exact, head=True)
        response = await self._execute(self._apply_filters(query, filters))
        return response.count or 0

    async def health_check(self) -> bool:
        """
        Проверяет доступность PostgREST.

        Returns:
            True если сервис отвечает
        """
        try:
            response = await self._http.get("/")
            return response.status_code < 500
        except httpx.HTTPError as e:
            await log_error(f"Health check PostgREST failed: {e}")
            return False


# Глобальный экземпляр
_postgrest: PostgrestClient | None = None


def get_postgrest() -> PostgrestClient:
    """
    Возвращает глобальный клиент PostgREST.

    Raises:
        RuntimeError: Если клиент не инициализирован
    """
    if _postgrest is None:
        raise RuntimeError("PostgREST клиент не инициализирован. Вызовите init_postgrest() сначала.")
    return _postgrest


async def init_postgrest() -> PostgrestClient:
    """
    Создаёт глобальный клиент по настройкам Supabase.
    При отсутствии SUPABASE_URL/SUPABASE_ANON_KEY используется локальный прокси.
    """
    global _postgrest
    if _postgrest is not None:
        return _postgrest

    from src.config import settings

    cfg = settings.supabase
    _postgrest = PostgrestClient(
        cfg.rest_url,
        cfg.key,
        send_api_key=cfg.send_api_key,
        timeout=cfg.REQUEST_TIMEOUT,
    )
    await log_info(
        f"PostgREST клиент создан: {cfg.url[:30]}... (локальный прокси: {cfg.using_fallback})",
        type_msg=TypeMsg.INFO,
    )
    return _postgrest


async def close_postgrest() -> None:
    """Закрывает глобальный клиент PostgREST."""
    global _postgrest
    if _postgrest is not None:
        await _postgrest.close()
        _postgrest = None
        await log_info("PostgREST клиент закрыт", type_msg=TypeMsg.INFO)
