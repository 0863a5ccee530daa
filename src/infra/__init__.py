# src/infra/__init__.py
"""
Инфраструктурный слой.
Доступ к хранилищу Supabase через PostgREST.
"""

from src.infra.postgrest import (
    PostgrestClient,
    PostgrestError,
    close_postgrest,
    eq,
    get_postgrest,
    init_postgrest,
)

__all__ = [
    "PostgrestClient",
    "PostgrestError",
    "eq",
    "get_postgrest",
    "init_postgrest",
    "close_postgrest",
]
