# src/services/places_api/__init__.py
"""
HTTP API мест для Telegram Mini App.
"""
