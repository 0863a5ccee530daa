#!/usr/bin/env python3
# entrypoint_web_client.py
"""
Точка входа для запуска Web Client в Docker контейнере.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

# Добавляем корневую директорию проекта в путь
project_root = Path(__file__).parent.parent.resolve()
sys.path.insert(0, str(project_root))

from main import run_web_client
from src.common.logger import setup_logging


if __name__ == "__main__":
    instance_id = os.getenv("WEB_CLIENT_INSTANCE_ID", "0")
    print(f"🌐 Запуск Web Client instance #{instance_id}")
    setup_logging()
    run_web_client()
