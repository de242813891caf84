from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.logging_utils import configure_logging
from .container import build_container, build_kv_store
from .settings import get_settings_module
from .statistics.controller import register as register_statistics
from .sync.controller import register as register_sync
from .workers.controller import register as register_workers

logger = logging.getLogger(__name__)

SETTING_NAMES = (
    "SECRET_KEY",
    "DEBUG",
    "TESTING",
    "STORAGE_BACKEND",
    "STORAGE_PATH",
    "LOG_LEVEL",
    "LOG_FILE",
    "SEED_DEFAULT_WORKERS",
)


def load_settings(overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    values = {name: getattr(settings, name, None) for name in SETTING_NAMES}
    values["SETTINGS_MODULE"] = settings_module
    values.update(overrides or {})
    return values


def create_app(overrides: Optional[dict[str, Any]] = None, *, container=None) -> Flask:
    load_dotenv(override=False)
    settings = load_settings(overrides)

    # pytest captures output itself
    if not settings.get("TESTING"):
        configure_logging(settings.get("LOG_LEVEL") or "INFO", settings.get("LOG_FILE") or None)

    app = Flask(__name__)
    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings.get("DEBUG"))
    app.config["TESTING"] = bool(settings.get("TESTING"))

    if container is None:
        kv_store = build_kv_store(
            backend=str(settings.get("STORAGE_BACKEND") or "sqlite"),
            path=str(settings.get("STORAGE_PATH") or ""),
        )
        container = build_container(
            kv_store=kv_store,
            seed_default_workers=bool(settings.get("SEED_DEFAULT_WORKERS", True)),
        )
    app.extensions["timesheet"] = container

    logger.info(
        "settings=%s storage=%s %s",
        settings["SETTINGS_MODULE"],
        settings.get("STORAGE_BACKEND"),
        settings.get("STORAGE_PATH") or "",
    )

    register_workers(app, container)
    register_attendance(app, container)
    register_statistics(app, container)
    register_sync(app, container)

    return app
