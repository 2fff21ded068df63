from __future__ import annotations

import logging

from dotenv import load_dotenv

from .config import get_settings_module, load_settings
from .container import Container, build_container
from .core.logging import setup_logging

logger = logging.getLogger(__name__)


def create_container() -> Container:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = load_settings(settings_module)
    setup_logging(settings.log_level)

    db = settings.db_config
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db.get("user"),
        db.get("host"),
        db.get("port", 3306),
        db.get("database"),
    )
    return build_container(db_config=db, settings=settings)


def create_engine():
    return create_container().engine
