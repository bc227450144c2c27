from __future__ import annotations

import logging

from fastapi import FastAPI

from .core.config import settings
from .core.loader import load_status_config
from .core.log import configure_logging
from .server import SpaceApiServerBuilder

logger = logging.getLogger(__name__)


def build_app() -> FastAPI:
    configure_logging(settings.log_level, settings.log_file)
    logger.info("Starting %s (store=%s)", settings.app_name, settings.store_backend)

    cfg = load_status_config(settings.status_path)

    builder = (
        SpaceApiServerBuilder(cfg.status, title=settings.app_name)
        .pool(settings.store_pool_size, settings.store_pool_timeout_seconds)
    )
    if settings.store_backend == "redis":
        builder.redis_url(settings.redis_url)
    else:
        builder.sqlite_path(settings.sqlite_path)
    for spec in cfg.registry:
        builder.add_sensor(spec.template, spec.data_key)
    for modifier in cfg.modifiers:
        builder.add_status_modifier(modifier)
    return builder.build()


app = build_app()


def run() -> None:
    import uvicorn

    logger.info("Listening on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=int(settings.port), log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
