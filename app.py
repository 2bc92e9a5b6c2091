#!/usr/bin/env python3
"""
Main entry point for the shortlinks service.

Concurrency: requests are served concurrently via async I/O (FastAPI +
asyncpg connection pool). Set WORKERS > 1 for multi-process scaling; each
worker opens its own pool.

Usage:
    python app.py

Environment variables:
    DATABASE_URL - PostgreSQL connection URL
    CREATE_TABLES - Set to 'true' to create/migrate the links table at startup
    BASE_URL - Origin used to build short URLs
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortlinks.database.postgres import PostgresLinkStore
from shortlinks.service import LinkService
from shortlinks.shortcode import ShortCodeGenerator
from shortlinks.common.logging_config import setup_logging
from web_app import create_app


def build_service(config: Config, logger) -> LinkService:
    """Wire storage, generator and service from configuration."""
    db = PostgresLinkStore(
        db_config=config.database_url,
        pool_max_size=config.db_pool_max_size,
        connection_timeout_seconds=config.db_timeout_seconds,
        logger=logger.getChild("database"),
    )
    generator = ShortCodeGenerator(default_length=config.short_code_length)
    return LinkService(
        db=db,
        base_url=config.base_url,
        short_code_generator=generator,
        logger=logger.getChild("service"),
        max_collision_retries=config.max_collision_retries,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open storage at startup and close it at shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting shortlinks service...")

    service = build_service(config, logger)

    if config.create_tables:
        await service.db.ensure_schema()
    await service.db.connect()

    app.state.db = service.db
    app.state.service = service

    logger.info("Service started successfully")

    try:
        yield
    finally:
        logger.info("Shutting down shortlinks service...")
        await service.close()
        logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("shortlinks URL shortener")
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url'})}")

    app = create_app(
        db_instance=None,
        service_instance=None,
        config=config,
    )
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=False,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
