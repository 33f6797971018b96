#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: requests are served by a single uvicorn worker. Creates and
lookups run in worker threads and are serialized by the link store lock, and
every create rewrites the JSON snapshot before it is acknowledged.

Usage:
    python app.py

Environment variables:
    HOST - Address to bind to (default 127.0.0.1)
    PORT - Port to listen on (default 8000)
    BASE_URL - Base URL for short links
    DATA_FILE - Snapshot file path (default base.json)
    MAX_COLLISION_RETRIES - Attempts per create before giving up
    LOG_LEVEL - Logging level
"""

import logging
import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortlink.common.logging_config import setup_logging
from shortlink.errors import PersistenceError
from shortlink.persistence import SnapshotPersistence
from shortlink.service import ShortenerService
from web_app import create_app


def build_service(config: Config, logger: logging.Logger) -> ShortenerService:
    """Load the snapshot and build the shortener service.
    
    Raises:
        SnapshotCorruptError: If the snapshot exists but is unparsable
        PersistenceError: If the snapshot cannot be read
    """
    logger.info(f"Loading snapshot from {config.data_file}")
    persistence = SnapshotPersistence(config.data_file, logger=logger)
    return ShortenerService.from_snapshot(
        persistence,
        logger=logger,
        max_collision_retries=config.max_collision_retries,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    service = app.state.service
    logger = logging.getLogger("shortlink")
    
    logger.info(f"Service started with {len(service.store)} links")
    
    yield
    
    logger.info("Shutting down URL shortener service...")
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
    
    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.model_dump()}")
    
    try:
        service = build_service(config, logger)
    except PersistenceError as e:
        logger.error(f"Refusing to start: {e}")
        sys.exit(1)
    
    app = create_app(
        service_instance=service,
        config=config,
        lifespan=lifespan,
    )
    
    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=1,
        lifespan="on",
        timeout_keep_alive=config.request_timeout_seconds,
        log_level=config.log_level.lower(),
        access_log=True,
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
