"""FastAPI application factory wiring config, logging and the dispatch server."""

from __future__ import annotations

from fastapi import FastAPI
from loguru import logger

from rpcdispatch import __version__
from rpcdispatch.api.endpoint import create_rpc_router
from rpcdispatch.api.implementation import Implementation
from rpcdispatch.config.access import get_config
from rpcdispatch.config.schema import Config
from rpcdispatch.rpc.server import Server
from rpcdispatch.utils.logging_utils import configure_logging, ensure_rotating_log_file


def create_app(
    server: Server | None = None,
    config: Config | None = None,
    implementation: Implementation | None = None,
    *,
    setup_logging: bool = True,
) -> FastAPI:
    """Build an app serving ``server`` (or one built from ``config``) at ``config.server.path``."""
    cfg = config or get_config()
    if setup_logging:
        configure_logging(cfg.logging.level)
        if cfg.logging.file:
            ensure_rotating_log_file(cfg.logging.file, cfg.logging.level)
    rpc_server = server or Server.from_config(cfg)
    app = FastAPI(title="rpcdispatch", version=__version__)
    app.include_router(create_rpc_router(rpc_server, implementation, path=cfg.server.path))
    app.state.rpc_server = rpc_server
    logger.info("RPC endpoint mounted at {} ({} handlers)", cfg.server.path, len(rpc_server.registry))
    return app
