"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import datetime as dt
import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from daily_arcade.api.dependencies import set_session_manager, set_storage
from daily_arcade.api.routes import api_router
from daily_arcade.api.session_manager import SessionManager
from daily_arcade.config import ArcadeConfig
from daily_arcade.storage.memory import MemStorage
from daily_arcade.utils.logging import setup_logging

if TYPE_CHECKING:
    from daily_arcade.engine.scheduler import FrameScheduler

logger = logging.getLogger(__name__)


def create_app(
    config: ArcadeConfig | None = None,
    *,
    scheduler: FrameScheduler | None = None,
    today: dt.date | None = None,
) -> FastAPI:
    """Build and return the fully-configured FastAPI application.

    *scheduler* replaces the background frame thread (tests pass a
    ``ManualScheduler``); *today* pins the seeded catalog week.
    """
    if config is None:
        config = ArcadeConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        storage = MemStorage(today, _config.catalog_days_before, _config.catalog_days_after)
        manager = SessionManager(_config, scheduler)
        set_storage(storage)
        set_session_manager(manager)
        logger.info("API server started — %d games in catalog.", len(storage.get_games()))
        yield
        manager.stop()
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Daily Arcade",
        description=(
            "Daily-rotating arcade minigames with seeded variations and a leaderboard.\n\n"
            "## API Groups\n\n"
            "- **Games** — The dated game catalog and each game's parameters\n"
            "- **Scores** — Leaderboard reads and score submission\n"
            "- **Users** — Guest identities\n"
            "- **Variations** — Ad-hoc and sample variations\n"
            "- **Play** — A server-side play session: load, control, input, frames, events\n"
            "- **Config** — Read-only arcade configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    # Allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app
