"""
Application factory.

    uvicorn --factory snippetbox.main:create_app

Everything the request handlers need (settings, stores, the engine behind them) is
built once here and kept on `app.state.context`; nothing lives in module globals.
Tests pass their own stores (e.g. the in-memory doubles) instead of a database.
"""
from contextlib import asynccontextmanager
from dataclasses import dataclass
import logging

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from snippetbox.api.v1 import api_router, register_exception_handlers
from snippetbox.config.settings import Settings, get_settings
from snippetbox.core.logging import RequestIDMiddleware, setup_logging
from snippetbox.database.session import build_engine, build_sessionmaker, create_schema
from snippetbox.stores.protocols import SnippetStoreProtocol, UserStoreProtocol
from snippetbox.stores.snippet_store import SnippetStore
from snippetbox.stores.user_store import UserStore

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    snippets: SnippetStoreProtocol
    users: UserStoreProtocol
    engine: AsyncEngine | None = None


def build_context(
    settings: Settings,
    snippets: SnippetStoreProtocol | None = None,
    users: UserStoreProtocol | None = None,
) -> AppContext:
    """Build the stores that were not supplied, sharing one engine between them."""
    engine = None
    if snippets is None or users is None:
        engine = build_engine(settings)
        sessions = build_sessionmaker(engine)
        snippets = snippets or SnippetStore(sessions)
        users = users or UserStore(sessions, rounds=settings.BCRYPT_ROUNDS)
    return AppContext(settings=settings, snippets=snippets, users=users, engine=engine)


def create_app(
    settings: Settings | None = None,
    *,
    snippets: SnippetStoreProtocol | None = None,
    users: UserStoreProtocol | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    context = build_context(settings, snippets, users)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if context.engine is not None:
            await create_schema(context.engine)
        logger.info("snippetbox started", extra={"env": settings.ENV})
        try:
            yield
        finally:
            if context.engine is not None:
                await context.engine.dispose()

    app = FastAPI(title="snippetbox", lifespan=lifespan)
    app.state.context = context

    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    app.include_router(api_router)

    return app
