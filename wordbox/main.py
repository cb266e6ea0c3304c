"""Wordbox - FastAPI Application Factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from wordbox.api import api_router
from wordbox.api.health import router as health_router
from wordbox.core import create_session_factory, settings, setup_logging
from wordbox.core.config import Settings
from wordbox.core.database import create_tables
from wordbox.core.logging import get_logger
from wordbox.services.auth import SessionManager, TokenConfig
from wordbox.services.deepl import DeepLClient
from wordbox.services.http_client import create_http_client
from wordbox.services.merriam_webster import DictionaryClient, ThesaurusClient
from wordbox.services.mymemory import MyMemoryClient
from wordbox.services.sql_store import SqlAlchemyStore
from wordbox.services.store import CredentialStore, MemoryStore
from wordbox.services.translator import Translator

logger = get_logger("main")


async def build_store(config: Settings) -> CredentialStore:
    """Create the configured credential store backend."""
    if config.credential_store == "database":
        session_factory = create_session_factory(
            config.database_url, echo=config.debug and config.log_level == "DEBUG"
        )
        await create_tables(session_factory.kw["bind"])
        logger.info("Using database credential store")
        return SqlAlchemyStore(session_factory)

    logger.warning("Using in-memory credential store; users are lost on restart")
    return MemoryStore()


def create_app(config: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        setup_logging(config.log_level, config.log_format)
        logger.info(f"Starting {config.app_name} v{config.app_version}")
        if not config.jwt_secret_key:
            logger.warning("JWT_SECRET_KEY not set; tokens will not survive a restart")

        store = await build_store(config)
        http_client = create_http_client(config)

        app.state.store_backend = config.credential_store
        app.state.session_manager = SessionManager(
            store,
            TokenConfig.from_settings(config),
            algorithm=config.jwt_algorithm,
            logger=get_logger("session"),
        )
        app.state.translator = Translator(
            DeepLClient(http_client, config.deepl_key, base_url=config.deepl_api_url),
            DictionaryClient(http_client, config.mw_dictionary_key),
            ThesaurusClient(http_client, config.mw_thesaurus_key),
        )
        app.state.memory_client = MyMemoryClient(http_client)

        yield

        logger.info("Shutting down...")
        await http_client.aclose()
        if isinstance(store, SqlAlchemyStore):
            await store.close()

    app = FastAPI(
        title=config.app_name,
        description="Personal dictionary and translation service",
        version=config.app_version,
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
        openapi_url="/openapi.json" if config.debug else None,
    )

    app.include_router(health_router)
    app.include_router(api_router)

    return app


app = create_app()
