"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tasksync import __version__
from tasksync.api.session import router as session_router
from tasksync.api.tasks import router as tasks_router
from tasksync.config import Settings, get_settings
from tasksync.db.session import build_engine, create_tables
from tasksync.logging_setup import configure_logging
from tasksync.services.sessions import SessionRegistry
from tasksync.store import StoreFactory, create_store_factory


def create_app(
    settings: Settings | None = None,
    store_factory: StoreFactory | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        settings: Settings to use (default: environment settings)
        store_factory: Overrides the store chosen by TASKS_STORE_BACKEND
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Wire the session registry on startup and close sessions on shutdown."""
        configure_logging(settings.LOG_LEVEL)

        engine = None
        factory = store_factory
        if factory is None:
            settings.validate()
            if settings.TASKS_STORE_BACKEND == "sql":
                engine = build_engine(settings.DATABASE_URL)
                create_tables(engine)
            factory = create_store_factory(settings, engine)

        app.state.registry = SessionRegistry(
            factory,
            notification_buffer_size=settings.NOTIFICATION_BUFFER_SIZE,
        )
        yield
        await app.state.registry.close_all()
        if engine is not None:
            engine.dispose()

    app = FastAPI(
        title="Task Sync API",
        description="Task list of the signed-in user, kept in step with the remote store",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Remove duplicates and empty strings
    cors_origins = [
        origin
        for origin in {settings.FRONTEND_URL, "http://localhost:3000"}
        if origin
    ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(tasks_router)
    app.include_router(session_router)

    @app.get("/health")
    def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
