"""Task store implementations.

- base.py: the async query interface the synchronizer consumes
- rest.py: PostgREST-style HTTP store (httpx)
- sql.py: SQLModel store for self-hosted databases
"""

from collections.abc import Callable

from sqlalchemy.engine import Engine

from tasksync.config import Settings
from tasksync.models.identity import Identity
from tasksync.store.base import TaskStore
from tasksync.store.rest import RestTaskStore
from tasksync.store.sql import SqlTaskStore

StoreFactory = Callable[[Identity], TaskStore]


def create_store_factory(settings: Settings, engine: Engine | None = None) -> StoreFactory:
    """Build a factory returning one store per signed-in identity.

    REST stores carry the identity's access token; SQL stores share the
    given engine.
    """
    if settings.TASKS_STORE_BACKEND == "sql":
        if engine is None:
            raise ValueError("An engine is required for the sql store backend")
        return lambda identity: SqlTaskStore(engine)

    def _rest_store(identity: Identity) -> TaskStore:
        return RestTaskStore(
            base_url=settings.TASKS_API_URL,
            api_key=settings.TASKS_API_KEY,
            table=settings.TASKS_TABLE,
            access_token=identity.access_token,
            timeout=settings.TASKS_HTTP_TIMEOUT_SECONDS,
        )

    return _rest_store


__all__ = [
    "RestTaskStore",
    "SqlTaskStore",
    "StoreFactory",
    "TaskStore",
    "create_store_factory",
]
