"""Database engine construction for the SQL-backed task store."""

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine


def build_engine(database_url: str) -> Engine:
    """Create an engine for the given URL.

    PostgreSQL URLs are switched to the psycopg v3 driver. SQLite URLs get a
    shared connection so the store can be used from worker threads.
    """
    if database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+psycopg://", 1)

    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_engine(database_url, echo=False, pool_pre_ping=True)


def create_tables(engine: Engine) -> None:
    """Create the todos table if missing."""
    # Import models to register them with SQLModel
    from tasksync.models.task import Task  # noqa: F401

    SQLModel.metadata.create_all(engine)
