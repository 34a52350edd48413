"""SQLModel-backed task store.

Queries follow the same shape as a hosted backend would run them: every
statement filters on ``user_id`` and lists are ordered newest first. The
blocking session work runs in the threadpool so the event loop is never
held by the database.
"""

import logging
from uuid import UUID

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from tasksync.errors import LoadFailure, StoreError, WriteFailure
from tasksync.models.task import Task, TaskCreate, TaskRecord, TaskUpdate, utcnow
from tasksync.store.base import TaskStore

logger = logging.getLogger(__name__)


def _select_user_tasks(
    session: Session,
    user_id: UUID,
    completed: bool | None = None,
) -> list[Task]:
    query = select(Task).where(Task.user_id == user_id)
    if completed is not None:
        query = query.where(Task.completed == completed)
    query = query.order_by(Task.created_at.desc())
    return list(session.exec(query).all())


def _get_task(session: Session, user_id: UUID, task_id: UUID) -> Task | None:
    return session.exec(
        select(Task).where(Task.id == task_id, Task.user_id == user_id)
    ).first()


class SqlTaskStore(TaskStore):
    """Task store over a SQL database."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    async def list_tasks(
        self,
        user_id: UUID,
        completed: bool | None = None,
    ) -> list[TaskRecord]:
        def _list() -> list[TaskRecord]:
            with Session(self.engine) as session:
                rows = _select_user_tasks(session, user_id, completed)
                return [TaskRecord.model_validate(row) for row in rows]

        return await self._run("load tasks", _list, LoadFailure)

    async def insert_task(self, user_id: UUID, data: TaskCreate) -> TaskRecord:
        def _insert() -> TaskRecord:
            with Session(self.engine) as session:
                now = utcnow()
                task = Task(
                    user_id=user_id,
                    title=data.title,
                    description=data.description,
                    completed=data.completed,
                    created_at=now,
                    updated_at=now,
                )
                session.add(task)
                session.commit()
                session.refresh(task)
                return TaskRecord.model_validate(task)

        return await self._run("create task", _insert)

    async def update_task(self, user_id: UUID, task_id: UUID, changes: TaskUpdate) -> None:
        def _update() -> None:
            with Session(self.engine) as session:
                task = _get_task(session, user_id, task_id)
                if task is None:
                    # Matches a filtered UPDATE touching zero rows
                    logger.debug("Update matched no task %s", task_id)
                    return

                update_data = changes.model_dump(exclude_unset=True)
                for key, value in update_data.items():
                    setattr(task, key, value)

                task.updated_at = update_data.get("updated_at") or utcnow()
                session.add(task)
                session.commit()

        await self._run("update task", _update)

    async def delete_task(self, user_id: UUID, task_id: UUID) -> None:
        def _delete() -> None:
            with Session(self.engine) as session:
                task = _get_task(session, user_id, task_id)
                if task is None:
                    logger.debug("Delete matched no task %s", task_id)
                    return
                session.delete(task)
                session.commit()

        await self._run("delete task", _delete)

    async def _run(self, action: str, func, error_cls: type[StoreError] = WriteFailure):
        try:
            return await run_in_threadpool(func)
        except SQLAlchemyError as e:
            logger.error("Failed to %s: %s", action, e)
            raise error_cls(f"Could not {action}: {e.__class__.__name__}") from e
