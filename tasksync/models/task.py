"""Task entity model."""

from datetime import datetime, timezone
from uuid import UUID, uuid4

from pydantic import ValidationError, field_validator
from sqlmodel import Field, SQLModel

from tasksync.errors import ValidationFailure


def utcnow() -> datetime:
    """Current UTC time, used for created_at/updated_at stamps."""
    return datetime.now(timezone.utc)


def normalize_title(title: str | None) -> str:
    """Reject empty titles before anything reaches the store."""
    if title is None or not title.strip():
        raise ValidationFailure("Title cannot be empty")
    return title


def normalize_description(description: str | None) -> str | None:
    """Map an empty description to None so reads only see one absent form."""
    return description or None


class TaskBase(SQLModel):
    """Base Task schema."""

    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)


class Task(TaskBase, table=True):
    """Task database model used by the SQL store."""

    __tablename__ = "todos"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(index=True)
    completed: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)


class TaskRecord(SQLModel):
    """A task as held in the synchronizer's in-memory list."""

    id: UUID
    user_id: UUID
    title: str
    description: str | None = None
    completed: bool = False
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class TaskCreate(SQLModel):
    """Schema for task creation."""

    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    completed: bool = False


class TaskUpdate(SQLModel):
    """Partial field set sent to the store on toggle or edit."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    completed: bool | None = None
    updated_at: datetime | None = None


class TaskInput(SQLModel):
    """Request body for creating or editing a task."""

    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title cannot be empty")
        return value


class TaskToggle(SQLModel):
    """Request body for toggling completion; omit to invert."""

    completed: bool | None = None


class TaskSummary(SQLModel):
    """Completion counts shown above the list."""

    total: int
    completed: int
    pending: int


class TaskListResponse(SQLModel):
    """Snapshot of the synchronizer exposed to the presentation layer."""

    tasks: list[TaskRecord]
    total: int
    completed: int
    is_loading: bool


class TaskOperationResponse(SQLModel):
    """Outcome of one operation plus the refreshed snapshot."""

    ok: bool
    task: TaskRecord | None = None
    snapshot: TaskListResponse


def _first_error(error: ValidationError) -> str:
    details = error.errors()
    if not details:
        return "Invalid task"
    field = ".".join(str(part) for part in details[0].get("loc", ()))
    return f"{field}: {details[0].get('msg', 'invalid value')}" if field else details[0]["msg"]


def build_task_create(title: str | None, description: str | None = None) -> TaskCreate:
    """Validate and normalize input for a new task.

    Raises:
        ValidationFailure: If the title is empty or a field is too long
    """
    title = normalize_title(title)
    try:
        return TaskCreate(
            title=title,
            description=normalize_description(description),
            completed=False,
        )
    except ValidationError as e:
        raise ValidationFailure(_first_error(e)) from e


def build_task_edit(title: str | None, description: str | None = None) -> TaskUpdate:
    """Validate and normalize an edit of title and description.

    Raises:
        ValidationFailure: If the title is empty or a field is too long
    """
    title = normalize_title(title)
    try:
        return TaskUpdate(
            title=title,
            description=normalize_description(description),
            updated_at=utcnow(),
        )
    except ValidationError as e:
        raise ValidationFailure(_first_error(e)) from e
