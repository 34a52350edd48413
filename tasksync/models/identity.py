"""Identity of the authenticated user."""

from uuid import UUID

from sqlmodel import SQLModel


class Identity(SQLModel):
    """The current user as reported by the auth provider."""

    id: UUID
    email: str | None = None
    access_token: str | None = None
