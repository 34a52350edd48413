"""Session endpoints: notifications and sign-out."""

from fastapi import APIRouter, HTTPException, status

from tasksync.api.deps import CurrentIdentity, CurrentSession, Registry
from tasksync.models.notification import Notification

router = APIRouter(prefix="/api", tags=["Session"])


@router.get("/notifications", response_model=list[Notification])
async def drain_notifications_endpoint(session: CurrentSession) -> list[Notification]:
    """Return and clear the caller's pending notifications."""
    return session.notifications.drain()


@router.post("/session/sign-out", response_model=list[Notification])
async def sign_out_endpoint(
    registry: Registry,
    identity: CurrentIdentity,
) -> list[Notification]:
    """Sign out and return the session's final notifications."""
    session = await registry.sign_out(identity.id)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No active session",
        )
    return session.notifications.drain()
