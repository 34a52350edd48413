"""API dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tasksync.models.identity import Identity
from tasksync.services.auth import InvalidTokenError, identity_from_token
from tasksync.services.sessions import SessionRegistry, TaskSession

security = HTTPBearer()


def get_registry(request: Request) -> SessionRegistry:
    """Session registry created by the application lifespan."""
    return request.app.state.registry


Registry = Annotated[SessionRegistry, Depends(get_registry)]


def get_current_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
) -> Identity:
    """Get current identity from the bearer token."""
    settings = request.app.state.settings
    try:
        return identity_from_token(
            credentials.credentials,
            secret=settings.AUTH_JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]


async def get_task_session(registry: Registry, identity: CurrentIdentity) -> TaskSession:
    """Open (or reuse) the caller's task session."""
    return await registry.open(identity)


CurrentSession = Annotated[TaskSession, Depends(get_task_session)]
