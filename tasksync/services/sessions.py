"""Per-identity session registry.

Each signed-in user gets their own auth provider, store, notification
center and synchronizer. Nothing is shared between sessions except the
store factory.
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from tasksync.models.identity import Identity
from tasksync.services.auth import AuthProvider
from tasksync.services.notifications import NotificationCenter
from tasksync.services.synchronizer import TaskSynchronizer
from tasksync.store import StoreFactory
from tasksync.store.base import TaskStore

logger = logging.getLogger(__name__)


@dataclass
class TaskSession:
    """Everything owned by one signed-in user."""

    auth: AuthProvider
    store: TaskStore
    notifications: NotificationCenter
    synchronizer: TaskSynchronizer

    @property
    def user_id(self) -> UUID | None:
        identity = self.auth.identity
        return identity.id if identity else None


class SessionRegistry:
    """Opens, looks up and closes task sessions keyed by user id."""

    def __init__(self, store_factory: StoreFactory, notification_buffer_size: int = 50) -> None:
        self.store_factory = store_factory
        self.notification_buffer_size = notification_buffer_size
        self._sessions: dict[UUID, TaskSession] = {}

    def get(self, user_id: UUID) -> TaskSession | None:
        return self._sessions.get(user_id)

    async def open(self, identity: Identity) -> TaskSession:
        """Return the identity's session, creating and loading it if needed.

        An open session presented with a different access token gets a
        fresh store bound to that token.
        """
        session = self._sessions.get(identity.id)
        if session is not None:
            current = session.auth.identity
            if current is None or current.access_token != identity.access_token:
                await self._refresh(session, identity)
            return session

        auth = AuthProvider()
        store = self.store_factory(identity)
        notifications = NotificationCenter(max_size=self.notification_buffer_size)
        synchronizer = TaskSynchronizer(store, auth, notifications)
        session = TaskSession(auth, store, notifications, synchronizer)
        self._sessions[identity.id] = session

        await synchronizer.start()
        await auth.sign_in(identity)
        logger.info("Opened task session for user %s", identity.id)
        return session

    async def _refresh(self, session: TaskSession, identity: Identity) -> None:
        previous = session.store
        store = self.store_factory(identity)
        session.store = store
        session.synchronizer.store = store
        # Same user id, so listeners are not fired and the list is kept
        await session.auth.sign_in(identity)
        if store is not previous:
            await previous.close()
        logger.info("Refreshed access token for user %s", identity.id)

    async def sign_out(self, user_id: UUID) -> TaskSession | None:
        """Sign the user out and tear the session down."""
        session = self._sessions.pop(user_id, None)
        if session is None:
            return None

        await session.auth.sign_out()
        session.synchronizer.stop()
        await session.store.close()
        session.notifications.notify("Signed out", "You have been signed out successfully.")
        logger.info("Closed task session for user %s", user_id)
        return session

    async def close_all(self) -> None:
        for user_id in list(self._sessions):
            await self.sign_out(user_id)

    def __len__(self) -> int:
        return len(self._sessions)
