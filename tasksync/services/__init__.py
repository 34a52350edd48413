"""Services for the task synchronization client.

Services:
- synchronizer.py: the in-memory task list and its store-backed operations
- auth.py: current identity, sign-in/out and bearer token decoding
- notifications.py: one-way user notification channel
- sessions.py: one synchronizer per signed-in user
"""

from tasksync.services.auth import AuthProvider, identity_from_token
from tasksync.services.notifications import NotificationCenter
from tasksync.services.sessions import SessionRegistry, TaskSession
from tasksync.services.synchronizer import SyncState, TaskSynchronizer

__all__ = [
    "AuthProvider",
    "identity_from_token",
    "NotificationCenter",
    "SessionRegistry",
    "TaskSession",
    "SyncState",
    "TaskSynchronizer",
]
