"""Shared fixtures: an in-memory store and a signed-in synchronizer."""

from uuid import uuid4

import pytest

from tasksync.models.identity import Identity
from tasksync.services.auth import AuthProvider
from tasksync.services.notifications import NotificationCenter
from tasksync.services.synchronizer import TaskSynchronizer

from .fakes import FakeTaskStore


@pytest.fixture()
def identity() -> Identity:
    return Identity(id=uuid4(), email="alice@example.com")


@pytest.fixture()
def other_identity() -> Identity:
    return Identity(id=uuid4(), email="bob@example.com")


@pytest.fixture()
def store() -> FakeTaskStore:
    return FakeTaskStore()


@pytest.fixture()
def notifications() -> NotificationCenter:
    return NotificationCenter(max_size=50)


@pytest.fixture()
def auth(identity: Identity) -> AuthProvider:
    return AuthProvider(identity)


@pytest.fixture()
def synchronizer(
    store: FakeTaskStore,
    auth: AuthProvider,
    notifications: NotificationCenter,
) -> TaskSynchronizer:
    return TaskSynchronizer(store, auth, notifications)
