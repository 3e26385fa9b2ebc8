# tests/conftest.py

from __future__ import annotations

import pytest

from taskdesk import create_app
from taskdesk.core.service import TaskService
from taskdesk.models.models import Actor, EMPLOYEE, MANAGER, create_user
from taskdesk.stores.stores import AccountStore, TaskStore

from .fakes import FakeClock, FakeDB

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture()
def db() -> FakeDB:
    return FakeDB()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def accounts(db: FakeDB) -> AccountStore:
    store = AccountStore(db.users)
    store.ensure_indexes()
    return store


@pytest.fixture()
def task_store(db: FakeDB) -> TaskStore:
    return TaskStore(db.tasks)


@pytest.fixture()
def service(task_store: TaskStore, accounts: AccountStore, clock: FakeClock) -> TaskService:
    return TaskService(task_store, accounts, clock=clock)


def _seed(accounts: AccountStore, name: str, email: str, role: str) -> Actor:
    # Password hash is irrelevant for core tests.
    user = accounts.create(create_user(name, email, "not-a-real-hash", role))
    return Actor(id=str(user["_id"]), email=user["email"], role=role)


@pytest.fixture()
def manager(accounts: AccountStore) -> Actor:
    return _seed(accounts, "Maya", "maya@x.com", MANAGER)


@pytest.fixture()
def other_manager(accounts: AccountStore) -> Actor:
    return _seed(accounts, "Omar", "omar@x.com", MANAGER)


@pytest.fixture()
def alice(accounts: AccountStore) -> Actor:
    return _seed(accounts, "Alice", "alice@x.com", EMPLOYEE)


@pytest.fixture()
def bob(accounts: AccountStore) -> Actor:
    return _seed(accounts, "Bob", "bob@x.com", EMPLOYEE)


@pytest.fixture()
def app(db: FakeDB, clock: FakeClock):
    return create_app(
        config={"TESTING": True, "JWT_SECRET_KEY": TEST_SECRET, "CLOCK": clock},
        db=db,
    )


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def register(client):
    """Register an account through the API and return auth headers for it."""

    def _register(email: str, role: str, name: str = "Someone", password: str = "secret123"):
        resp = client.post(
            "/auth/register",
            json={"name": name, "email": email, "password": password, "role": role},
        )
        assert resp.status_code == 201, resp.get_json()
        return {"Authorization": f"Bearer {resp.get_json()['token']}"}

    return _register
