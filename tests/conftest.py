# /tests/conftest.py

import asyncio

import pytest
from fastapi.testclient import TestClient

from gradetracker.core.exceptions import SyncError
from gradetracker.main import create_app
from gradetracker.models.collections_model import Collections
from gradetracker.services.database_helpers.store_memory import InMemoryStore
from gradetracker.services.database_service import DatabaseService
from gradetracker.services.seed_data import get_sample_data
from gradetracker.services.sync_helpers.backends import StoreMirrorBackend, SyncBackend


class FakeBackend(SyncBackend):
    """
    An in-process mirror whose behaviour each test controls: the data it
    holds, whether it fails, and how long every call takes.
    """

    def __init__(self, name, data=None, fail=False, delay=0.0, error=None):
        super().__init__(name)
        self.data = data
        self.fail = fail
        self.delay = delay
        self.error = error
        self.uploads = []
        self.downloads = 0

    async def _maybe_fail(self):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.fail:
            raise SyncError(f"{self.name} is unreachable")

    async def upload_all(self, data):
        await self._maybe_fail()
        self.uploads.append(data)
        self.data = data

    async def download_all(self):
        self.downloads += 1
        await self._maybe_fail()
        return self.data if self.data is not None else Collections()


@pytest.fixture
def store():
    """A fresh, empty in-memory store for each test."""
    return InMemoryStore()

@pytest.fixture
def empty_db(store):
    return DatabaseService(store)

@pytest.fixture
def seeded_db(store):
    """
    A DatabaseService holding the default dataset: 3 students, 2 courses,
    4 enrollments, assessments 501-505 and 5 graded rows.
    """
    db = DatabaseService(store)
    db.replace_all(get_sample_data())
    return db

@pytest.fixture
def make_backend():
    """Factory for FakeBackend instances."""
    return FakeBackend

@pytest.fixture
def mirror_store():
    """A separate store standing in for a remote mirror."""
    return InMemoryStore()

@pytest.fixture
def client(store, mirror_store):
    """
    A TestClient over a full app wired to an in-memory store and one mirror
    tier. Entering the context runs the startup reconciliation.
    """
    app = create_app(store=store, backends=[StoreMirrorBackend("tier-b", mirror_store, "cloud_")])
    with TestClient(app) as test_client:
        yield test_client
