# backend/tests/conftest.py
import os
import tempfile

import pytest

# settings are read at import time, so pin them before archive_api is imported
os.environ["ARCHIVE_API_KEY"] = "test-key"
os.environ["ARCHIVE_TIMEZONE"] = "UTC"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="archive_api_logs_")


class FakeArchiveClient:
    """Stands in for ArchiveClient; serves canned docs and records calls."""

    def __init__(self, docs=None, error=None):
        self.docs = docs or []
        self.error = error
        self.calls = []

    def fetch(self, year=None, month=None):
        self.calls.append((year, month))
        if self.error is not None:
            raise self.error
        return list(self.docs)


@pytest.fixture
def fake_archive():
    return FakeArchiveClient()


@pytest.fixture
def client(fake_archive):
    from fastapi.testclient import TestClient
    from archive_api.api.deps import get_archive_client
    from archive_api.main import app

    app.dependency_overrides[get_archive_client] = lambda: fake_archive
    # IMPORTANT: use context manager so startup/shutdown events run properly
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
