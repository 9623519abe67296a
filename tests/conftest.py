import os

# Must be set before config/database are imported anywhere
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["SYNC_ONLINE"] = "false"
os.environ["SYNC_DELAY_SECONDS"] = "0"

import asyncio
import copy

import pytest
from fastapi.testclient import TestClient

from core.seed_data import SEED_COLLECTIONS


@pytest.fixture
def seeded_store():
    """Shared app store reset to the demo dataset on an empty memory backend."""
    import database
    database.backend.clear()
    asyncio.run(database.store.restore(copy.deepcopy(SEED_COLLECTIONS)))
    return database.store


@pytest.fixture
def client(seeded_store):
    from server import app
    from core.auth import get_current_user
    app.dependency_overrides[get_current_user] = lambda: {"username": "admin"}
    yield TestClient(app)
    app.dependency_overrides.clear()
