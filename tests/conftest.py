import pytest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from todolist.models.categories import Category
from todolist.models.tasks import Task
from todolist.services import categories as categories_service


# --- Canned records ---

SAMPLE_CATEGORY = Category(id=1, name="Alta", priority=3)

SAMPLE_TASK = Task(
    id="65f0c0ffee0000000000abcd", title="Buy milk", description="2 litres",
    category_id=1, completed=False,
)

# 24 hex chars, valid ObjectId that is never inserted
MISSING_TASK_ID = "000000000000000000000000"


@pytest.fixture(autouse=True)
def empty_category_store():
    """Every test starts from an empty category store."""
    categories_service.seed_store(False)
    yield categories_service.get_store()
    categories_service.seed_store(False)


@pytest.fixture
def tasks_collection(mocker):
    """In-memory Mongo collection patched in place of the real one."""
    collection = AsyncMongoMockClient()["todolist"]["tasks"]
    mocker.patch("todolist.services.tasks.get_tasks_collection", return_value=collection)
    return collection


@pytest.fixture
def api_client():
    """FastAPI TestClient for router tests."""
    from todolist.main import api
    return TestClient(api)


@pytest.fixture
def mock_api_client():
    """Stand-in for TodoApiClient in view tests."""
    return MagicMock()
