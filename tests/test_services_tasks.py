import pytest
from unittest.mock import AsyncMock, MagicMock

from pymongo.errors import ServerSelectionTimeoutError

from todolist.exceptions import NotFoundError, StorageError, ValidationError
from todolist.models.tasks import Task
from todolist.services import tasks as tasks_service
from tests.conftest import MISSING_TASK_ID


class TestCreateTask:
    async def test_returns_stored_record(self, tasks_collection):
        task = await tasks_service.create_task("Buy milk", "2 litres", 1)
        assert isinstance(task, Task)
        assert task.id
        assert task.title == "Buy milk"
        assert task.description == "2 litres"
        assert task.category_id == 1
        assert task.completed is False

    async def test_persists_completed_false(self, tasks_collection):
        task = await tasks_service.create_task("Buy milk", None, 1)
        doc = await tasks_collection.find_one({})
        assert str(doc["_id"]) == task.id
        assert doc["completed"] is False
        assert doc["categoryId"] == 1
        assert "description" not in doc

    async def test_missing_title(self, tasks_collection):
        with pytest.raises(ValidationError):
            await tasks_service.create_task("", None, 1)
        assert await tasks_collection.count_documents({}) == 0

    async def test_missing_category(self, tasks_collection):
        with pytest.raises(ValidationError):
            await tasks_service.create_task("Buy milk", None, None)

    async def test_ids_are_unique(self, tasks_collection):
        a = await tasks_service.create_task("a", None, 1)
        b = await tasks_service.create_task("b", None, 1)
        assert a.id != b.id


class TestListAndGet:
    async def test_empty(self, tasks_collection):
        assert await tasks_service.list_tasks() == []

    async def test_lists_in_insertion_order(self, tasks_collection):
        await tasks_service.create_task("first", None, 1)
        await tasks_service.create_task("second", None, 2)
        assert [t.title for t in await tasks_service.list_tasks()] == ["first", "second"]

    async def test_get_round_trip(self, tasks_collection):
        created = await tasks_service.create_task("Buy milk", "2 litres", 1)
        assert await tasks_service.get_task(created.id) == created

    async def test_get_missing(self, tasks_collection):
        with pytest.raises(NotFoundError):
            await tasks_service.get_task(MISSING_TASK_ID)

    async def test_malformed_id_is_not_found(self, tasks_collection):
        with pytest.raises(NotFoundError):
            await tasks_service.get_task("not-an-object-id")


class TestUpdateTask:
    async def test_partial_update_keeps_other_fields(self, tasks_collection):
        created = await tasks_service.create_task("Buy milk", "2 litres", 1)
        updated = await tasks_service.update_task(created.id, {"completed": True})
        assert updated.completed is True
        assert updated.title == "Buy milk"
        assert updated.description == "2 litres"

    async def test_same_update_twice_is_stable(self, tasks_collection):
        created = await tasks_service.create_task("Buy milk", None, 1)
        first = await tasks_service.update_task(created.id, {"title": "Buy bread", "categoryId": 2})
        second = await tasks_service.update_task(created.id, {"title": "Buy bread", "categoryId": 2})
        assert first == second
        assert second.category_id == 2

    async def test_empty_update_returns_current(self, tasks_collection):
        created = await tasks_service.create_task("Buy milk", None, 1)
        assert await tasks_service.update_task(created.id, {}) == created

    async def test_empty_title_rejected(self, tasks_collection):
        created = await tasks_service.create_task("Buy milk", None, 1)
        with pytest.raises(ValidationError):
            await tasks_service.update_task(created.id, {"title": ""})

    async def test_missing(self, tasks_collection):
        await tasks_service.create_task("Buy milk", None, 1)
        with pytest.raises(NotFoundError):
            await tasks_service.update_task(MISSING_TASK_ID, {"title": "x"})
        assert await tasks_collection.count_documents({}) == 1


class TestDeleteTask:
    async def test_returns_removed(self, tasks_collection):
        created = await tasks_service.create_task("Buy milk", None, 1)
        removed = await tasks_service.delete_task(created.id)
        assert removed == created
        assert await tasks_service.list_tasks() == []

    async def test_missing(self, tasks_collection):
        with pytest.raises(NotFoundError):
            await tasks_service.delete_task(MISSING_TASK_ID)


class TestStorageErrors:
    @pytest.fixture
    def broken_collection(self, mocker):
        collection = MagicMock()
        collection.find_one = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
        collection.insert_one = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
        mocker.patch("todolist.services.tasks.get_tasks_collection", return_value=collection)
        return collection

    async def test_get_wraps_driver_error(self, broken_collection):
        with pytest.raises(StorageError):
            await tasks_service.get_task(MISSING_TASK_ID)

    async def test_create_wraps_driver_error(self, broken_collection):
        with pytest.raises(StorageError):
            await tasks_service.create_task("Buy milk", None, 1)

    async def test_unconfigured_database(self, mocker):
        mocker.patch(
            "todolist.services.tasks.get_tasks_collection",
            side_effect=StorageError("MongoDB connection string not configured"),
        )
        with pytest.raises(StorageError):
            await tasks_service.list_tasks()
