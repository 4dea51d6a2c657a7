import logging

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from todolist.db import get_tasks_collection
from todolist.exceptions import NotFoundError, StorageError, ValidationError
from todolist.models.tasks import Task

logger = logging.getLogger(__name__)


def _object_id(task_id: str) -> ObjectId:
    try:
        return ObjectId(task_id)
    except (InvalidId, TypeError) as e:
        raise NotFoundError(f"Task {task_id} not found") from e


def _handle_db_error(e: PyMongoError):
    raise StorageError(f"Task database error: {e}") from e


def _parse_task(doc: dict) -> Task:
    return Task(
        id=str(doc["_id"]),
        title=doc.get("title", ""),
        description=doc.get("description"),
        category_id=doc["categoryId"],
        completed=doc.get("completed", False),
    )


async def list_tasks() -> list[Task]:
    """List all tasks in storage order."""
    try:
        return [_parse_task(doc) async for doc in get_tasks_collection().find()]
    except PyMongoError as e:
        _handle_db_error(e)


async def get_task(task_id: str) -> Task:
    """Get a single task by id."""
    oid = _object_id(task_id)
    try:
        doc = await get_tasks_collection().find_one({"_id": oid})
    except PyMongoError as e:
        _handle_db_error(e)
    if doc is None:
        raise NotFoundError(f"Task {task_id} not found")
    return _parse_task(doc)


async def create_task(title: str | None, description: str | None = None, category_id: int | None = None) -> Task:
    """Create a task. New tasks are always stored with completed=False."""
    if not title:
        raise ValidationError("title is required")
    if category_id is None:
        raise ValidationError("categoryId is required")
    doc: dict = {"title": title, "categoryId": category_id, "completed": False}
    if description is not None:
        doc["description"] = description
    try:
        result = await get_tasks_collection().insert_one(doc)
    except PyMongoError as e:
        _handle_db_error(e)
    doc["_id"] = result.inserted_id
    logger.debug("Created task %s", result.inserted_id)
    return _parse_task(doc)


async def update_task(task_id: str, changes: dict) -> Task:
    """Apply a partial update. Fields not in ``changes`` keep their value."""
    if not changes:
        return await get_task(task_id)
    if "title" in changes and not changes["title"]:
        raise ValidationError("title must not be empty")
    oid = _object_id(task_id)
    try:
        doc = await get_tasks_collection().find_one_and_update(
            {"_id": oid}, {"$set": changes}, return_document=ReturnDocument.AFTER,
        )
    except PyMongoError as e:
        _handle_db_error(e)
    if doc is None:
        raise NotFoundError(f"Task {task_id} not found")
    logger.debug("Updated task %s: %s", task_id, sorted(changes))
    return _parse_task(doc)


async def delete_task(task_id: str) -> Task:
    """Delete a task and return it."""
    oid = _object_id(task_id)
    try:
        doc = await get_tasks_collection().find_one_and_delete({"_id": oid})
    except PyMongoError as e:
        _handle_db_error(e)
    if doc is None:
        raise NotFoundError(f"Task {task_id} not found")
    logger.debug("Deleted task %s", task_id)
    return _parse_task(doc)
