from fastmcp import FastMCP

from todolist.exceptions import NotFoundError, StorageError, ValidationError
from todolist.services import categories as categories_service
from todolist.services import tasks as tasks_service

mcp = FastMCP("Todolist")


def _handle_mcp_error(e: Exception) -> dict:
    """Convert exceptions to agent-friendly error dicts."""
    if isinstance(e, NotFoundError):
        return {"error": "not_found", "message": str(e), "action": "List the collection to find a valid id"}
    if isinstance(e, ValidationError):
        return {"error": "validation_error", "message": str(e)}
    if isinstance(e, StorageError):
        return {"error": "storage_error", "message": str(e)}
    return {"error": "unknown_error", "message": str(e)}


# --- Category tools ---

@mcp.tool
def categories_list() -> dict:
    """List all categories with their id, name and priority."""
    categories = categories_service.list_categories()
    return {"categories": [c.model_dump() for c in categories], "count": len(categories)}


@mcp.tool
def categories_get(category_id: int) -> dict:
    """Get a single category by its numeric id."""
    try:
        return categories_service.get_category(category_id).model_dump()
    except NotFoundError as e:
        return _handle_mcp_error(e)


@mcp.tool
def categories_create(name: str, priority: int) -> dict:
    """Create a category. The id is assigned automatically."""
    return categories_service.create_category(name, priority).model_dump()


@mcp.tool
def categories_update(category_id: int, name: str | None = None, priority: int | None = None) -> dict:
    """Update a category. Only the fields you pass are changed."""
    changes = {k: v for k, v in {"name": name, "priority": priority}.items() if v is not None}
    try:
        return categories_service.update_category(category_id, changes).model_dump()
    except NotFoundError as e:
        return _handle_mcp_error(e)


@mcp.tool
def categories_delete(category_id: int) -> dict:
    """Delete a category. Tasks that reference it are left untouched."""
    try:
        return categories_service.delete_category(category_id).model_dump()
    except NotFoundError as e:
        return _handle_mcp_error(e)


# --- Task tools ---

@mcp.tool
async def tasks_list() -> dict:
    """List all tasks with title, description, categoryId and completion flag."""
    try:
        tasks = await tasks_service.list_tasks()
        return {"tasks": [t.model_dump(by_alias=True) for t in tasks], "count": len(tasks)}
    except StorageError as e:
        return _handle_mcp_error(e)


@mcp.tool
async def tasks_get(task_id: str) -> dict:
    """Get a single task by id. Use tasks_list to discover ids."""
    try:
        return (await tasks_service.get_task(task_id)).model_dump(by_alias=True)
    except (NotFoundError, StorageError) as e:
        return _handle_mcp_error(e)


@mcp.tool
async def tasks_create(title: str, category_id: int, description: str | None = None) -> dict:
    """Create a task in a category. New tasks always start not completed."""
    try:
        task = await tasks_service.create_task(title, description, category_id)
        return task.model_dump(by_alias=True)
    except (ValidationError, StorageError) as e:
        return _handle_mcp_error(e)


@mcp.tool
async def tasks_update(
    task_id: str,
    title: str | None = None,
    description: str | None = None,
    category_id: int | None = None,
    completed: bool | None = None,
) -> dict:
    """Update a task. Only the fields you pass are changed; pass completed=true to finish it."""
    fields = {"title": title, "description": description, "categoryId": category_id, "completed": completed}
    changes = {k: v for k, v in fields.items() if v is not None}
    try:
        return (await tasks_service.update_task(task_id, changes)).model_dump(by_alias=True)
    except (NotFoundError, ValidationError, StorageError) as e:
        return _handle_mcp_error(e)


@mcp.tool
async def tasks_delete(task_id: str) -> dict:
    """Delete a task and return the removed record."""
    try:
        return (await tasks_service.delete_task(task_id)).model_dump(by_alias=True)
    except (NotFoundError, StorageError) as e:
        return _handle_mcp_error(e)
