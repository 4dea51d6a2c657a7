from fastapi import APIRouter

from todolist.models.tasks import CreateTaskRequest, Task, UpdateTaskRequest
from todolist.services import tasks as tasks_service

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("")
async def list_tasks() -> list[Task]:
    return await tasks_service.list_tasks()


@router.get("/{task_id}")
async def get_task(task_id: str) -> Task:
    return await tasks_service.get_task(task_id)


@router.post("", status_code=201)
async def create_task(request: CreateTaskRequest) -> Task:
    return await tasks_service.create_task(request.title, request.description, request.category_id)


@router.put("/{task_id}")
async def update_task(task_id: str, request: UpdateTaskRequest) -> Task:
    return await tasks_service.update_task(task_id, request.changes())


@router.delete("/{task_id}")
async def delete_task(task_id: str) -> Task:
    return await tasks_service.delete_task(task_id)
