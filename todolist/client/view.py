"""State and behaviors of the to-do list screen, independent of how it is drawn.

Mutations go through the API and then patch local state with the server's
response; the list is only re-fetched by ``load``. Any failure sets a single
``error`` message and leaves local state as it was.
"""
import logging
from dataclasses import dataclass

from todolist.client.api import TodoApiClient
from todolist.exceptions import ApiError
from todolist.models.categories import Category
from todolist.models.tasks import Task

logger = logging.getLogger(__name__)

NO_CATEGORY = "No category"


@dataclass
class NewTaskForm:
    title: str = ""
    description: str = ""
    category_id: int = 0


@dataclass
class TaskRow:
    task: Task
    category_name: str
    editing: bool


class TodoListView:
    def __init__(self, client: TodoApiClient):
        self.client = client
        self.tasks: list[Task] = []
        self.categories: list[Category] = []
        self.new_task = NewTaskForm()
        self.editing: Task | None = None
        self.pending_delete: str | None = None
        self.error = ""

    def _fail(self, message: str, e: ApiError) -> None:
        self.error = message
        logger.error("%s: %s", message, e, exc_info=e)

    # --- Loading ---

    def load(self) -> None:
        self.load_categories()
        self.load_tasks()

    def load_categories(self) -> None:
        try:
            self.categories = self.client.list_categories()
        except ApiError as e:
            self._fail("Error loading categories", e)
            return
        if self.categories and self.new_task.category_id == 0:
            self.new_task.category_id = self.categories[0].id

    def load_tasks(self) -> None:
        try:
            self.tasks = self.client.list_tasks()
        except ApiError as e:
            self._fail("Error loading tasks", e)
            return
        # Another client may have deleted the task being edited or confirmed.
        if self.editing is not None and self._find(self.editing.id) is None:
            self.editing = None
        if self.pending_delete is not None and self._find(self.pending_delete) is None:
            self.pending_delete = None

    # --- Rendering ---

    def category_name(self, category_id: int) -> str:
        for category in self.categories:
            if category.id == category_id:
                return category.name
        return NO_CATEGORY

    def rows(self) -> list[TaskRow]:
        editing_id = self.editing.id if self.editing else None
        return [
            TaskRow(task=t, category_name=self.category_name(t.category_id), editing=t.id == editing_id)
            for t in self.tasks
        ]

    # --- Create ---

    def add_task(self) -> Task | None:
        form = self.new_task
        try:
            created = self.client.create_task(form.title, form.description or None, form.category_id)
        except ApiError as e:
            self._fail("Error adding task", e)
            return None
        self.tasks.append(created)
        self.new_task = NewTaskForm(category_id=form.category_id)
        return created

    # --- Edit ---

    def _find(self, task_id: str) -> Task | None:
        return next((t for t in self.tasks if t.id == task_id), None)

    def start_edit(self, task_id: str) -> None:
        task = self._find(task_id)
        if task is not None:
            self.editing = task.model_copy()

    def change_edit(self, **fields) -> None:
        if self.editing is not None:
            self.editing = self.editing.model_copy(update=fields)

    def cancel_edit(self) -> None:
        self.editing = None

    def save_edit(self) -> Task | None:
        if self.editing is None:
            return None
        try:
            updated = self.client.update_task(self.editing)
        except ApiError as e:
            self._fail("Error updating task", e)
            return None
        self._replace(updated)
        self.editing = None
        return updated

    def toggle_complete(self, task_id: str) -> Task | None:
        task = self._find(task_id)
        if task is None:
            return None
        try:
            updated = self.client.update_task(task.model_copy(update={"completed": not task.completed}))
        except ApiError as e:
            self._fail("Error updating task", e)
            return None
        self._replace(updated)
        return updated

    def _replace(self, updated: Task) -> None:
        self.tasks = [updated if t.id == updated.id else t for t in self.tasks]

    # --- Delete ---

    def delete_task(self, task_id: str) -> bool:
        try:
            self.client.delete_task(task_id)
        except ApiError as e:
            self._fail("Error deleting task", e)
            return False
        self.tasks = [t for t in self.tasks if t.id != task_id]
        return True

    def request_delete(self, task_id: str) -> None:
        """Open the confirmation step for deleting a task."""
        if self._find(task_id) is not None:
            self.pending_delete = task_id

    def dismiss_delete(self) -> None:
        self.pending_delete = None

    def confirm_delete(self) -> bool:
        if self.pending_delete is None:
            return False
        task_id, self.pending_delete = self.pending_delete, None
        return self.delete_task(task_id)
