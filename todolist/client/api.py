import pydantic
import requests

from todolist.config import get_settings
from todolist.exceptions import ApiError
from todolist.models.categories import Category
from todolist.models.tasks import Task


def _handle_response(resp: requests.Response) -> dict | list:
    if resp.status_code >= 400:
        try:
            body = resp.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            body = {}
        raise ApiError(
            f"{resp.request.method} {resp.url} failed: {resp.status_code} {body.get('message', resp.text)}",
            resp.status_code,
            body.get("error_code"),
        )
    return resp.json()


class TodoApiClient:
    """Thin wrapper around the REST API. Every failure surfaces as ApiError."""

    def __init__(self, base_url: str | None = None, session: requests.Session | None = None):
        self.base_url = (base_url or get_settings().api_url).rstrip("/")
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, json: dict | None = None, parse=None):
        """Send a request and parse the JSON payload with ``parse``.

        Transport errors, non-JSON bodies and payloads that don't match the
        expected model all become ApiError.
        """
        try:
            data = _handle_response(self.session.request(method, f"{self.base_url}{path}", json=json))
            return parse(data) if parse else data
        except requests.RequestException as e:
            raise ApiError(f"{method} {path} failed: {e}") from e
        except (ValueError, TypeError, pydantic.ValidationError) as e:
            raise ApiError(f"{method} {path} returned an unexpected payload: {e}") from e

    def list_categories(self) -> list[Category]:
        return self._request("GET", "/api/categories", parse=lambda data: [Category.model_validate(c) for c in data])

    def list_tasks(self) -> list[Task]:
        return self._request("GET", "/api/tasks", parse=lambda data: [Task.model_validate(t) for t in data])

    def create_task(self, title: str, description: str | None, category_id: int) -> Task:
        body = {"title": title, "description": description, "categoryId": category_id}
        return self._request("POST", "/api/tasks", json=body, parse=Task.model_validate)

    def update_task(self, task: Task) -> Task:
        """Send the whole record; the server merges it onto the stored task."""
        body = task.model_dump(by_alias=True, exclude={"id"})
        return self._request("PUT", f"/api/tasks/{task.id}", json=body, parse=Task.model_validate)

    def delete_task(self, task_id: str) -> Task:
        return self._request("DELETE", f"/api/tasks/{task_id}", parse=Task.model_validate)
