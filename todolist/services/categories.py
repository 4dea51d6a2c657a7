import logging
import threading

from todolist.exceptions import NotFoundError
from todolist.models.categories import Category

logger = logging.getLogger(__name__)

SEED_CATEGORIES = [
    Category(id=1, name="Alta", priority=3),
    Category(id=2, name="Media", priority=2),
    Category(id=3, name="Baja", priority=1),
]


class CategoryStore:
    """In-memory ordered list of categories. Contents are lost on restart.

    Sync route handlers run in a thread pool, so every access goes through
    a single lock.
    """

    def __init__(self, categories: list[Category] | None = None):
        self._lock = threading.Lock()
        self._categories: list[Category] = [c.model_copy() for c in categories or []]

    def reset(self, categories: list[Category] | None = None) -> None:
        with self._lock:
            self._categories = [c.model_copy() for c in categories or []]

    def list(self) -> list[Category]:
        with self._lock:
            return [c.model_copy() for c in self._categories]

    def get(self, category_id: int) -> Category:
        with self._lock:
            return self._find(category_id)[1].model_copy()

    def create(self, name: str, priority: int) -> Category:
        with self._lock:
            next_id = max((c.id for c in self._categories), default=0) + 1
            category = Category(id=next_id, name=name, priority=priority)
            self._categories.append(category)
            logger.debug("Created category %d (%s)", category.id, category.name)
            return category.model_copy()

    def update(self, category_id: int, changes: dict) -> Category:
        """Shallow merge: supplied fields overwrite, the rest are kept. The id never changes."""
        changes = {k: v for k, v in changes.items() if k != "id"}
        with self._lock:
            index, current = self._find(category_id)
            merged = current.model_copy(update=changes)
            self._categories[index] = merged
            logger.debug("Updated category %d: %s", category_id, sorted(changes))
            return merged.model_copy()

    def delete(self, category_id: int) -> Category:
        with self._lock:
            index, _ = self._find(category_id)
            removed = self._categories.pop(index)
            logger.debug("Deleted category %d", category_id)
            return removed

    def _find(self, category_id: int) -> tuple[int, Category]:
        for index, category in enumerate(self._categories):
            if category.id == category_id:
                return index, category
        raise NotFoundError(f"Category {category_id} not found")


_store = CategoryStore()


def get_store() -> CategoryStore:
    return _store


def seed_store(seed: bool = True) -> None:
    """Reset the process-wide store, optionally with the default categories."""
    _store.reset(SEED_CATEGORIES if seed else None)


def list_categories() -> list[Category]:
    """List all categories in insertion order."""
    return get_store().list()


def get_category(category_id: int) -> Category:
    """Get a single category by id."""
    return get_store().get(category_id)


def create_category(name: str, priority: int) -> Category:
    """Create a category. Its id is one more than the highest existing id."""
    return get_store().create(name, priority)


def update_category(category_id: int, changes: dict) -> Category:
    """Merge the given fields onto an existing category."""
    return get_store().update(category_id, changes)


def delete_category(category_id: int) -> Category:
    """Delete a category and return it."""
    return get_store().delete(category_id)
