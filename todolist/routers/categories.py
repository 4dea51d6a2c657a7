from fastapi import APIRouter

from todolist.models.categories import Category, CreateCategoryRequest, UpdateCategoryRequest
from todolist.services import categories as categories_service

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("")
def list_categories() -> list[Category]:
    return categories_service.list_categories()


@router.get("/{category_id}")
def get_category(category_id: int) -> Category:
    return categories_service.get_category(category_id)


@router.post("", status_code=201)
def create_category(request: CreateCategoryRequest) -> Category:
    return categories_service.create_category(request.name, request.priority)


@router.put("/{category_id}")
def update_category(category_id: int, request: UpdateCategoryRequest) -> Category:
    return categories_service.update_category(category_id, request.model_dump(exclude_unset=True, exclude_none=True))


@router.delete("/{category_id}")
def delete_category(category_id: int) -> Category:
    return categories_service.delete_category(category_id)
