from pydantic import BaseModel


class Category(BaseModel):
    id: int
    name: str
    priority: int


class CreateCategoryRequest(BaseModel):
    name: str
    priority: int


class UpdateCategoryRequest(BaseModel):
    name: str | None = None
    priority: int | None = None
