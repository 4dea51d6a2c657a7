from pydantic import BaseModel, ConfigDict, Field


class Task(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str | None = None
    category_id: int = Field(alias="categoryId")
    completed: bool = False


class CreateTaskRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1)
    description: str | None = None
    category_id: int = Field(alias="categoryId")
    # "completed" is accepted and ignored: new tasks always start open


class UpdateTaskRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    category_id: int | None = Field(default=None, alias="categoryId")
    completed: bool | None = None

    def changes(self) -> dict:
        """Fields the caller actually supplied, keyed by their stored (camelCase) names."""
        return self.model_dump(exclude_unset=True, exclude_none=True, by_alias=True)
