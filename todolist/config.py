from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 5000
    mongo_uri: str = ""
    mongo_db: str = "todolist"
    tasks_collection: str = "tasks"
    mongo_timeout_ms: int = 2000
    log_level: str = "INFO"
    seed_categories: bool = True
    cors_origins: list[str] = ["*"]
    api_url: str = "http://localhost:5000"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
