import asyncio
import logging
from contextlib import asynccontextmanager, suppress

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.applications import Starlette
from starlette.routing import Mount

from todolist import db
from todolist.config import get_settings
from todolist.exceptions import NotFoundError, StorageError, ValidationError
from todolist.logging_setup import setup_logging
from todolist.mcp_server import mcp
from todolist.models.common import ErrorResponse
from todolist.routers.categories import router as categories_router
from todolist.routers.tasks import router as tasks_router
from todolist.services.categories import seed_store

logger = logging.getLogger(__name__)


# --- FastAPI app ---

api = FastAPI(title="Todolist", version="0.1.0")
api.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
api.include_router(categories_router)
api.include_router(tasks_router)


@api.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "To-Do List API running"


# --- Exception handlers ---

@api.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content=ErrorResponse(error_code="not_found", message=str(exc)).model_dump())


@api.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content=ErrorResponse(error_code="validation_error", message=str(exc)).model_dump())


@api.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content=ErrorResponse(error_code="storage_error", message=str(exc)).model_dump())


# --- Starlette root app ---

mcp_app = mcp.http_app(path="/", stateless_http=True)


async def connect_database() -> None:
    try:
        await db.ping()
        logger.info("Connected to MongoDB")
    except Exception as e:
        # Categories keep working without a database; task calls report the failure.
        logger.error("Could not connect to MongoDB: %s", e)


@asynccontextmanager
async def lifespan(app: Starlette):
    settings = get_settings()
    setup_logging(settings.log_level)
    seed_store(settings.seed_categories)
    # Serve right away; the database check only logs its outcome.
    connecting = asyncio.create_task(connect_database())
    try:
        async with mcp_app.lifespan(app):
            yield
    finally:
        connecting.cancel()
        with suppress(asyncio.CancelledError):
            await connecting


app = Starlette(
    lifespan=lifespan,
    routes=[
        Mount("/mcp", app=mcp_app),
        Mount("/", app=api),
    ],
)


def run():
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Serving on http://%s:%d", settings.host, settings.port)
    uvicorn.run(
        "todolist.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
