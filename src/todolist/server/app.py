"""FastAPI application exposing the task table over a JSON envelope API."""

from __future__ import annotations

import time

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from todolist import __version__
from todolist.models import NotFoundError, ValidationError
from todolist.services.task_service import TaskService
from todolist.utils.logger import get_logger

from .models import Envelope, TaskCreateRequest, TaskUpdateRequest


def _error(status_code: int, message: str) -> JSONResponse:
    body = Envelope(success=False, error=message).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


def create_app(service: TaskService | None = None) -> FastAPI:
    """Build the API application.

    Args:
        service: TaskService to serve. If None, one is built on the sqlite
            repository at the default database location.
    """
    app = FastAPI(title="todolist", version=__version__)
    logger = get_logger("server")

    if service is None:
        from todolist.adapters.sqlite import SqliteTaskRepository

        service = TaskService(SqliteTaskRepository())
    _service = service

    def get_service() -> TaskService:
        return _service

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s -> %s (%.1fms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return _error(exc.status_code, "Route not found")
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        logger.warning("rejected request body for %s: %s", request.url.path, exc.errors())
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid request body")

    @app.exception_handler(Exception)
    async def server_error(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/tasks", response_model=Envelope, response_model_exclude_none=True)
    async def list_tasks(svc: TaskService = Depends(get_service)):
        try:
            tasks = await svc.list_tasks()
        except Exception:
            logger.exception("error fetching tasks")
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch tasks")
        return Envelope(success=True, data=[task.to_api() for task in tasks])

    @app.post(
        "/api/tasks",
        response_model=Envelope,
        response_model_exclude_none=True,
        status_code=status.HTTP_201_CREATED,
    )
    async def create_task(payload: TaskCreateRequest, svc: TaskService = Depends(get_service)):
        try:
            task = await svc.create_task(payload.title)
        except ValidationError as e:
            return _error(status.HTTP_400_BAD_REQUEST, str(e))
        except Exception:
            logger.exception("error creating task")
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to create task")
        return Envelope(success=True, data=task.to_api())

    @app.put("/api/tasks/{task_id}", response_model=Envelope, response_model_exclude_none=True)
    async def update_task(
        task_id: str,
        payload: TaskUpdateRequest | None = None,
        svc: TaskService = Depends(get_service),
    ):
        payload = payload or TaskUpdateRequest()
        try:
            task = await svc.update_task(task_id, title=payload.title, is_done=payload.is_done)
        except NotFoundError:
            return _error(status.HTTP_404_NOT_FOUND, "Task not found")
        except Exception:
            logger.exception("error updating task %s", task_id)
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to update task")
        return Envelope(success=True, data=task.to_api())

    @app.delete("/api/tasks/{task_id}", response_model=Envelope, response_model_exclude_none=True)
    async def delete_task(task_id: str, svc: TaskService = Depends(get_service)):
        try:
            task = await svc.delete_task(task_id)
        except NotFoundError:
            return _error(status.HTTP_404_NOT_FOUND, "Task not found")
        except Exception:
            logger.exception("error deleting task %s", task_id)
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to delete task")
        return Envelope(success=True, data=task.to_api(), message="Task deleted successfully")

    @app.delete("/api/tasks-completed", response_model=Envelope, response_model_exclude_none=True)
    async def clear_completed(svc: TaskService = Depends(get_service)):
        try:
            count = await svc.clear_completed()
        except Exception:
            logger.exception("error clearing completed tasks")
            return _error(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to clear completed tasks"
            )
        return Envelope(success=True, deletedCount=count, message="Completed tasks cleared")

    return app
