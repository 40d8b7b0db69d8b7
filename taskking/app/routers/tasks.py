"""Task API router: list, create, update and delete."""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from taskking.app.config import get_settings
from taskking.app.core.errors import TaskStoreError
from taskking.app.core.logging_config import store_log_context
from taskking.app.deps import get_task_repository
from taskking.app.schemas import MessageResponse, Task

logger = logging.getLogger(__name__)

api_router = APIRouter(tags=["tasks"])


def error_response(status_code: int, message: str, exc: Optional[BaseException] = None) -> JSONResponse:
    """Build the ``{message, error?}`` error body.

    The store's error text is only included when EXPOSE_STORE_ERRORS is on.
    """

    content = {"message": message}
    if exc is not None and get_settings().expose_store_errors:
        content["error"] = str(exc)
    return JSONResponse(status_code=status_code, content=content)


@api_router.get("/tasks", response_model=list[Task], responses={500: {"model": MessageResponse}})
def list_tasks(repo=Depends(get_task_repository)):
    """Return every stored task."""

    try:
        tasks = repo.list()
    except TaskStoreError as exc:
        logger.exception("listing tasks failed", extra=store_log_context(repo, "list"))
        return error_response(500, "Error fetching tasks", exc)
    return JSONResponse(status_code=200, content=tasks)


@api_router.post("/tasks", status_code=201, response_model=Task, responses={400: {"model": MessageResponse}})
def create_task(payload: Any = Body(default=None), repo=Depends(get_task_repository)):
    """Create a task; absent fields take the store's schema defaults."""

    try:
        task = repo.create({} if payload is None else payload)
    except TaskStoreError as exc:
        logger.warning("create rejected: %s", exc, extra=store_log_context(repo, "create"))
        return error_response(400, "Error creating task", exc)

    logger.info("created task", extra=store_log_context(repo, "create", task["id"]))
    return JSONResponse(status_code=201, content=task)


@api_router.put(
    "/tasks/{task_id}",
    response_model=Task,
    responses={400: {"model": MessageResponse}, 404: {"model": MessageResponse}},
)
def update_task(task_id: str, payload: Any = Body(default=None), repo=Depends(get_task_repository)):
    """Merge the given fields into an existing task.

    An id the store has never issued, malformed ones included, is a 404;
    only the body can make the request a 400.
    """

    try:
        task = repo.update_by_id(task_id, {} if payload is None else payload)
    except TaskStoreError as exc:
        logger.warning("update rejected: %s", exc, extra=store_log_context(repo, "update", task_id))
        return error_response(400, "Error updating task", exc)

    if task is None:
        return error_response(404, "Task not found")
    return JSONResponse(status_code=200, content=task)


@api_router.delete("/tasks/{task_id}", response_model=MessageResponse, responses={500: {"model": MessageResponse}})
def delete_task(task_id: str, repo=Depends(get_task_repository)):
    """Delete a task.

    A missing id is reported as success too: deletion is idempotent from the
    caller's point of view.
    """

    try:
        existed = repo.delete_by_id(task_id)
    except TaskStoreError as exc:
        logger.exception("delete failed", extra=store_log_context(repo, "delete", task_id))
        return error_response(500, "Error deleting task", exc)

    if not existed:
        logger.info("delete of unknown task", extra=store_log_context(repo, "delete", task_id))
    return JSONResponse(status_code=200, content={"message": "Task deleted successfully"})


router = api_router

__all__ = ["api_router", "error_response", "router"]
