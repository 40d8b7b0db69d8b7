"""Dependency providers for the task store port."""

from __future__ import annotations

import logging
from functools import lru_cache

from taskking.app.config import get_settings
from taskking.ports.task_repository import ITaskRepository

logger = logging.getLogger(__name__)


@lru_cache()
def get_task_repository() -> ITaskRepository:
    """Return the configured task repository (one instance per process)."""

    settings = get_settings()
    backend = (settings.task_repo_backend or "file").lower()
    logger.info("TaskRepository backend=%s", backend, extra={"backend": backend})
    if backend in {"sql", "sqlite", "database"}:
        from taskking.app.adapters.repo_sql import SQLAlchemyTaskRepository
        from taskking.app.db import create_db_engine, create_session_factory

        engine = create_db_engine(settings.database_url)
        return SQLAlchemyTaskRepository(create_session_factory(engine))
    if backend != "file":
        raise RuntimeError(f"Unsupported TASK_REPO_BACKEND: {backend}")

    from taskking.adapters.task_repository_file import FileTaskRepository

    return FileTaskRepository(settings.task_store_dir)
