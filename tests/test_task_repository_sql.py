from __future__ import annotations

from pathlib import Path

import pytest


def _repo(tmp_path: Path):
    from taskking.app.adapters.repo_sql import SQLAlchemyTaskRepository
    from taskking.app.db import create_db_engine, create_session_factory

    engine = create_db_engine(f"sqlite:///{tmp_path / 'tasks.db'}")
    return SQLAlchemyTaskRepository(create_session_factory(engine))


def test_create_applies_schema_defaults(tmp_path: Path) -> None:
    repo = _repo(tmp_path)

    created = repo.create({"title": "only a title"})

    assert created["title"] == "only a title"
    assert created["description"] == ""
    assert created["priority"] == "Low"
    assert created["completed"] is False
    assert repo.list() == [created]


def test_update_is_partial_merge(tmp_path: Path) -> None:
    repo = _repo(tmp_path)
    created = repo.create({"title": "t", "priority": "High"})

    updated = repo.update_by_id(created["id"], {"description": "notes"})

    assert updated == {**created, "description": "notes"}


def test_update_unknown_id_returns_none(tmp_path: Path) -> None:
    assert _repo(tmp_path).update_by_id("missing", {"completed": True}) is None


def test_create_rejects_bad_completed_value(tmp_path: Path) -> None:
    from taskking.app.core.errors import TaskValidationError

    repo = _repo(tmp_path)
    with pytest.raises(TaskValidationError) as excinfo:
        repo.create({"title": "t", "completed": "sometimes"})
    assert "completed" in excinfo.value.message
    assert repo.list() == []


def test_delete_reports_whether_record_existed(tmp_path: Path) -> None:
    repo = _repo(tmp_path)
    created = repo.create({"title": "t"})

    assert repo.delete_by_id(created["id"]) is True
    assert repo.delete_by_id(created["id"]) is False


def test_repository_selector_uses_settings(monkeypatch, tmp_path: Path) -> None:
    from taskking.app import deps
    from taskking.app.config import get_settings

    monkeypatch.setenv("TASK_REPO_BACKEND", "sql")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'selected.db'}")
    get_settings.cache_clear()
    deps.get_task_repository.cache_clear()
    try:
        repo = deps.get_task_repository()
        assert repo.backend == "sql"
        assert repo.create({"title": "via selector"})["title"] == "via selector"
    finally:
        get_settings.cache_clear()
        deps.get_task_repository.cache_clear()
