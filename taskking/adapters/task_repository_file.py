"""File-backed task repository (default document store)."""

from __future__ import annotations

import json
import logging
import os
import re
import threading
from pathlib import Path
from typing import Any, Optional

from taskking.app.core.errors import TaskStoreError
from taskking.app.task_repo_utils import apply_task_schema, new_task_id
from taskking.ports.task_repository import ITaskRepository

logger = logging.getLogger(__name__)

_TASK_ID_RE = re.compile(r"^[0-9a-f]{24}$")


def _task_path(base: Path, task_id: str) -> Path:
    return base / f"{task_id}.json"


def _atomic_write(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    data = json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")
    with open(tmp_path, "wb") as handle:
        handle.write(data)
        handle.flush()
        os.fsync(handle.fileno())
    os.replace(tmp_path, path)


def _load_json(path: Path) -> dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


class FileTaskRepository(ITaskRepository):
    """Task repository persisted as one JSON document per task."""

    backend = "file"

    def __init__(self, base_dir: str | Path) -> None:
        self._base = Path(base_dir)
        self._lock = threading.Lock()

    def _path_for(self, task_id: str) -> Optional[Path]:
        if not _TASK_ID_RE.match(task_id or ""):
            return None
        return _task_path(self._base, task_id)

    def list(self) -> list[dict[str, Any]]:
        if not self._base.exists():
            return []
        results: list[dict[str, Any]] = []
        for path in sorted(self._base.glob("*.json")):
            try:
                results.append(_load_json(path))
            except FileNotFoundError:
                # deleted between the glob and the read
                continue
            except (OSError, ValueError) as exc:
                raise TaskStoreError(f"Failed reading task documents: {exc}", cause=exc) from exc
        return results

    def create(self, fields: dict[str, Any]) -> dict[str, Any]:
        doc = apply_task_schema(fields)
        task_id = new_task_id()
        payload = {"id": task_id, **doc}
        try:
            _atomic_write(_task_path(self._base, task_id), payload)
        except OSError as exc:
            raise TaskStoreError(f"Failed writing task {task_id}: {exc}", cause=exc) from exc
        logger.debug("stored task document", extra={"task_id": task_id, "op": "create", "backend": self.backend})
        return payload

    def update_by_id(self, task_id: str, fields: dict[str, Any]) -> Optional[dict[str, Any]]:
        path = self._path_for(task_id)
        if path is None:
            return None
        with self._lock:
            try:
                current = _load_json(path)
            except FileNotFoundError:
                return None
            except (OSError, ValueError) as exc:
                raise TaskStoreError(f"Failed reading task {task_id}: {exc}", cause=exc) from exc

            payload = {"id": task_id, **apply_task_schema(fields, base=current)}
            try:
                _atomic_write(path, payload)
            except OSError as exc:
                raise TaskStoreError(f"Failed writing task {task_id}: {exc}", cause=exc) from exc
        return payload

    def delete_by_id(self, task_id: str) -> bool:
        path = self._path_for(task_id)
        if path is None:
            return False
        with self._lock:
            try:
                path.unlink()
            except FileNotFoundError:
                return False
            except OSError as exc:
                raise TaskStoreError(f"Failed deleting task {task_id}: {exc}", cause=exc) from exc
        return True
