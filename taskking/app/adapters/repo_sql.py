from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from taskking.app.core.errors import TaskStoreError
from taskking.app.models import TaskRecord
from taskking.app.task_repo_utils import apply_task_schema, new_task_id
from taskking.ports.task_repository import ITaskRepository


class SQLAlchemyTaskRepository(ITaskRepository):
    backend = "sql"

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def list(self) -> List[Dict[str, Any]]:
        try:
            with self._session_factory() as session:
                return [t.to_dict() for t in session.query(TaskRecord).all()]
        except SQLAlchemyError as exc:
            raise TaskStoreError(f"Failed listing tasks: {exc}", cause=exc) from exc

    def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        doc = apply_task_schema(fields)
        task = TaskRecord(id=new_task_id(), **doc)
        try:
            with self._session_factory() as session:
                session.add(task)
                session.commit()
                return task.to_dict()
        except SQLAlchemyError as exc:
            raise TaskStoreError(f"Failed creating task: {exc}", cause=exc) from exc

    def update_by_id(self, task_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            with self._session_factory() as session:
                # row lock where the dialect supports it; SQLite ignores it
                task = session.query(TaskRecord).filter(TaskRecord.id == task_id).with_for_update().first()
                if task is None:
                    return None
                doc = apply_task_schema(fields, base=task.to_dict())
                for key, value in doc.items():
                    setattr(task, key, value)
                session.commit()
                return task.to_dict()
        except SQLAlchemyError as exc:
            raise TaskStoreError(f"Failed updating task {task_id}: {exc}", cause=exc) from exc

    def delete_by_id(self, task_id: str) -> bool:
        try:
            with self._session_factory() as session:
                deleted = session.query(TaskRecord).filter(TaskRecord.id == task_id).delete()
                session.commit()
                return bool(deleted)
        except SQLAlchemyError as exc:
            raise TaskStoreError(f"Failed deleting task {task_id}: {exc}", cause=exc) from exc
