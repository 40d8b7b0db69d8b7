"""Port interface for task persistence (repository boundary)."""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class ITaskRepository(Protocol):
    """Task store abstraction for list/create/update/delete operations.

    Tasks cross this boundary as plain dicts carrying ``id``, ``title``,
    ``description``, ``priority`` and ``completed``.
    """

    backend: str

    def list(self) -> list[dict[str, Any]]:
        """Return every stored task; order is not part of the contract."""

    def create(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Assign a new id, apply fields over schema defaults and persist."""

    def update_by_id(self, task_id: str, fields: dict[str, Any]) -> Optional[dict[str, Any]]:
        """Merge fields into an existing task; None when the id is unknown."""

    def delete_by_id(self, task_id: str) -> bool:
        """Remove a task; return whether a record existed."""
