"""Helpers for applying the task document schema to store payloads."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional
from uuid import uuid4

from pydantic import ValidationError

from taskking.app.core.errors import TaskValidationError
from taskking.app.schemas import TaskFields


_IMMUTABLE_KEYS = ("id", "_id")


def new_task_id() -> str:
    return uuid4().hex[:24]


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "task"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def apply_task_schema(
    fields: Any, base: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """Merge ``fields`` over ``base`` (or schema defaults) and coerce the result.

    Returns the coerced field dict without an id. Raises TaskValidationError
    when a value cannot be coerced.
    """

    if not isinstance(fields, Mapping):
        raise TaskValidationError("Task fields must be a JSON object")

    merged: Dict[str, Any] = {}
    if base:
        merged.update({k: v for k, v in base.items() if k not in _IMMUTABLE_KEYS})
    merged.update({k: v for k, v in fields.items() if k not in _IMMUTABLE_KEYS})

    try:
        doc = TaskFields.model_validate(merged)
    except ValidationError as exc:
        raise TaskValidationError(_format_validation_error(exc), cause=exc) from exc
    return doc.model_dump()
