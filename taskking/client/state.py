"""Client application state and the pure transitions that drive it.

Every user or network event maps to one function here taking the current
``AppState`` and returning a new one. Nothing in this module performs I/O, so
any front end (console, web, desktop) can drive the same transitions.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Tuple

PRIORITIES = ("High", "Medium", "Low")
PRIORITY_RANK = {"High": 3, "Medium": 2, "Low": 1}

MSG_CONNECT_FAILED = "Could not connect to backend API"
MSG_TITLE_EMPTY = "Title cannot be empty."
MSG_CREATED = "Task created successfully."
MSG_CREATE_FAILED = "Failed to create task."
MSG_UPDATE_FAILED = "Failed to update task."
MSG_DELETED = "Task deleted successfully."
MSG_DELETE_FAILED = "Failed to delete task."


class Severity(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    message: str
    severity: Severity
    # identifies which message a pending dismissal was armed for
    seq: int


@dataclass(frozen=True)
class TaskForm:
    title: str = ""
    description: str = ""
    priority: str = "Low"

    def to_payload(self) -> dict[str, Any]:
        return {"title": self.title, "description": self.description, "priority": self.priority}


@dataclass(frozen=True)
class AppState:
    tasks: Tuple[Mapping[str, Any], ...] = ()
    form: TaskForm = field(default_factory=TaskForm)
    notification: Optional[Notification] = None
    fetch_seq: int = 0
    notice_seq: int = 0


# -- ordering ---------------------------------------------------------------

def display_key(task: Mapping[str, Any]) -> Tuple[bool, int]:
    """Incomplete tasks first; within the same state, higher priority first."""

    return (bool(task.get("completed")), -PRIORITY_RANK.get(str(task.get("priority")), 0))


def sort_tasks(tasks: Iterable[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
    return sorted(tasks, key=display_key)


def pending_count(state: AppState) -> int:
    return sum(1 for t in state.tasks if not t.get("completed"))


# -- notifications ----------------------------------------------------------

def notification_shown(state: AppState, message: str, severity: Severity) -> AppState:
    seq = state.notice_seq + 1
    return replace(state, notification=Notification(message, Severity(severity), seq), notice_seq=seq)


def notification_cleared(state: AppState, seq: Optional[int] = None) -> AppState:
    """Clear the visible message.

    With ``seq`` set, only the message with that sequence number is cleared;
    a timer armed for an older message leaves a newer one in place.
    """

    if state.notification is None:
        return state
    if seq is not None and state.notification.seq != seq:
        return state
    return replace(state, notification=None)


# -- fetch ------------------------------------------------------------------

def fetch_requested(state: AppState) -> Tuple[AppState, int]:
    token = state.fetch_seq + 1
    return replace(state, fetch_seq=token), token


def fetch_completed(state: AppState, token: int, tasks: Iterable[Mapping[str, Any]]) -> AppState:
    """Replace the cache, unless a newer fetch was issued after this one."""

    if token != state.fetch_seq:
        return state
    return replace(state, tasks=tuple(tasks))


def fetch_failed(state: AppState, token: int) -> AppState:
    if token != state.fetch_seq:
        return state
    return notification_shown(state, MSG_CONNECT_FAILED, Severity.ERROR)


# -- form / create ----------------------------------------------------------

def form_changed(state: AppState, **changes: Optional[str]) -> AppState:
    changes = {k: v for k, v in changes.items() if v is not None}
    unknown = set(changes) - {"title", "description", "priority"}
    if unknown:
        raise ValueError(f"Unknown form field(s): {', '.join(sorted(unknown))}")
    priority = changes.get("priority")
    if priority is not None and priority not in PRIORITIES:
        raise ValueError(f"Priority must be one of: {', '.join(PRIORITIES)}")
    return replace(state, form=replace(state.form, **changes))


def create_requested(state: AppState) -> Tuple[AppState, Optional[dict[str, Any]]]:
    """Return the request payload, or None with a warning when the title is blank."""

    if not state.form.title.strip():
        return notification_shown(state, MSG_TITLE_EMPTY, Severity.WARNING), None
    return state, state.form.to_payload()


def create_succeeded(state: AppState) -> AppState:
    state = replace(state, form=TaskForm())
    return notification_shown(state, MSG_CREATED, Severity.SUCCESS)


def create_failed(state: AppState) -> AppState:
    return notification_shown(state, MSG_CREATE_FAILED, Severity.ERROR)


# -- toggle / delete --------------------------------------------------------

def find_task(state: AppState, task_id: str) -> Optional[Mapping[str, Any]]:
    for task in state.tasks:
        if task.get("id") == task_id:
            return task
    return None


def toggle_requested(state: AppState, task_id: str) -> Optional[dict[str, Any]]:
    """Partial update flipping only ``completed``; None if the id is not cached."""

    task = find_task(state, task_id)
    if task is None:
        return None
    return {"completed": not bool(task.get("completed"))}


def toggle_failed(state: AppState) -> AppState:
    return notification_shown(state, MSG_UPDATE_FAILED, Severity.ERROR)


def delete_succeeded(state: AppState) -> AppState:
    return notification_shown(state, MSG_DELETED, Severity.INFO)


def delete_failed(state: AppState) -> AppState:
    return notification_shown(state, MSG_DELETE_FAILED, Severity.ERROR)
