"""Task client controller: runs API calls and feeds their outcomes to the state."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from taskking.client import state as st
from taskking.client.api import TaskApiClient, TaskApiError
from taskking.client.notifier import NotificationTimer

logger = logging.getLogger(__name__)


class TaskClient:
    """Holds the current ``AppState`` and performs the client operations.

    Every mutation is followed by a full re-fetch; the local cache is never
    patched from a mutation response.
    """

    def __init__(
        self,
        api: TaskApiClient,
        *,
        notification_seconds: float = 3.0,
        on_change: Optional[Callable[[st.AppState], None]] = None,
    ) -> None:
        self.api = api
        self.state = st.AppState()
        self.on_change = on_change
        self._timer = NotificationTimer(notification_seconds, self._expire_notification)

    def _set(self, new_state: st.AppState) -> None:
        previous = self.state.notification
        self.state = new_state
        current = new_state.notification
        if current is not None and current is not previous:
            self._timer.arm(current.seq)
        elif current is None:
            self._timer.cancel()
        if self.on_change is not None:
            self.on_change(new_state)

    def _expire_notification(self, seq: int) -> None:
        self._set(st.notification_cleared(self.state, seq))

    def dismiss(self) -> None:
        self._set(st.notification_cleared(self.state))

    def notify(self, message: str, severity: st.Severity) -> None:
        self._set(st.notification_shown(self.state, message, severity))

    def update_form(self, **changes: Optional[str]) -> None:
        self._set(st.form_changed(self.state, **changes))

    def sorted_tasks(self):
        return st.sort_tasks(self.state.tasks)

    async def mount(self) -> None:
        await self.fetch()

    async def fetch(self) -> None:
        new_state, token = st.fetch_requested(self.state)
        self._set(new_state)
        try:
            tasks = await self.api.list_tasks()
        except TaskApiError as exc:
            logger.warning("fetch %s failed: %s", token, exc)
            self._set(st.fetch_failed(self.state, token))
            return
        self._set(st.fetch_completed(self.state, token, tasks))

    async def add_task(self) -> None:
        new_state, payload = st.create_requested(self.state)
        self._set(new_state)
        if payload is None:
            return
        try:
            await self.api.create_task(payload)
        except TaskApiError as exc:
            logger.warning("create failed: %s", exc)
            self._set(st.create_failed(self.state))
            return
        self._set(st.create_succeeded(self.state))
        await self.fetch()

    async def toggle_task(self, task_id: str) -> None:
        payload = st.toggle_requested(self.state, task_id)
        if payload is None:
            return
        try:
            await self.api.update_task(task_id, payload)
        except TaskApiError as exc:
            logger.warning("toggle of %s failed: %s", task_id, exc)
            self._set(st.toggle_failed(self.state))
            return
        await self.fetch()

    async def delete_task(self, task_id: str) -> None:
        try:
            await self.api.delete_task(task_id)
        except TaskApiError as exc:
            logger.warning("delete of %s failed: %s", task_id, exc)
            self._set(st.delete_failed(self.state))
            return
        self._set(st.delete_succeeded(self.state))
        await self.fetch()

    def close(self) -> None:
        self._timer.cancel()
