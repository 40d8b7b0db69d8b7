from __future__ import annotations

import pytest

from taskking.client import state as st


def test_display_order_completion_dominates_priority() -> None:
    tasks = [
        {"id": "a", "completed": False, "priority": "Low"},
        {"id": "b", "completed": False, "priority": "High"},
        {"id": "c", "completed": True, "priority": "High"},
    ]

    ordered = st.sort_tasks(tasks)

    assert [t["id"] for t in ordered] == ["b", "a", "c"]
    # cached order is left alone
    assert [t["id"] for t in tasks] == ["a", "b", "c"]


def test_display_order_ranks_medium_between() -> None:
    tasks = [
        {"id": "low", "completed": True, "priority": "Low"},
        {"id": "med", "completed": True, "priority": "Medium"},
        {"id": "high", "completed": True, "priority": "High"},
    ]
    assert [t["id"] for t in st.sort_tasks(tasks)] == ["high", "med", "low"]


def test_empty_title_is_rejected_and_draft_kept() -> None:
    state = st.form_changed(st.AppState(), title="   ", description="details", priority="High")

    new_state, payload = st.create_requested(state)

    assert payload is None
    assert new_state.notification.severity is st.Severity.WARNING
    assert new_state.notification.message == st.MSG_TITLE_EMPTY
    assert new_state.form.description == "details"
    assert new_state.form.priority == "High"


def test_create_succeeded_resets_form() -> None:
    state = st.form_changed(st.AppState(), title="t", description="d", priority="Medium")

    state, payload = st.create_requested(state)
    assert payload == {"title": "t", "description": "d", "priority": "Medium"}

    state = st.create_succeeded(state)
    assert state.form == st.TaskForm()
    assert state.notification.severity is st.Severity.SUCCESS


def test_form_changed_rejects_unknown_priority() -> None:
    with pytest.raises(ValueError):
        st.form_changed(st.AppState(), priority="Urgent")


def test_stale_fetch_result_is_ignored() -> None:
    state, first = st.fetch_requested(st.AppState())
    state, second = st.fetch_requested(state)

    state = st.fetch_completed(state, second, [{"id": "new"}])
    state = st.fetch_completed(state, first, [{"id": "old"}])

    assert state.tasks == ({"id": "new"},)


def test_fetch_failure_only_reported_for_latest_fetch() -> None:
    state, first = st.fetch_requested(st.AppState())
    state, second = st.fetch_requested(state)

    assert st.fetch_failed(state, first).notification is None
    failed = st.fetch_failed(state, second)
    assert failed.notification.message == st.MSG_CONNECT_FAILED
    assert failed.notification.severity is st.Severity.ERROR


def test_new_notification_replaces_old_one() -> None:
    state = st.notification_shown(st.AppState(), "first", st.Severity.INFO)
    old_seq = state.notification.seq
    state = st.notification_shown(state, "second", st.Severity.ERROR)

    assert state.notification.message == "second"
    # a dismissal armed for the first message does not clear the second
    assert st.notification_cleared(state, old_seq).notification.message == "second"
    assert st.notification_cleared(state, state.notification.seq).notification is None
    assert st.notification_cleared(state).notification is None


def test_toggle_flips_only_completed() -> None:
    state, token = st.fetch_requested(st.AppState())
    state = st.fetch_completed(state, token, [{"id": "a", "completed": False, "priority": "Low"}])

    assert st.toggle_requested(state, "a") == {"completed": True}
    assert st.toggle_requested(state, "missing") is None


def test_pending_count() -> None:
    state, token = st.fetch_requested(st.AppState())
    state = st.fetch_completed(
        state, token, [{"id": "a", "completed": False}, {"id": "b", "completed": True}, {"id": "c"}]
    )
    assert st.pending_count(state) == 2
