"""Console front end for the task client."""

from __future__ import annotations

import argparse
import asyncio
import logging
import shlex
from typing import List, Optional

from taskking.app.config import get_settings
from taskking.app.core.logging_config import configure_logging
from taskking.client.api import TaskApiClient
from taskking.client.app import TaskClient
from taskking.client.state import PRIORITIES, AppState, pending_count, sort_tasks

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  title <text>              set the draft title
  desc <text>               set the draft description
  priority High|Medium|Low  set the draft priority
  add                       create a task from the draft
  toggle <n>                mark task n done / not done
  delete <n>                delete task n
  dismiss                   close the current notification
  refresh                   reload the task list
  help                      show this help
  quit                      exit"""

SEVERITY_TAGS = {"success": "[OK]", "warning": "[WARN]", "error": "[ERROR]", "info": "[INFO]"}


def render(state: AppState) -> str:
    lines: List[str] = []
    if state.notification is not None:
        tag = SEVERITY_TAGS.get(state.notification.severity.value, "")
        lines.append(f"{tag} {state.notification.message}")
        lines.append("")

    lines.append("Task King")
    lines.append("=========")
    form = state.form
    lines.append("Add New Task")
    lines.append(f"  Title:       {form.title}")
    lines.append(f"  Description: {form.description}")
    choices = " ".join(f"[{p}]" if p == form.priority else p for p in PRIORITIES)
    lines.append(f"  Priority:    {choices}")
    lines.append("")

    lines.append(f"Task List ({pending_count(state)} Pending)")
    if not state.tasks:
        lines.append("  No tasks found. Start adding one!")
    for index, task in enumerate(sort_tasks(state.tasks), start=1):
        mark = "x" if task.get("completed") else " "
        lines.append(f"  {index:>2}. [{mark}] {task.get('title', '')}  (Priority: {task.get('priority', '')})")
        lines.append(f"      Description: {task.get('description', '')}")
    return "\n".join(lines)


def _task_id_at(client: TaskClient, position: str) -> Optional[str]:
    try:
        index = int(position)
    except ValueError:
        return None
    ordered = client.sorted_tasks()
    if 1 <= index <= len(ordered):
        return str(ordered[index - 1].get("id"))
    return None


async def handle_command(client: TaskClient, line: str) -> bool:
    """Run one console command; return False when the user asked to quit."""

    try:
        parts = shlex.split(line)
    except ValueError:
        parts = line.split()
    if not parts:
        return True

    command, args = parts[0].lower(), parts[1:]
    text = " ".join(args)

    if command in {"quit", "exit"}:
        return False
    if command == "help":
        print(HELP_TEXT)
    elif command == "title":
        client.update_form(title=text)
    elif command in {"desc", "description"}:
        client.update_form(description=text)
    elif command == "priority":
        match = next((p for p in PRIORITIES if p.lower() == text.lower()), None)
        if match is None:
            print(f"Priority must be one of: {', '.join(PRIORITIES)}")
        else:
            client.update_form(priority=match)
    elif command == "add":
        await client.add_task()
    elif command in {"toggle", "delete"}:
        task_id = _task_id_at(client, args[0]) if args else None
        if task_id is None:
            print(f"Usage: {command} <n> (n is the number shown in the list)")
        elif command == "toggle":
            await client.toggle_task(task_id)
        else:
            await client.delete_task(task_id)
    elif command == "dismiss":
        client.dismiss()
    elif command == "refresh":
        await client.fetch()
    else:
        print(f"Unknown command: {command}. Type 'help' for a list.")
    return True


class ConsoleView:
    """Prints the screen, and redraws it when a notification expires at the prompt."""

    def __init__(self) -> None:
        self.waiting = False
        self._shown = None

    def draw(self, state: AppState) -> None:
        print(render(state))
        self._shown = state.notification

    def on_change(self, state: AppState) -> None:
        if self.waiting and self._shown is not None and state.notification is None:
            print()
            self.draw(state)
            print("> ", end="", flush=True)


async def run_console(client: TaskClient, view: Optional[ConsoleView] = None) -> None:
    loop = asyncio.get_running_loop()
    view = view or ConsoleView()
    client.on_change = view.on_change
    await client.mount()
    view.draw(client.state)
    print("\nType 'help' for commands.")
    while True:
        view.waiting = True
        try:
            # read off the loop so the notification timer keeps running
            line = await loop.run_in_executor(None, input, "> ")
        except EOFError:
            break
        finally:
            view.waiting = False
        if not await handle_command(client, line):
            break
        view.draw(client.state)


async def _main_async(api_url: str, timeout: float, notification_seconds: float) -> None:
    async with TaskApiClient(api_url, timeout=timeout) as api:
        client = TaskClient(api, notification_seconds=notification_seconds)
        try:
            await run_console(client)
        finally:
            client.close()


def main(argv: Optional[List[str]] = None) -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Task King console client")
    parser.add_argument("--api-url", default=settings.api_url, help="Base URL of the task API")
    parser.add_argument("--timeout", type=float, default=settings.api_timeout)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    logger.debug("using API at %s", args.api_url)
    try:
        asyncio.run(_main_async(args.api_url, args.timeout, settings.notification_seconds))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
