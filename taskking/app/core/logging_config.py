import logging
import os
from typing import Any, Dict, Optional

_CONFIGURED = False

TASK_LOG_FIELDS = ("task", "op", "backend")


class SafeFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        if "task" not in record.__dict__ and "task_id" in record.__dict__:
            record.__dict__["task"] = record.__dict__["task_id"]
        for key in TASK_LOG_FIELDS:
            if key not in record.__dict__:
                record.__dict__[key] = "-"
        return super().format(record)


def store_log_context(repo: Any, op: str, task_id: Optional[str] = None) -> Dict[str, str]:
    """``extra`` for a log line about one store operation.

    ``backend`` comes from the repository (``file`` or ``sql``); ids are
    truncated so a hostile path segment cannot flood the log line.
    """

    context = {"op": op, "backend": getattr(repo, "backend", "-")}
    if task_id is not None:
        context["task"] = task_id if len(task_id) <= 32 else task_id[:32] + "..."
    return context


def configure_logging(level: Optional[str] = None) -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return

    level_name = (
        level
        or os.getenv("APP_LOG_LEVEL")
        or os.getenv("UVICORN_LOG_LEVEL")
        or os.getenv("LOG_LEVEL")
        or "INFO"
    ).upper()
    resolved_level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    if not root.handlers:
        fmt = "%(asctime)s %(levelname)s %(name)s " + " ".join(f"{key}=%({key})s" for key in TASK_LOG_FIELDS) + " %(message)s"
        handler = logging.StreamHandler()
        handler.setFormatter(SafeFormatter(fmt))
        root.addHandler(handler)

    root.setLevel(resolved_level)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logger = logging.getLogger(name)
        logger.setLevel(resolved_level)
        logger.propagate = False

    _CONFIGURED = True
