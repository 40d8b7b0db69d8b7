import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from taskking.app.config import get_settings
from taskking.app.core.logging_config import configure_logging
from taskking.app.deps import get_task_repository
from taskking.app.routers import tasks as tasks_router

configure_logging(get_settings().log_level)
logger = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(title="Task King", version="1.0.0", docs_url="/docs", redoc_url=None)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tasks_router.api_router)


@app.exception_handler(RequestValidationError)
async def request_body_error(request: Request, exc: RequestValidationError):
    logger.warning("malformed request to %s %s", request.method, request.url.path)
    return tasks_router.error_response(400, "Invalid request body", exc)


@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Backend running"


@app.get("/healthz")
def healthz() -> dict:
    return {"status": "ok", "backend": get_settings().task_repo_backend}


def run() -> None:
    """Console entry point: serve the app with uvicorn."""

    import uvicorn

    app_settings = get_settings()
    repo = get_task_repository()
    logger.info("Server listening on port %s", app_settings.port, extra={"backend": repo.backend})
    uvicorn.run(app, host=app_settings.host, port=app_settings.port)


if __name__ == "__main__":
    run()
