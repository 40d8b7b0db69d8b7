from fastapi.testclient import TestClient

from taskking.app.main import app


def _has_operation(path: str, method: str) -> bool:
    # included routers are flattened in the OpenAPI schema
    return method.lower() in app.openapi()["paths"].get(path, {})


def test_root_route_ok() -> None:
    client = TestClient(app)
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "Backend running"


def test_healthz_exists() -> None:
    client = TestClient(app)
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_task_routes_registered() -> None:
    assert _has_operation("/tasks", "GET")
    assert _has_operation("/tasks", "POST")
    assert _has_operation("/tasks/{task_id}", "PUT")
    assert _has_operation("/tasks/{task_id}", "DELETE")


def test_cors_allows_browser_clients() -> None:
    client = TestClient(app)
    r = client.options(
        "/tasks",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"},
    )
    assert r.status_code == 200
    assert r.headers.get("access-control-allow-origin") in {"*", "http://localhost:5173"}
