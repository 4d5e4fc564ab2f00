from fastapi import APIRouter
from fastapi.testclient import TestClient

from invoicer.app.core.errors import InvoicerError


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_unknown_api_path_returns_404_error_body(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert "error" in response.json()


def test_unsupported_method_is_reported_as_404(client):
    response = client.patch("/api/settings")
    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}


def test_api_preflight_returns_204_with_cors_headers(client):
    response = client.options("/api/invoices")
    assert response.status_code == 204
    assert response.headers["access-control-allow-origin"] == "*"
    assert "Authorization" in response.headers["access-control-allow-headers"]
    assert "DELETE" in response.headers["access-control-allow-methods"]


def test_api_responses_carry_cors_header(client):
    response = client.get("/api/invoices", headers={"Origin": "http://localhost:5173"})
    assert response.status_code == 401
    assert response.headers["access-control-allow-origin"] == "*"


def test_unexpected_errors_return_generic_500(app):
    router = APIRouter()

    @router.get("/api/boom")
    def boom():
        raise RuntimeError("secret internals")

    @router.get("/api/domain-boom")
    def domain_boom():
        raise InvoicerError("database exploded")

    app.include_router(router)
    with TestClient(app, raise_server_exceptions=False) as client:
        for path in ("/api/boom", "/api/domain-boom"):
            response = client.get(path)
            assert response.status_code == 500
            assert response.json() == {"error": "Internal server error"}
            assert response.headers["access-control-allow-origin"] == "*"


def test_database_handle_lives_on_app_state(app):
    with TestClient(app):
        assert app.state.database.engine is not None
