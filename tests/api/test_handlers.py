from __future__ import annotations

import logging
from typing import AsyncIterator, cast

import pytest
import pytest_asyncio
from fastapi import FastAPI, HTTPException
from fastapi.routing import APIRouter
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, Field
from starlette.types import ASGIApp

from api_errors.api import handlers as handlers_module
from api_errors.api.handlers import error_response, register_exception_handlers
from api_errors.api.middleware import RequestIDMiddleware
from api_errors.core import catalog
from api_errors.core.errors import new_database_error, wrap_database_error
from api_errors.core.logging import get_request_id


class SignupPayload(BaseModel):
    email: str = Field(min_length=3)


def _build_test_router() -> APIRouter:
    router = APIRouter()

    @router.get("/users/{user_id}")
    async def get_user(user_id: int) -> None:
        raise catalog.USER_NOT_FOUND.with_detail(f"id={user_id}")

    @router.get("/db-failure")
    async def db_failure() -> None:
        err = wrap_database_error("DB_QUERY", RuntimeError("relation users does not exist"))
        assert err is not None
        raise err

    @router.post("/signup")
    async def signup(payload: SignupPayload) -> SignupPayload:
        return payload

    @router.get("/http-error")
    async def raise_http_exc() -> None:
        raise HTTPException(status_code=403, detail="Forbidden")

    @router.get("/http-error-with-payload")
    async def raise_http_exc_with_payload() -> None:
        raise HTTPException(
            status_code=409,
            detail={"code": "EMAIL_EXISTS", "message": "Email in use", "detail": "a@b.com"},
        )

    @router.get("/crash")
    async def raise_generic_exc() -> None:
        raise RuntimeError("boom: secret connection string")

    return router


@pytest.fixture(scope="module")
def error_test_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)
    app.add_middleware(RequestIDMiddleware)
    app.include_router(_build_test_router())
    return app


@pytest_asyncio.fixture
async def error_test_client(error_test_app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(
        app=cast(ASGIApp, error_test_app),  # type: ignore[arg-type]
        raise_app_exceptions=False,
    )
    client = AsyncClient(transport=transport, base_url="http://testserver")
    try:
        yield client
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_classified_error_is_rendered_with_its_status(
    error_test_client: AsyncClient,
) -> None:
    response = await error_test_client.get("/users/42")

    assert response.status_code == 404
    assert response.headers["content-type"] == "application/json"
    assert response.json() == {
        "error": True,
        "category": "NOT_FOUND_ERROR",
        "code": "USER_NOT_FOUND",
        "message": "User not found",
        "http_status": 404,
        "detail": "id=42",
    }


@pytest.mark.asyncio
async def test_wrapped_database_error_exposes_detail_but_not_cause(
    error_test_client: AsyncClient,
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.ERROR, logger="api_errors.errors"):
        response = await error_test_client.get("/db-failure")

    assert response.status_code == 500
    payload = response.json()
    assert payload["category"] == "DATABASE_ERROR"
    assert payload["detail"] == "relation users does not exist"
    assert "cause" not in payload

    record = next(r for r in caplog.records if r.name == "api_errors.errors")
    assert record.error_code == "DB_QUERY"
    assert record.exc_info is not None


@pytest.mark.asyncio
async def test_request_validation_is_reported_as_validation_error(
    error_test_client: AsyncClient,
) -> None:
    response = await error_test_client.post("/signup", json={"email": ""})

    assert response.status_code == 400
    payload = response.json()
    assert payload["category"] == "VALIDATION_ERROR"
    assert payload["code"] == "REQUEST_VALIDATION_FAILED"
    assert payload["detail"].startswith("email:")


@pytest.mark.asyncio
async def test_http_exception_maps_status_to_category(error_test_client: AsyncClient) -> None:
    response = await error_test_client.get("/http-error")

    assert response.status_code == 403
    payload = response.json()
    assert payload["category"] == "AUTHORIZATION_ERROR"
    assert payload["message"] == "Forbidden"


@pytest.mark.asyncio
async def test_http_exception_payload_preserves_code(error_test_client: AsyncClient) -> None:
    response = await error_test_client.get("/http-error-with-payload")

    assert response.status_code == 409
    payload = response.json()
    assert payload["category"] == "CONFLICT_ERROR"
    assert payload["code"] == "EMAIL_EXISTS"
    assert payload["detail"] == "a@b.com"


@pytest.mark.asyncio
async def test_unknown_route_is_not_found(error_test_client: AsyncClient) -> None:
    response = await error_test_client.get("/nowhere")

    assert response.status_code == 404
    assert response.json()["category"] == "NOT_FOUND_ERROR"


@pytest.mark.asyncio
async def test_wrong_method_is_method_not_allowed(error_test_client: AsyncClient) -> None:
    response = await error_test_client.delete("/users/1")

    assert response.status_code == 405
    payload = response.json()
    assert payload["category"] == "METHOD_ERROR"
    assert "GET" in payload["detail"]
    assert "GET" in response.headers["allow"]


@pytest.mark.asyncio
async def test_unhandled_exception_is_masked_as_internal_error(
    error_test_client: AsyncClient,
) -> None:
    response = await error_test_client.get("/crash")

    assert response.status_code == 500
    payload = response.json()
    assert payload["category"] == "INTERNAL_ERROR"
    assert payload["code"] == "UNKNOWN_ERROR"
    assert "cause" not in payload


@pytest.mark.asyncio
async def test_request_id_is_echoed(error_test_client: AsyncClient) -> None:
    response = await error_test_client.get("/users/7", headers={"X-Request-ID": "req-abc"})

    assert response.headers["X-Request-ID"] == "req-abc"


@pytest.mark.asyncio
async def test_request_id_is_generated_when_missing(error_test_client: AsyncClient) -> None:
    response = await error_test_client.post("/signup", json={"email": "x"})

    request_id = response.headers["X-Request-ID"]
    assert response.status_code == 400
    assert len(request_id) == 32
    int(request_id, 16)


class _RequestIdRecorder(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.seen: list[str | None] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.seen.append(get_request_id())


@pytest.mark.asyncio
async def test_crash_response_carries_request_id(error_test_client: AsyncClient) -> None:
    recorder = _RequestIdRecorder()
    errors_logger = logging.getLogger("api_errors.errors")
    errors_logger.addHandler(recorder)
    try:
        response = await error_test_client.get("/crash", headers={"X-Request-ID": "req-crash"})
    finally:
        errors_logger.removeHandler(recorder)

    assert response.status_code == 500
    assert response.headers["X-Request-ID"] == "req-crash"
    assert recorder.seen == ["req-crash"]
    assert get_request_id() is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "log_client_errors, expected_level",
    [(False, logging.INFO), (True, logging.WARNING)],
)
async def test_client_error_log_level_follows_settings(
    error_test_client: AsyncClient,
    caplog: pytest.LogCaptureFixture,
    monkeypatch: pytest.MonkeyPatch,
    log_client_errors: bool,
    expected_level: int,
) -> None:
    monkeypatch.setattr(handlers_module.settings, "log_client_errors", log_client_errors)

    with caplog.at_level(logging.DEBUG, logger="api_errors.errors"):
        response = await error_test_client.get("/users/5")

    assert response.status_code == 404
    records = [r for r in caplog.records if r.name == "api_errors.errors"]
    assert [r.levelno for r in records] == [expected_level]
    assert records[0].error_code == "USER_NOT_FOUND"
    assert records[0].exc_info is None


def test_error_response_helper() -> None:
    assert error_response(None) is None

    response = error_response(new_database_error("DB_QUERY", "Query failed"))

    assert response is not None
    assert response.status_code == 500
    assert response.media_type == "application/json"
    assert b'"code":"DB_QUERY"' in response.body
