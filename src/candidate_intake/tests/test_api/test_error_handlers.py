import pytest
from fastapi import FastAPI
from starlette.testclient import TestClient

from candidate_intake.api.v1.error_handlers import register_exception_handlers
from candidate_intake.exceptions.base import (
    ConnectionFailureError,
    DuplicateEmailError,
    InvalidPhoneError,
    RecordNotFoundError,
)
from candidate_intake.tests.test_fixtures.candidate_fixtures import StructuredStorageError


def make_app(exc: Exception) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    def boom():
        raise exc

    return app


@pytest.mark.parametrize(
    "exc, status",
    [
        (InvalidPhoneError("phone"), 422),
        (DuplicateEmailError(), 409),
        (RecordNotFoundError(), 404),
        (ConnectionFailureError(), 503),
    ],
)
def test_candidate_errors_map_to_status(exc, status):
    client = TestClient(make_app(exc))
    resp = client.get("/boom")
    assert resp.status_code == status
    assert resp.json() == exc.to_payload()


def test_unclassified_storage_error_is_a_server_error():
    exc = StructuredStorageError("fk violation", code="P2003", meta={"field_name": "candidate_id"})
    client = TestClient(make_app(exc), raise_server_exceptions=False)
    resp = client.get("/boom")
    assert resp.status_code == 500
