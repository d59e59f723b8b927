import pytest

from mercadolivre_sdk import (
    BadRequestError,
    ConflictError,
    InsufficientPermissionsError,
    InvalidTokenError,
    MercadoLivreError,
    RateLimitError,
    ResourceNotFoundError,
    ServerError,
    TokenExpiredError,
    ValidationError,
    create_error_from_response,
    is_mercadolivre_error,
)
from tests.fakes import FakeResponse


@pytest.mark.parametrize("status, body, expected", [
    (400, {"message": "invalid price", "error": "bad_request"}, BadRequestError),
    (401, {"message": "invalid access token", "error": "invalid_token"}, InvalidTokenError),
    (401, {"message": "expired_token: token has expired"}, TokenExpiredError),
    (403, {"message": "forbidden"}, InsufficientPermissionsError),
    (404, {"message": "item not found", "error": "not_found"}, ResourceNotFoundError),
    (409, {"message": "conflict"}, ConflictError),
    (422, {"message": "unprocessable"}, ValidationError),
    (429, {"message": "too many requests"}, RateLimitError),
    (500, {"message": "internal error"}, ServerError),
    (503, {"message": "unavailable"}, ServerError),
])
def test_status_maps_to_error_class(status, body, expected):
    error = create_error_from_response(FakeResponse(status, body))

    assert type(error) is expected
    assert error.status_code == status
    assert error.response == body
    assert error.message == body["message"]


def test_bad_request_is_a_validation_error():
    error = create_error_from_response(FakeResponse(400, {"message": "x"}))
    assert isinstance(error, ValidationError)


def test_unmapped_status_returns_base_error():
    error = create_error_from_response(FakeResponse(418, {"message": "teapot"}))

    assert type(error) is MercadoLivreError
    assert error.status_code == 418
    assert error.error_code == "418"


def test_error_code_prefers_code_field():
    body = {"message": "invalid", "error": "validation_error", "code": "item.price.invalid"}
    error = create_error_from_response(FakeResponse(400, body))
    assert error.error_code == "item.price.invalid"


def test_message_falls_back_to_error_field():
    error = create_error_from_response(FakeResponse(404, {"error": "not_found"}))

    assert error.message == "not_found"
    assert error.error_code == "not_found"


def test_non_json_body_is_kept_as_text():
    error = create_error_from_response(FakeResponse(502, "Bad Gateway", content_type="text/html"))

    assert isinstance(error, ServerError)
    assert error.status_code == 502
    assert error.response == "Bad Gateway"
    assert error.message == "Erro desconhecido"


def test_rate_limit_reads_retry_after_header():
    response = FakeResponse(429, {"message": "slow down"}, headers={"Retry-After": "30"})
    error = create_error_from_response(response)

    assert error.retry_after == 30
    assert error.to_dict()["retry_after"] == 30


def test_defaults_and_to_dict():
    error = TokenExpiredError()

    assert error.status_code == 401
    assert error.error_code == "TOKEN_EXPIRED"
    assert error.to_dict() == {
        "name": "TokenExpiredError",
        "message": "Token de acesso expirado",
        "status_code": 401,
        "error_code": "TOKEN_EXPIRED",
        "response": None,
    }
    assert str(error) == "Token de acesso expirado"


def test_is_mercadolivre_error():
    assert is_mercadolivre_error(ServerError())
    assert not is_mercadolivre_error(ValueError("x"))
