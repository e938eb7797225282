import json
from http import HTTPStatus
from types import SimpleNamespace
from typing import Any, cast

import pytest

from core.models.errors import (
    DynamoDBError,
    NoImageError,
    NotFoundError,
    UploadFailedError,
    UploadTimeoutError,
    ValidationError,
)
from core.utils.decorators import admin_required, api_gateway_handler, is_admin
from core.utils.response import JsonDict, ResponseBuilder


def parse_body(resp: dict[str, Any]) -> dict[str, Any]:
    """Parse JSON body from API Gateway response."""
    body = resp.get("body")
    if not body:
        return {}
    return cast(dict[str, Any], json.loads(body))


def raising(exc: Exception):
    @api_gateway_handler
    def handler(event: Any, context: Any) -> JsonDict:
        raise exc

    return handler


def test_api_handler_success() -> None:
    @api_gateway_handler
    def handler(event: Any, context: Any) -> JsonDict:
        return ResponseBuilder.ok({"msg": "ok"}, request_id=context.aws_request_id)

    resp = handler({}, SimpleNamespace(aws_request_id="req-ok"))
    parsed = parse_body(resp)

    assert resp["statusCode"] == HTTPStatus.OK
    assert parsed == {"msg": "ok", "request_id": "req-ok"}


def test_api_handler_options_preflight() -> None:
    @api_gateway_handler
    def handler(event: Any, context: Any) -> JsonDict:  # pragma: no cover
        raise AssertionError("Should not be called")

    resp = handler({"httpMethod": "OPTIONS"}, SimpleNamespace())

    assert resp["statusCode"] == HTTPStatus.NO_CONTENT
    assert resp["body"] == ""
    assert "Access-Control-Allow-Methods" in resp["headers"]


@pytest.mark.parametrize(
    "exc,status,error",
    [
        (NotFoundError(message="Food item not found"), HTTPStatus.NOT_FOUND, "NOT_FOUND"),
        (ValidationError(message="Invalid food id"), HTTPStatus.BAD_REQUEST, "VALIDATION_FAILED"),
        (NoImageError(), HTTPStatus.BAD_REQUEST, "NO_IMAGE"),
        (UploadFailedError(cause="403"), HTTPStatus.BAD_REQUEST, "IMAGE_UPLOAD_FAILED"),
        (UploadTimeoutError(), HTTPStatus.GATEWAY_TIMEOUT, "UPLOAD_TIMEOUT"),
        (DynamoDBError(message="Unable to list food items"), HTTPStatus.INTERNAL_SERVER_ERROR, "DYNAMODB_ERROR"),
    ],
)
def test_escaped_domain_errors_are_mapped(exc, status, error) -> None:
    resp = raising(exc)({}, SimpleNamespace())
    parsed = parse_body(resp)

    assert resp["statusCode"] == status
    assert parsed["error"] == error
    assert parsed["message"] == exc.message


def test_value_error_returns_400_with_friendly_message() -> None:
    resp = raising(ValueError("Invalid input data"))({}, SimpleNamespace(aws_request_id="req-400"))
    parsed = parse_body(resp)

    assert resp["statusCode"] == HTTPStatus.BAD_REQUEST
    assert parsed["message"] == "Invalid input data"
    assert parsed["request_id"] == "req-400"


def test_key_error_returns_generic_400() -> None:
    resp = raising(KeyError("name"))({}, SimpleNamespace())

    assert resp["statusCode"] == HTTPStatus.BAD_REQUEST
    assert "required field is missing" in parse_body(resp)["message"]


def test_permission_error_returns_403() -> None:
    resp = raising(PermissionError("no access"))({}, SimpleNamespace())

    assert resp["statusCode"] == HTTPStatus.FORBIDDEN


def test_timeout_error_returns_504() -> None:
    resp = raising(TimeoutError("timeout"))({}, SimpleNamespace())

    assert resp["statusCode"] == HTTPStatus.GATEWAY_TIMEOUT
    assert "too long" in parse_body(resp)["message"].lower()


def test_unexpected_exception_returns_500() -> None:
    resp = raising(RuntimeError("boom"))({}, SimpleNamespace(aws_request_id="req-500"))
    parsed = parse_body(resp)

    assert resp["statusCode"] == HTTPStatus.INTERNAL_SERVER_ERROR
    assert parsed["message"] == (
        "We're experiencing technical difficulties. Please try again in a few moments."
    )
    assert parsed["request_id"] == "req-500"


class TestAdminGate:
    @pytest.mark.parametrize("flag", ["true", "TRUE", True])
    def test_is_admin_truthy(self, flag) -> None:
        assert is_admin({"requestContext": {"authorizer": {"isAdmin": flag}}})

    @pytest.mark.parametrize(
        "event",
        [
            {},
            {"requestContext": None},
            {"requestContext": {"authorizer": {}}},
            {"requestContext": {"authorizer": {"isAdmin": "false"}}},
            {"requestContext": {"authorizer": {"isAdmin": 1}}},
        ],
    )
    def test_is_admin_falsy(self, event) -> None:
        assert not is_admin(event)

    def test_admin_required_rejects_with_401(self) -> None:
        calls: list[Any] = []

        @admin_required
        def handler(event: Any, context: Any) -> JsonDict:
            calls.append(event)
            return ResponseBuilder.ok({})

        resp = handler({}, SimpleNamespace(aws_request_id="req-401"))

        assert resp["statusCode"] == HTTPStatus.UNAUTHORIZED
        assert calls == []

    def test_admin_required_passes_admins_through(self) -> None:
        @admin_required
        def handler(event: Any, context: Any) -> JsonDict:
            return ResponseBuilder.ok({"ok": True})

        event = {"requestContext": {"authorizer": {"isAdmin": "true"}}}

        assert handler(event, SimpleNamespace())["statusCode"] == HTTPStatus.OK
