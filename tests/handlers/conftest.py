import base64
import json
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest
from requests_toolbelt.multipart.encoder import MultipartEncoder

from core.repositories.storage_repository import ImageUploader


@pytest.fixture
def lambda_context(monkeypatch):
    context = SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )

    monkeypatch.setattr(
        "aws_lambda_powertools.utilities.typing.LambdaContext",
        lambda: context,
        raising=False,
    )

    return context


@pytest.fixture
def stub_uploader(monkeypatch) -> MagicMock:
    """Replace the S3 uploader the ingestion pipeline builds by default."""
    uploader = MagicMock(spec=ImageUploader)
    uploader.upload.return_value = "https://cdn.example/taco.png"

    monkeypatch.setattr(
        "core.services.ingestion_pipeline.S3ImageUploader",
        lambda: uploader,
    )

    return uploader


ADMIN_CONTEXT: dict[str, Any] = {"authorizer": {"isAdmin": "true"}}


@pytest.fixture
def multipart_event() -> Callable[..., dict[str, Any]]:
    """
    Build an API Gateway event with a multipart/form-data body.

    Usage:
        event = multipart_event({"name": "Taco"}, image=("taco.png", data, "image/png"))
    """

    def _build(
        fields: dict[str, str],
        *,
        image: tuple[str, bytes, str] | None = None,
        method: str = "POST",
        admin: bool = True,
    ) -> dict[str, Any]:
        parts: dict[str, Any] = dict(fields)
        if image is not None:
            parts["image"] = image

        encoder = MultipartEncoder(fields=parts)
        event: dict[str, Any] = {
            "httpMethod": method,
            "path": "/",
            "headers": {"Content-Type": encoder.content_type},
            "body": base64.b64encode(encoder.to_string()).decode("ascii"),
            "isBase64Encoded": True,
        }
        if admin:
            event["requestContext"] = ADMIN_CONTEXT
        return event

    return _build


@pytest.fixture
def json_event() -> Callable[..., dict[str, Any]]:
    def _build(body: dict[str, Any], *, method: str = "PUT", admin: bool = True) -> dict[str, Any]:
        event: dict[str, Any] = {
            "httpMethod": method,
            "path": "/",
            "headers": {"Content-Type": "application/json"},
            "body": json.dumps(body),
        }
        if admin:
            event["requestContext"] = ADMIN_CONTEXT
        return event

    return _build


@pytest.fixture
def path_event() -> Callable[..., dict[str, Any]]:
    def _build(
        params: dict[str, str] | None = None,
        *,
        method: str = "GET",
        admin: bool = False,
    ) -> dict[str, Any]:
        event: dict[str, Any] = {
            "httpMethod": method,
            "path": "/",
            "pathParameters": params,
        }
        if admin:
            event["requestContext"] = ADMIN_CONTEXT
        return event

    return _build
