"""Parsing of API Gateway request bodies into form fields and an optional image.

Three encodings are accepted:
- ``multipart/form-data``: text parts become fields, the ``image`` part (or any
  part carrying a filename) becomes the image
- ``application/json``: fields as-is, ``image`` as a Base64 string
- ``application/x-www-form-urlencoded``: fields only
"""

import base64
import binascii
import json
import re
from typing import Any
from urllib.parse import parse_qs

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field
from requests_toolbelt.multipart.decoder import (
    ImproperBodyPartContentException,
    MultipartDecoder,
    NonMultipartContentTypeException,
)

from core.models.errors import ValidationError
from core.utils.constants import (
    ERROR_CODE_FILE_SIZE_EXCEEDED,
    IMAGE_FIELD_NAME,
    MAX_IMAGE_SIZE,
    get_max_image_size_mb,
)

logger = Logger(UTC=True)

_DISPOSITION_PARAM = re.compile(r'(?P<key>name|filename)="(?P<value>[^"]*)"', re.IGNORECASE)


class UploadedFile(BaseModel):
    """Image binary received with a request."""

    model_config = ConfigDict(frozen=True)

    content: bytes = Field(..., description="Raw image bytes")
    content_type: str | None = Field(None, description="Declared MIME type")
    file_name: str | None = Field(None, description="Client-side file name")


class ParsedBody(BaseModel):
    """Form fields plus the optional image extracted from a request body."""

    fields: dict[str, Any] = Field(default_factory=dict)
    image: UploadedFile | None = None


def get_header(event: dict[str, Any], name: str) -> str | None:
    """Case-insensitive header lookup on an API Gateway event."""
    headers = event.get("headers") or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def _raw_body(event: dict[str, Any]) -> bytes:
    body = event.get("body")
    if not body:
        return b""

    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValidationError(message="Invalid Base64-encoded request body") from exc

    return body.encode("utf-8") if isinstance(body, str) else body


def _check_size(content: bytes) -> None:
    if len(content) > MAX_IMAGE_SIZE:
        raise ValidationError(
            message=f"Image size exceeds {get_max_image_size_mb()}MB limit",
            error_code=ERROR_CODE_FILE_SIZE_EXCEEDED,
            details={"size": len(content)},
        )


def _add_field(fields: dict[str, Any], name: str, value: str) -> None:
    # Repeated form fields (tags=a&tags=b) collapse into a list
    if name in fields:
        existing = fields[name]
        fields[name] = existing + [value] if isinstance(existing, list) else [existing, value]
    else:
        fields[name] = value


def _parse_multipart(raw: bytes, content_type: str) -> ParsedBody:
    try:
        decoder = MultipartDecoder(raw, content_type)
    except (ImproperBodyPartContentException, NonMultipartContentTypeException) as exc:
        raise ValidationError(message="Invalid multipart body") from exc

    fields: dict[str, Any] = {}
    image: UploadedFile | None = None

    for part in decoder.parts:
        disposition = part.headers.get(b"Content-Disposition", b"").decode("utf-8", "replace")
        params = {m.group("key").lower(): m.group("value") for m in _DISPOSITION_PARAM.finditer(disposition)}
        name = params.get("name")
        if not name:
            continue

        if name == IMAGE_FIELD_NAME or "filename" in params:
            part_type = part.headers.get(b"Content-Type")
            image = UploadedFile(
                content=part.content,
                content_type=part_type.decode("ascii", "replace") if part_type else None,
                file_name=params.get("filename") or None,
            )
            continue

        _add_field(fields, name, part.text)

    return ParsedBody(fields=fields, image=image)


def _parse_json(raw: bytes) -> ParsedBody:
    try:
        data = json.loads(raw or b"{}")
    except json.JSONDecodeError as exc:
        raise ValidationError(message="Invalid JSON body") from exc

    if not isinstance(data, dict):
        raise ValidationError(message="Invalid JSON body: expected an object")

    encoded = data.pop(IMAGE_FIELD_NAME, None)
    image: UploadedFile | None = None

    if encoded:
        if not isinstance(encoded, str):
            raise ValidationError(message="Image must be a Base64-encoded string")
        try:
            content = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValidationError(message="Image must be a valid Base64-encoded string") from exc

        image = UploadedFile(
            content=content,
            content_type=data.pop("imageContentType", None),
            file_name=data.pop("imageName", None),
        )

    return ParsedBody(fields=data, image=image)


def parse_request_body(event: dict[str, Any]) -> ParsedBody:
    """Split an API Gateway proxy event body into fields and an optional image.

    Raises:
        ValidationError: If the body cannot be decoded or the image is too large
    """
    raw = _raw_body(event)
    content_type = get_header(event, "Content-Type") or ""
    media_type = content_type.split(";", 1)[0].strip().lower()

    if media_type == "multipart/form-data":
        parsed = _parse_multipart(raw, content_type)
    elif media_type == "application/x-www-form-urlencoded":
        fields: dict[str, Any] = {}
        for name, values in parse_qs(raw.decode("utf-8"), keep_blank_values=True).items():
            for value in values:
                _add_field(fields, name, value)
        parsed = ParsedBody(fields=fields)
    else:
        parsed = _parse_json(raw)

    if parsed.image is not None:
        _check_size(parsed.image.content)

    logger.debug(
        "Request body parsed",
        extra={
            "media_type": media_type or "application/json",
            "fields": sorted(parsed.fields),
            "has_image": parsed.image is not None,
        },
    )
    return parsed
