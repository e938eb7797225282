"""Request validation utilities."""

from typing import Any, TypeVar

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Sanitize Pydantic validation errors for API responses.

    Removes sensitive/internal fields like:
    - url
    - ctx
    - input
    """
    sanitized: list[dict[str, str]] = []

    for err in errors:
        field = ".".join(str(x) for x in err.get("loc", [])) or "body"
        raw_msg = err.get("msg", "Invalid value")

        msg = raw_msg.replace("Value error,", "").strip()

        msg_lower = msg.lower()
        if "base64" in msg_lower:
            msg = "Image must be a valid Base64-encoded string"
        elif "field required" in msg_lower:
            msg = "This field is required"
        elif "valid number" in msg_lower:
            msg = "Must be a number"

        sanitized.append(
            {
                "field": field,
                "message": msg,
            }
        )

    return sanitized


def validate_request(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Validate request data against a Pydantic model.

    Raises:
        pydantic.ValidationError: If the payload does not satisfy the model
    """
    return model.model_validate(data)


def normalize_string_list(value: Any, *, field_name: str, dedupe: bool = True) -> list[str] | None:
    """Normalize a "string or list of strings" form value.

    Accepts:
    - comma-separated string
    - list of strings (repeated form fields arrive this way)

    Blank entries are dropped. With ``dedupe`` repeated entries are also
    dropped, keeping first occurrence order.
    """
    if value is None:
        return None

    if isinstance(value, str):
        raw = value.split(",")
    elif isinstance(value, (list, tuple)):
        raw = []
        for entry in value:
            if not isinstance(entry, str):
                raise ValueError(f"{field_name} must be a string or list of strings")
            raw.extend(entry.split(","))
    else:
        raise ValueError(f"{field_name} must be a string or list of strings")

    entries = [entry.strip() for entry in raw if entry.strip()]
    return list(dict.fromkeys(entries)) if dedupe else entries
