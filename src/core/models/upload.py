"""Transient models passed between the ingestion pipeline and the upload adapter."""

from typing import IO, Any, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr

BinaryPayload = Union[bytes, bytearray, memoryview, IO[bytes]]


class ContentMeta(BaseModel):
    """Declared semantics of an inbound image payload."""

    model_config = ConfigDict(str_strip_whitespace=True)

    content_type: StrictStr | None = Field(None, description="Declared MIME type")
    file_name: StrictStr | None = Field(None, description="Client-side file name")


class UploadRequest(BaseModel):
    """A single payload handed to the upload adapter.

    Lives for one ingestion call only and is owned by the pipeline
    invocation that created it.
    """

    model_config = ConfigDict(frozen=True)

    payload: Any = Field(..., description="Buffer or readable binary stream")
    content_type: StrictStr | None = Field(None, description="Declared MIME type")
    key: StrictStr | None = Field(None, description="Object key; generated when absent")

    @property
    def is_stream(self) -> bool:
        return not isinstance(self.payload, (bytes, bytearray, memoryview))


def is_empty_buffer(payload: object) -> bool:
    """True for ``None`` and zero-length buffers; streams are never judged here."""
    if payload is None:
        return True
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return len(payload) == 0
    return False
