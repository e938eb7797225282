from collections.abc import Mapping

MAGIC_BYTES: Mapping[bytes, str] = {
    b"\xff\xd8\xff": "image/jpeg",
    b"\x89PNG\r\n\x1a\n": "image/png",
    b"GIF87a": "image/gif",
    b"GIF89a": "image/gif",
}


def sniff_mime_type(head: bytes) -> str | None:
    """Guess an image MIME type from the first bytes of a payload."""
    for signature, mime in MAGIC_BYTES.items():
        if head.startswith(signature):
            return mime

    # RIFF container; only the WEBP form is an image
    if head[:4] == b"RIFF" and head[8:12] == b"WEBP":
        return "image/webp"

    return None
