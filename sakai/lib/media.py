"""MIME type resolution for data-URI attachments."""

from __future__ import annotations

import base64

DEFAULT_MIME_TYPE = "application/octet-stream"

# Checked in order; the first matching prefix wins.
DATA_URI_MIME_TYPES: tuple[tuple[str, str], ...] = (
    ("data:image/png;", "image/png"),
    ("data:image/jpeg;", "image/jpeg"),
    ("data:image/webp;", "image/webp"),
    ("data:image/gif;", "image/gif"),
    ("data:application/pdf;", "application/pdf"),
    ("data:text/plain;", "text/plain"),
    ("data:text/markdown;", "text/markdown"),
)

_GENERIC_IMAGE_PREFIX = "data:image/"


def sniff_mime_type(data_uri: str) -> str:
    """Infer a MIME type from the data-URI header, falling back to octet-stream."""
    for prefix, mime_type in DATA_URI_MIME_TYPES:
        if data_uri.startswith(prefix):
            return mime_type
    if data_uri.startswith(_GENERIC_IMAGE_PREFIX):
        end = data_uri.find(";")
        if end > len(_GENERIC_IMAGE_PREFIX):
            return data_uri[len("data:") : end]
    return DEFAULT_MIME_TYPE


def resolve_mime_type(data_uri: str, mime_type: str | None = None) -> str:
    """Pick the MIME type of an attachment.

    An explicit, non-generic ``mime_type`` wins; otherwise the data-URI prefix
    is sniffed against ``DATA_URI_MIME_TYPES``.
    """
    if mime_type and mime_type.strip() and mime_type.strip() != DEFAULT_MIME_TYPE:
        return mime_type.strip()
    return sniff_mime_type(data_uri)


def split_data_uri(data_uri: str) -> tuple[str | None, str]:
    """Split ``data:<mime>;base64,<payload>`` into its MIME type and payload.

    Raises:
        ValueError: If the string is not a base64 data URI
    """
    header, sep, payload = data_uri.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        msg = "Expected a base64 data URI"
        raise ValueError(msg)
    mime_type = header[len("data:") : -len(";base64")] or None
    return mime_type, payload


def decode_data_uri(data_uri: str) -> bytes:
    """Decode the base64 payload of a data URI.

    Raises:
        ValueError: If the string is not a valid base64 data URI
    """
    _, payload = split_data_uri(data_uri)
    return base64.b64decode(payload, validate=True)


def to_data_uri(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"
