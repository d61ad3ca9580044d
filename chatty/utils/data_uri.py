"""
Data URI helpers for chat attachments.

Attachments cross the chat boundary only as ``data:<mime>;base64,<payload>``
strings; these helpers take that form apart.
"""

import base64
import binascii
from dataclasses import dataclass
from typing import Optional

DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class DataUri:
    """Decoded data URI."""

    mime_type: str
    data: bytes


def parse_data_uri(value: str) -> DataUri:
    """
    Parse a Base64 data URI strictly.

    Args:
        value: String of the form ``data:<mime>[;param...];base64,<payload>``

    Returns:
        DataUri with the declared MIME type and decoded bytes

    Raises:
        ValueError: If the MIME type or Base64 payload is missing or invalid
    """
    raw = (value or "").strip()
    if not raw.startswith("data:"):
        raise ValueError("Expected a data URI starting with 'data:'")
    if "," not in raw:
        raise ValueError("Data URI has no payload")

    header, encoded = raw.split(",", 1)
    segments = [segment.strip() for segment in header[5:].split(";") if segment.strip()]
    if not segments or "/" not in segments[0]:
        raise ValueError("Data URI must declare a MIME type")
    if not any(segment.lower() == "base64" for segment in segments[1:]):
        raise ValueError("Data URI must use Base64 encoding")
    if not encoded:
        raise ValueError("Data URI payload is empty")

    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid Base64 payload: {e}") from e

    return DataUri(mime_type=segments[0].lower(), data=data)


def decode_data_uri(
    value: str,
    fallback_mime_type: str = DEFAULT_MIME_TYPE,
) -> tuple[Optional[bytes], str]:
    """Lenient decode: returns (None, mime) instead of raising."""
    try:
        parsed = parse_data_uri(value)
    except ValueError:
        return None, fallback_mime_type
    return parsed.data, parsed.mime_type
