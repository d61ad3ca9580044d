"""
Message content formatting.

Splits assistant text into plain text and fenced code segments so clients
can render code blocks separately.
"""

import re
from typing import Literal, Optional

from pydantic import BaseModel

_FENCE_PATTERN = re.compile(r"(```[\s\S]*?```)")


class ContentSegment(BaseModel):
    """A run of plain text or a fenced code block."""

    kind: Literal["text", "code"]
    text: str
    language: Optional[str] = None


def split_content(content: str) -> list[ContentSegment]:
    """
    Split content on ``` fences.

    The first line inside a fence is the language tag and is not part of the
    code. An unterminated fence is treated as plain text.
    """
    segments: list[ContentSegment] = []
    for part in _FENCE_PATTERN.split(content or ""):
        if not part:
            continue
        if len(part) >= 6 and part.startswith("```") and part.endswith("```"):
            inner = part[3:-3]
            language = None
            newline = inner.find("\n")
            if newline != -1:
                language = inner[:newline].strip() or None
                inner = inner[newline + 1:]
            segments.append(ContentSegment(kind="code", text=inner.strip(), language=language))
        else:
            segments.append(ContentSegment(kind="text", text=part))
    return segments

