from __future__ import annotations
import json
import logging
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


class SSELineDecoder:
    """Splits decoded response text into complete lines.

    Text after the last newline stays buffered until more arrives, so the
    lines produced do not depend on how the transport chunked the body.
    """

    def __init__(self) -> None:
        self._buffer = ""

    def feed(self, text: str) -> List[str]:
        self._buffer += text
        if "\n" not in self._buffer:
            return []
        *complete, self._buffer = self._buffer.split("\n")
        return [line.rstrip("\r") for line in complete]

    def flush(self) -> List[str]:
        """Return the unterminated last line, if any, at end of stream."""
        rest, self._buffer = self._buffer, ""
        return [rest.rstrip("\r")] if rest else []


def _field(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


def _content_of(obj: Any) -> Any:
    choices = _field(obj, "choices")
    if isinstance(choices, list) and choices:
        ch0 = choices[0]
        # Prefer streaming delta; some gateways send message.content even in stream
        content = _field(_field(ch0, "delta"), "content")
        if not content:
            content = _field(_field(ch0, "message"), "content")
        if content:
            return content
    return _field(obj, "content")


def extract_fragment(line: str) -> Optional[str]:
    """Return the text carried by one ``data:`` line, or None."""
    if not line.startswith(DATA_PREFIX):
        return None
    data = line[len(DATA_PREFIX):]
    if data.strip() == DONE_SENTINEL:
        return None
    try:
        obj = json.loads(data)
    except (ValueError, RecursionError):
        # keep-alives, truncated frames and pathologically nested payloads are dropped
        logger.debug("Skipping malformed stream line: %.120s", data)
        return None
    content = _content_of(obj)
    if isinstance(content, str) and content:
        return content
    return None
