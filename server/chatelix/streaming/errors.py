from __future__ import annotations
from typing import Optional
import httpx


class StreamAborted(Exception):
    """The caller asked the relay to stop before the stream finished."""

    def __init__(self, message: str = "stream aborted by caller") -> None:
        super().__init__(message)


class GenerationError(Exception):
    """The chat function answered without a usable completion."""


def _provider_error(response: httpx.Response) -> Optional[str]:
    # Edge functions answer failures with {"error": "...", "details": "..."}
    try:
        body = response.json()
    except (ValueError, httpx.ResponseNotRead):
        return None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return None


def describe_failure(exc: BaseException, model: Optional[str] = None) -> str:
    """Map a terminal relay error to a message fit for a UI toast."""
    if isinstance(exc, StreamAborted):
        return "Generation was cancelled."
    if isinstance(exc, GenerationError):
        return str(exc)
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        if status == 400:
            friendly = f"Bad request. The model {model or ''} may be invalid or unavailable.".replace("  ", " ")
        elif status in (401, 403):
            friendly = "Authentication/permission issue. Check the function key and model access."
        elif status == 402:
            friendly = "Payment required. Add credits or choose a cheaper model."
        elif status == 429:
            friendly = "Too many requests. Please wait a moment and try again."
        elif status >= 500:
            friendly = "The provider had a server error. Please try again."
        else:
            friendly = f"Streaming failed with HTTP {status}."
        detail = _provider_error(exc.response)
        return f"{friendly} ({detail})" if detail else friendly
    if isinstance(exc, httpx.TimeoutException):
        return "The provider took too long to respond."
    if isinstance(exc, httpx.TransportError):
        return "Could not reach the provider endpoint."
    return f"Streaming failed: {exc}"
