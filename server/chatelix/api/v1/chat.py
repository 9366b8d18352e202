from fastapi import APIRouter, Depends, HTTPException, Request
import json
import logging
import httpx
from fastapi.responses import StreamingResponse

from chatelix.config import get_settings
from chatelix.core.ratelimit import enforce_rate_limit
from chatelix.providers.routing import resolve_binding
from chatelix.schemas.chat import GenerationResult, ProbeRequest, StreamRequest
from chatelix.streaming.errors import GenerationError, describe_failure
from chatelix.streaming.relay import StreamingRelay

router = APIRouter()
logger = logging.getLogger(__name__)


def get_relay() -> StreamingRelay:
    return StreamingRelay(get_settings())


@router.post("/chat/stream")
async def stream_chat(request: StreamRequest, http_request: Request, relay: StreamingRelay = Depends(get_relay)):
    """Relay a chat completion as Server-Sent Events."""
    enforce_rate_limit(http_request, limit=get_settings().rate_limit_per_minute, window_seconds=60)
    logger.info("/chat/stream start model=%s messages=%d", request.model, len(request.messages))

    async def generator():
        events = relay.events(request)
        try:
            async for event in events:
                yield "data: " + json.dumps(event) + "\n\n"
        finally:
            # Client went away: stop reading from the edge function
            await events.aclose()

    return StreamingResponse(
        generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        },
    )


@router.post("/chat/probe")
async def probe_chat(body: ProbeRequest, relay: StreamingRelay = Depends(get_relay)):
    """Check whether streaming works for a model."""
    binding = resolve_binding(body.model)
    available = await relay.probe(body.model)
    return {"model": body.model, "endpoint": binding.endpoint, "available": available}


@router.post("/chat", response_model=GenerationResult)
async def generate_chat(request: StreamRequest, http_request: Request, relay: StreamingRelay = Depends(get_relay)):
    """Return a whole completion in one JSON response."""
    enforce_rate_limit(http_request, limit=get_settings().rate_limit_per_minute, window_seconds=60)
    logger.info("/chat start model=%s messages=%d", request.model, len(request.messages))
    try:
        return await relay.generate(request)
    except (httpx.HTTPError, GenerationError) as e:
        logger.warning("/chat failed model=%s: %s", request.model, e)
        raise HTTPException(status_code=502, detail=describe_failure(e, request.model))
