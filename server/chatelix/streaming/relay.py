from __future__ import annotations
import asyncio
import contextlib
import logging
from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable, Dict, List, Optional

import httpx

from chatelix.config import Settings, get_settings
from chatelix.providers.routing import ProviderBinding, resolve_binding
from chatelix.recommendation.classifier import recommended_fallback_model
from chatelix.schemas.chat import GenerationResult, StreamRequest
from chatelix.streaming.errors import GenerationError, StreamAborted, describe_failure
from chatelix.streaming.sse import SSELineDecoder, extract_fragment

logger = logging.getLogger(__name__)

# requested model, task-recommended model, default model
MAX_ATTEMPTS = 3


@dataclass
class StreamCallbacks:
    on_chunk: Optional[Callable[[str], None]] = None
    on_complete: Optional[Callable[[str], None]] = None
    on_error: Optional[Callable[[BaseException], None]] = None
    # (attempt number starting at 1, model, binding)
    on_attempt: Optional[Callable[[int, str, ProviderBinding], None]] = None


def _check_abort(abort: Optional[asyncio.Event]) -> None:
    if abort is not None and abort.is_set():
        raise StreamAborted()


class StreamingRelay:
    """Streams a chat completion from the edge function serving the model.

    Each call runs at most three attempts: the requested model, a model
    recommended for the detected task, then the configured default. Only
    the final failure reaches ``on_error``. Nothing is shared between calls.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        s = self.settings
        timeout = httpx.Timeout(
            connect=s.connect_timeout, read=s.read_timeout, write=s.write_timeout, pool=s.pool_timeout
        )
        return httpx.AsyncClient(timeout=timeout, trust_env=True, transport=self._transport)

    def _url(self, binding: ProviderBinding) -> str:
        return f"{self.settings.functions_base_url.rstrip('/')}/{binding.endpoint}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        key = self.settings.functions_api_key
        if key:
            headers["Authorization"] = f"Bearer {key}"
            headers["apikey"] = key
        return headers

    def _payload(self, request: StreamRequest, model: str) -> Dict[str, Any]:
        s = self.settings
        return {
            "messages": [m.model_dump() for m in request.messages],
            "model": model,
            "temperature": request.temperature if request.temperature is not None else s.default_temperature,
            "max_tokens": request.maxTokens or s.default_max_tokens,
            "stream": True,
        }

    def _model_for_attempt(self, request: StreamRequest, attempt: int) -> str:
        if attempt == 1:
            return request.model
        if attempt == 2:
            return recommended_fallback_model(request, self.settings.default_model)
        return self.settings.default_model

    async def stream(
        self,
        request: StreamRequest,
        callbacks: Optional[StreamCallbacks] = None,
        *,
        abort: Optional[asyncio.Event] = None,
    ) -> None:
        callbacks = callbacks or StreamCallbacks()
        last_error: Optional[BaseException] = None

        for attempt in range(1, MAX_ATTEMPTS + 1):
            model = self._model_for_attempt(request, attempt)
            binding = resolve_binding(model)
            logger.info(
                "stream attempt=%d/%d model=%s endpoint=%s messages=%d",
                attempt, MAX_ATTEMPTS, model, binding.endpoint, len(request.messages),
            )
            if callbacks.on_attempt:
                callbacks.on_attempt(attempt, model, binding)
            try:
                full_text = await self._attempt(request, model, binding, callbacks, abort)
            except StreamAborted as e:
                logger.info("stream aborted model=%s attempt=%d", model, attempt)
                if callbacks.on_error:
                    callbacks.on_error(e)
                return
            except Exception as e:
                last_error = e
                logger.warning("stream attempt=%d failed model=%s: %s", attempt, model, e)
                continue

            logger.info("stream complete model=%s chars=%d", model, len(full_text))
            if callbacks.on_complete:
                callbacks.on_complete(full_text)
            return

        logger.error("stream failed after %d attempts model=%s: %s", MAX_ATTEMPTS, request.model, last_error)
        if callbacks.on_error:
            callbacks.on_error(last_error)

    async def _attempt(
        self,
        request: StreamRequest,
        model: str,
        binding: ProviderBinding,
        callbacks: StreamCallbacks,
        abort: Optional[asyncio.Event],
    ) -> str:
        _check_abort(abort)
        fragments: List[str] = []

        def emit(lines: List[str]) -> None:
            for line in lines:
                fragment = extract_fragment(line)
                if fragment:
                    fragments.append(fragment)
                    if callbacks.on_chunk:
                        callbacks.on_chunk(fragment)

        async with self._client() as client:
            async with client.stream(
                "POST", self._url(binding), headers=self._headers(), json=self._payload(request, model)
            ) as resp:
                if not resp.is_success:
                    # Load the error body so describe_failure can read it later
                    await resp.aread()
                resp.raise_for_status()
                decoder = SSELineDecoder()
                async for text in resp.aiter_text():
                    _check_abort(abort)
                    emit(decoder.feed(text))
                emit(decoder.flush())
        return "".join(fragments)

    async def events(
        self, request: StreamRequest, *, abort: Optional[asyncio.Event] = None
    ) -> AsyncIterator[Dict[str, Any]]:
        """Yield relay callbacks as event dicts; the last one has ``done``.

        Closing the iterator early cancels the underlying stream.
        """
        queue: "asyncio.Queue[Optional[Dict[str, Any]]]" = asyncio.Queue()

        def on_attempt(attempt: int, model: str, binding: ProviderBinding) -> None:
            queue.put_nowait({"attempt": {"number": attempt, "model": model, "endpoint": binding.endpoint}})

        def on_error(exc: BaseException) -> None:
            queue.put_nowait({"error": describe_failure(exc, request.model), "done": True})

        callbacks = StreamCallbacks(
            on_chunk=lambda text: queue.put_nowait({"content": text}),
            on_complete=lambda text: queue.put_nowait({"text": text, "done": True}),
            on_error=on_error,
            on_attempt=on_attempt,
        )
        task = asyncio.create_task(self.stream(request, callbacks, abort=abort))
        task.add_done_callback(lambda _: queue.put_nowait(None))
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event
                if event.get("done"):
                    break
            # Surfaces anything the relay raised without reporting it
            await task
        finally:
            if not task.done():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task

    async def generate(self, request: StreamRequest) -> GenerationResult:
        """Fetch a whole completion in one response, without streaming.

        Always targets the configured generate endpoint, whatever the model.
        No fallback is attempted; HTTP errors propagate.
        """
        payload = self._payload(request, request.model)
        payload["stream"] = False
        url = f"{self.settings.functions_base_url.rstrip('/')}/{self.settings.generate_endpoint}"
        logger.info("generate model=%s endpoint=%s messages=%d",
                    request.model, self.settings.generate_endpoint, len(request.messages))

        async with self._client() as client:
            resp = await client.post(url, headers=self._headers(), json=payload)
        resp.raise_for_status()

        try:
            data = resp.json() if resp.content else None
        except ValueError:
            data = None
        if not isinstance(data, dict) or not data:
            raise GenerationError("No data received from the chat function.")

        text = data.get("text")
        return GenerationResult(
            text=text if isinstance(text, str) else "",
            model=data.get("model") or request.model,
            raw_response=data.get("rawResponse"),
        )

    async def probe(self, model: str) -> bool:
        """Check that the endpoint serving ``model`` accepts a streaming request."""
        binding = resolve_binding(model)
        payload = {
            "messages": [{"role": "user", "content": "test"}],
            "model": model,
            "stream": True,
            "max_tokens": 1,
        }
        try:
            async with self._client() as client:
                async with client.stream("POST", self._url(binding), headers=self._headers(), json=payload) as resp:
                    return resp.is_success
        except httpx.HTTPError as e:
            logger.info("probe failed model=%s endpoint=%s: %s", model, binding.endpoint, e)
            return False
