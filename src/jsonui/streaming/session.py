"""Stream sessions: request a patch stream and build trees from it."""

import asyncio
from collections.abc import AsyncGenerator, Callable
from contextlib import aclosing
from typing import Any

import httpx

from ..core.config import Settings, get_settings
from ..core.errors import StreamError
from ..core.json import safe_json_dumps
from ..core.logging_config import LogContext, resolve_logger
from .builder import TreeBuilder
from .tree import UITree

PatchSource = Callable[[dict[str, Any]], AsyncGenerator[bytes, None]]


class HttpPatchSource:
    """POSTs the request body and yields the response body as raw chunks."""

    def __init__(
        self,
        api_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 60.0,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.api_url = api_url
        self.timeout = timeout
        self.headers = headers or {}
        self._client = client

    async def __call__(self, payload: dict[str, Any]) -> AsyncGenerator[bytes, None]:
        client = self._client or httpx.AsyncClient(timeout=self.timeout)
        headers = {"Content-Type": "application/json", **self.headers}
        try:
            async with client.stream(
                "POST", self.api_url, content=safe_json_dumps(payload), headers=headers
            ) as response:
                if response.is_error:
                    body = (await response.aread()).decode("utf-8", errors="replace")
                    raise StreamError(f"HTTP {response.status_code}: {body}", chunk=body[:200])
                async for chunk in response.aiter_bytes():
                    yield chunk
        finally:
            if self._client is None:
                await client.aclose()


class UIStream:
    """
    One logical UI stream with abort-and-replace semantics.

    Starting a new request cancels the one in flight; its ``send`` call
    returns None and its data is discarded. A transport failure ends the
    stream with a single ``StreamError``.
    """

    def __init__(
        self,
        api_url: str | None = None,
        source: PatchSource | None = None,
        on_snapshot: Callable[[UITree], None] | None = None,
        on_complete: Callable[[UITree], None] | None = None,
        on_error: Callable[[StreamError], None] | None = None,
        settings: Settings | None = None,
        logger: Any | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.source: PatchSource = source or HttpPatchSource(
            api_url or self.settings.stream_api_url, timeout=self.settings.stream_timeout
        )
        self.on_snapshot = on_snapshot
        self.on_complete = on_complete
        self.on_error = on_error
        self.logger = resolve_logger(logger, __name__)

        self.tree: UITree | None = None
        self.is_streaming = False
        self.error: StreamError | None = None
        self._task: asyncio.Task[UITree] | None = None

    def _publish(self, tree: UITree) -> None:
        self.tree = tree
        if self.on_snapshot:
            self.on_snapshot(tree)

    def _abort(self) -> None:
        if self._task is not None and not self._task.done():
            self.logger.info("stream_aborted")
            self._task.cancel()
        self._task = None

    async def _run(self, prompt: str, context: dict[str, Any] | None) -> UITree:
        builder = TreeBuilder(
            max_line_size=self.settings.max_line_size,
            max_depth=self.settings.max_json_depth,
            logger=self.logger,
        )
        builder.subscribe(self._publish)
        self.tree = builder.tree
        self.error = None
        self.is_streaming = True

        payload = {"prompt": prompt, "context": context, "currentTree": builder.tree.to_dict()}

        try:
            async with aclosing(self.source(payload)) as chunks:
                async for chunk in chunks:
                    builder.feed(chunk)
            builder.flush()
        except StreamError as e:
            error = e
        except (httpx.HTTPError, OSError) as e:
            error = StreamError(f"Stream transport failed: {e}", original=e)
        else:
            error = None
        finally:
            # An aborted run must not clear the flag of the run replacing it
            if self._task is asyncio.current_task():
                self.is_streaming = False

        if error is not None:
            self.error = error
            self.logger.error("stream_failed", error=error.message)
            if self.on_error:
                self.on_error(error)
            raise error

        _, lines, skipped = builder.counter.reset()
        self.logger.info(
            "stream_complete", elements=len(builder.tree.elements), lines=lines, skipped=skipped
        )
        if self.on_complete:
            self.on_complete(builder.tree)
        return builder.tree

    async def send(self, prompt: str, context: dict[str, Any] | None = None) -> UITree | None:
        """
        Request a new UI, replacing any stream in flight.

        Returns:
            The final tree, or None if this request was superseded

        Raises:
            StreamError: transport failure or non-success response
        """
        self._abort()

        with LogContext(stream_prompt=prompt[:50]):
            task = asyncio.create_task(self._run(prompt, context))
            self._task = task
            try:
                return await task
            except asyncio.CancelledError:
                current = asyncio.current_task()
                if current is not None and current.cancelling():
                    raise
                return None
            finally:
                if self._task is task:
                    self._task = None

    def clear(self) -> None:
        """Abort any stream and forget the current tree and error."""
        self._abort()
        self.tree = None
        self.error = None
        self.is_streaming = False
