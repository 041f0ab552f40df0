"""Abstract HTTP transport interface for vertex-query."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, TypeVar

from vertex_query.types import AbortError, AbortSignal, Headers, RawResponse

T = TypeVar("T")


class HTTPTransport(ABC):
    """Abstract HTTP transport for sending requests to the Vertex AI API.

    This abstraction keeps the request layer independent of the HTTP client:
    - aiohttp (default)
    - httpx
    """

    @abstractmethod
    async def post(
        self,
        url: str,
        *,
        headers: Headers,
        data: str,
        signal: AbortSignal | None = None,
    ) -> RawResponse:
        """Send a POST request and return the client's raw response.

        The response body is not read; the caller owns the response and must
        read or release it.

        Args:
            url: The URL to POST to.
            headers: Headers to send. Repeated names are sent repeatedly.
            data: Already serialized JSON body.
            signal: Optional signal that cancels the in-flight request.

        Returns:
            The underlying client's response object.

        Raises:
            AbortError: If ``signal`` aborts before the response arrives.
        """
        ...

    async def _send_abortable(
        self,
        send: Callable[[], Awaitable[T]],
        signal: AbortSignal | None,
    ) -> T:
        """Run ``send`` in a task that is cancelled when ``signal`` aborts."""
        if signal is None:
            return await send()

        signal.throw_if_aborted()

        async def _run() -> T:
            return await send()

        request_task = asyncio.create_task(_run())

        def cancel_request() -> None:
            request_task.cancel()

        signal.add_listener(cancel_request, once=True)
        try:
            return await request_task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            cancelling = getattr(current, "cancelling", None)
            # The caller cancelled us; that wins over a concurrent abort.
            if cancelling is not None and cancelling():
                raise
            if signal.aborted:
                raise AbortError(signal.reason) from None
            raise
        finally:
            signal.remove_listener(cancel_request)

    async def close(self) -> None:
        """Clean up resources. Override if needed."""
        pass

    async def __aenter__(self) -> "HTTPTransport":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
