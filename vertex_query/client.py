"""Vertex AI generative model client built on post_request."""

from __future__ import annotations

import os
from typing import Any

from vertex_query.constants import (
    COUNT_TOKENS_METHOD,
    DEFAULT_API_VERSION,
    DEFAULT_LOCATION,
    GENERATE_CONTENT_METHOD,
    STREAMING_GENERATE_CONTENT_METHOD,
)
from vertex_query.request import post_request
from vertex_query.transport import HTTPTransport, get_default_transport
from vertex_query.types import RawResponse, RequestOptions


class GenerativeModelClient:
    """Sends generateContent, streamGenerateContent and countTokens requests
    for one publisher model.

    Responses are returned raw; reading the status and body is up to the
    caller.

    Example:
        >>> client = GenerativeModelClient("gemini-1.5-flash", project="my-project", token=token)
        >>> response = await client.generate_content(
        ...     {"contents": [{"role": "user", "parts": [{"text": "Hello!"}]}]},
        ...     RequestOptions(timeout=30),
        ... )
    """

    def __init__(
        self,
        model: str,
        *,
        project: str | None = None,
        location: str | None = None,
        token: str | None = None,
        api_endpoint: str | None = None,
        api_version: str = DEFAULT_API_VERSION,
        transport: HTTPTransport | str | None = None,
    ):
        """Initialize the client.

        Args:
            model: Model name ("gemini-1.5-flash", "models/gemini-1.5-flash")
                   or a full "projects/..." resource name.
            project: Google Cloud project. Falls back to GOOGLE_CLOUD_PROJECT.
            location: Region. Falls back to GOOGLE_CLOUD_REGION, then us-central1.
            token: OAuth2 access token sent as the bearer token.
            api_endpoint: Host overriding "{location}-aiplatform.googleapis.com".
            api_version: API version path segment.
            transport: An HTTPTransport, a transport name ("aiohttp", "httpx")
                       or None for the shared transport.
        """
        self.project = project or os.environ.get("GOOGLE_CLOUD_PROJECT")
        self.location = location or os.environ.get("GOOGLE_CLOUD_REGION") or DEFAULT_LOCATION
        if not self.project and not model.startswith("projects/"):
            raise ValueError(
                "No project given. Pass project= or set GOOGLE_CLOUD_PROJECT."
            )
        self.model = model
        self.token = token
        self.api_endpoint = api_endpoint
        self.api_version = api_version

        if isinstance(transport, str):
            self._transport = get_default_transport(transport)
            self._owns_transport = True
        else:
            self._transport = transport
            self._owns_transport = False

    @property
    def resource_path(self) -> str:
        """Resource name of the model the requests target."""
        if self.model.startswith("projects/"):
            return self.model
        model_id = self.model
        if model_id.startswith("models/"):
            model_id = model_id[len("models/"):]
        return (
            f"projects/{self.project}/locations/{self.location}"
            f"/publishers/google/models/{model_id}"
        )

    async def _post(
        self,
        resource_method: str,
        body: dict[str, Any],
        request_options: RequestOptions | None,
    ) -> RawResponse:
        return await post_request(
            region=self.location,
            resource_path=self.resource_path,
            resource_method=resource_method,
            token=self.token,
            data=body,
            api_endpoint=self.api_endpoint,
            request_options=request_options,
            api_version=self.api_version,
            transport=self._transport,
        )

    async def generate_content(
        self, body: dict[str, Any], request_options: RequestOptions | None = None
    ) -> RawResponse:
        return await self._post(GENERATE_CONTENT_METHOD, body, request_options)

    async def stream_generate_content(
        self, body: dict[str, Any], request_options: RequestOptions | None = None
    ) -> RawResponse:
        """Start a streaming generation; the response body is an SSE stream."""
        return await self._post(STREAMING_GENERATE_CONTENT_METHOD, body, request_options)

    async def count_tokens(
        self, body: dict[str, Any], request_options: RequestOptions | None = None
    ) -> RawResponse:
        return await self._post(COUNT_TOKENS_METHOD, body, request_options)

    async def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and self._transport is not None:
            await self._transport.close()

    async def __aenter__(self) -> "GenerativeModelClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
