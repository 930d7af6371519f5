"""Asynchronous HTTP client for the skill generation service.

This module provides :class:`GenerationClient`, a thin wrapper around
:class:`httpx.AsyncClient` that POSTs one
:class:`~docs2skill.models.GenerationRequest` and returns the decoded
:class:`~docs2skill.models.GenerationResponse`.

There is no retry: a network failure is reported once, as a
:class:`~docs2skill.exceptions.TransportError` carrying the underlying
message, and the user resubmits explicitly.
"""

from __future__ import annotations

from typing import Optional

import httpx

from docs2skill.client.response import parse_generation_response
from docs2skill.exceptions import TransportError
from docs2skill.models import GenerationRequest, GenerationResponse, RequestConfig
from docs2skill.output import get_output


class GenerationClient:
    """Asynchronous client for the generation endpoint.

    Usable as an async context manager, which owns the underlying
    :class:`httpx.AsyncClient`. When used without ``async with``, each call
    to :meth:`generate` opens and closes its own connection pool.

    Args:
        service_url: Absolute URL of the generation endpoint.
        request_config: Timeout and SSL settings.
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`
            in tests.

    Example::

        async with GenerationClient("https://skills.example.com/api/generate-skills") as client:
            response = await client.generate(GenerationRequest(url="https://docs.stripe.com/api"))
    """

    def __init__(
        self,
        service_url: str,
        request_config: Optional[RequestConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._service_url = service_url
        self._config = request_config or RequestConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def service_url(self) -> str:
        return self._service_url

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> GenerationClient:
        self._client = self._make_client()
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Send *request* and decode the service's answer.

        Args:
            request: The generation request to POST as JSON.

        Returns:
            The decoded response envelope. Whether it signals success is
            for the caller to classify.

        Raises:
            TransportError: On network errors, timeouts, or an unparseable
                response body.
        """
        output = get_output()
        output.debug(
            f"POST {self._service_url} (api key attached: {request.api_key is not None})"
        )

        if self._client is not None:
            response = await self._post(self._client, request)
        else:
            async with self._make_client() as client:
                response = await self._post(client, request)

        output.debug(f"Service answered HTTP {response.status_code}")
        return parse_generation_response(response)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _make_client(self) -> httpx.AsyncClient:
        kwargs = {
            "timeout": self._config.timeout,
            "verify": self._config.verify_ssl,
            "follow_redirects": True,
        }
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return httpx.AsyncClient(**kwargs)

    async def _post(
        self, client: httpx.AsyncClient, request: GenerationRequest
    ) -> httpx.Response:
        try:
            return await client.post(
                self._service_url,
                json=request.to_wire(),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc
