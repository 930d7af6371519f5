"""Response decoding -- maps an :class:`httpx.Response` to the wire models.

The generation service always answers with a JSON envelope
(``{success, error?, data?}``), including on HTTP error statuses, so the
status code is not inspected here; the envelope decides the outcome. A body
that is not JSON, or JSON that does not fit
:class:`~docs2skill.models.GenerationResponse`, is a transport-level
failure.
"""

from __future__ import annotations

import json

import httpx
from pydantic import ValidationError as PydanticValidationError

from docs2skill.exceptions import TransportError
from docs2skill.models import GenerationResponse


def parse_generation_response(response: httpx.Response) -> GenerationResponse:
    """Decode and validate the service's JSON envelope.

    Args:
        response: The raw :class:`httpx.Response`.

    Returns:
        The validated :class:`~docs2skill.models.GenerationResponse`.

    Raises:
        TransportError: If the body is empty, not JSON, or structurally
            invalid.
    """
    if not response.content:
        raise TransportError(f"Empty response from service (HTTP {response.status_code})")

    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise TransportError(f"Invalid JSON from service: {exc}") from exc

    if not isinstance(payload, dict):
        raise TransportError(
            f"Unexpected response from service: expected an object, got {type(payload).__name__}"
        )

    try:
        return GenerationResponse.model_validate(payload)
    except PydanticValidationError as exc:
        raise TransportError(f"Malformed response from service: {exc}") from exc
