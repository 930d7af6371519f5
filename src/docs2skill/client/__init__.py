"""HTTP client module for docs2skill.

Provides :class:`GenerationClient`, an :mod:`httpx`-based asynchronous
client for the skill generation service, and
:func:`parse_generation_response`, which decodes the service's JSON
envelope into :class:`~docs2skill.models.GenerationResponse`.

Example::

    from docs2skill.client import GenerationClient

    async with GenerationClient(config.service_url, config.request) as client:
        envelope = await client.generate(request)
"""

from docs2skill.client.async_client import GenerationClient
from docs2skill.client.response import parse_generation_response

__all__ = ["GenerationClient", "parse_generation_response"]
