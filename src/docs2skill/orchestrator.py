"""Request lifecycle for one documentation URL.

:class:`GenerationOrchestrator` turns a URL into exactly one classified
outcome. It is a small state machine::

    IDLE --submit--> VALIDATING --ok--> REQUESTING --> SUCCEEDED
                         |                   |    \\--> NO_DOCUMENTATION_FOUND
                         +------> FAILED <---+

``SUCCEEDED``, ``NO_DOCUMENTATION_FOUND`` and ``FAILED`` end an attempt; a
new :meth:`~GenerationOrchestrator.submit` from any of them discards the
previous result and error and starts over. A submit while ``VALIDATING`` or
``REQUESTING`` is ignored: at most one request is outstanding, with no
queueing and no cancellation.

Failure reasons are the exception classes from :mod:`docs2skill.exceptions`;
they are recorded on the orchestrator, not raised to the caller.
"""

from __future__ import annotations

import enum
import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional
from urllib.parse import urlsplit

from docs2skill.auth.credential_store import CredentialStore
from docs2skill.client.async_client import GenerationClient
from docs2skill.exceptions import (
    CredentialRequiredError,
    Docs2SkillError,
    MalformedUrlError,
    ServiceError,
    TransportError,
    ValidationError,
)
from docs2skill.models import GenerationRequest, GenerationResponse, GenerationResult, GlobalConfig

logger = logging.getLogger(__name__)

MSG_EMPTY_URL = "Please enter a URL"
MSG_CREDENTIAL_REQUIRED = "Please add your Firecrawl API key first"
MSG_MALFORMED_URL = "Please enter a valid URL"
MSG_SERVICE_FAILED = "Failed to generate skill"
MSG_NO_DOCUMENTATION = "No API documentation found"
MSG_MISSING_FILES = "Service reported documentation but returned no skill files"
MSG_UNKNOWN_ERROR = "An error occurred"


class GenerationState(str, enum.Enum):
    """States of the generation lifecycle."""

    IDLE = "idle"
    VALIDATING = "validating"
    REQUESTING = "requesting"
    SUCCEEDED = "succeeded"
    NO_DOCUMENTATION_FOUND = "no_documentation_found"
    FAILED = "failed"


BUSY_STATES = frozenset({GenerationState.VALIDATING, GenerationState.REQUESTING})

StateListener = Callable[[GenerationState], None]


def is_well_formed_url(url: str) -> bool:
    """Return True for an absolute URL with a scheme and a network location."""
    try:
        parts = urlsplit(url)
        # Accessing .port validates it.
        parts.port
    except ValueError:
        return False
    if not parts.scheme or not parts.netloc:
        return False
    # Spaces are allowed in the path and query, where they are percent-encoded.
    return " " not in parts.scheme and " " not in parts.netloc


class GenerationOrchestrator:
    """Validate, dispatch and classify a skill generation request.

    The orchestrator exclusively owns the current
    :class:`~docs2skill.models.GenerationResult` and the in-flight flag;
    nothing else writes them.

    Args:
        client: Client used to reach the generation service.
        credential_store: Source of the API key.
        gated: When ``True`` a saved API key is mandatory and is attached
            to every request. Read once at startup and injected here.

    Example::

        orchestrator = GenerationOrchestrator(client, CredentialStore(), gated=False)
        state = await orchestrator.submit("https://docs.stripe.com/api")
        if state is GenerationState.SUCCEEDED:
            payload = ArchiveBuilder().build(orchestrator.result)
    """

    def __init__(
        self,
        client: GenerationClient,
        credential_store: CredentialStore,
        gated: bool = False,
    ) -> None:
        self._client = client
        self._credentials = credential_store
        self._gated = gated
        self._state = GenerationState.IDLE
        self._in_flight = False
        self._error: Optional[Docs2SkillError] = None
        self._message: Optional[str] = None
        self._result: Optional[GenerationResult] = None
        self._credential_prompt_requested = False
        self._listeners: list[StateListener] = []

    @classmethod
    def from_config(
        cls,
        config: GlobalConfig,
        credential_store: Optional[CredentialStore] = None,
    ) -> GenerationOrchestrator:
        """Build an orchestrator from resolved configuration."""
        client = GenerationClient(config.service_url, config.request)
        return cls(client, credential_store or CredentialStore(), gated=config.gated)

    # ------------------------------------------------------------------ #
    # Read-only state
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> GenerationState:
        return self._state

    @property
    def gated(self) -> bool:
        return self._gated

    @property
    def in_flight(self) -> bool:
        """Whether a generation request is currently outstanding."""
        return self._in_flight

    @property
    def error(self) -> Optional[Docs2SkillError]:
        """Reason for the ``FAILED`` state, else ``None``."""
        return self._error

    @property
    def result(self) -> Optional[GenerationResult]:
        """The documentation-bearing result of a ``SUCCEEDED`` attempt."""
        return self._result

    @property
    def message(self) -> Optional[str]:
        """The single human-readable line describing the last outcome."""
        return self._message

    @property
    def credential_prompt_requested(self) -> bool:
        """Set when the last attempt failed for want of an API key."""
        return self._credential_prompt_requested

    def add_listener(self, listener: StateListener) -> None:
        """Register *listener* to be called with every new state."""
        self._listeners.append(listener)

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    async def submit(self, url: str) -> GenerationState:
        """Run one generation attempt for *url*.

        Never raises for expected failures; inspect :attr:`state`,
        :attr:`error` and :attr:`message` afterwards.

        Returns:
            The state the attempt ended in, or the unchanged current state
            if a request was already outstanding.
        """
        if self._in_flight or self._state in BUSY_STATES:
            logger.debug("Submit ignored: a generation request is already in progress")
            return self._state

        self._error = None
        self._message = None
        self._result = None
        self._credential_prompt_requested = False
        self._transition(GenerationState.VALIDATING)

        try:
            target = self._validate(url)
        except Docs2SkillError as exc:
            self._fail(exc)
            return self._state

        response: Optional[GenerationResponse] = None
        failure: Optional[Docs2SkillError] = None
        with self._generation_in_progress():
            try:
                self._transition(GenerationState.REQUESTING)
                response = await self._client.generate(self._compose_request(target))
            except TransportError as exc:
                failure = exc
            except Exception as exc:
                failure = TransportError(str(exc) or MSG_UNKNOWN_ERROR)

        # The outcome is published only after the in-flight flag is released.
        if failure is not None or response is None:
            self._fail(failure or TransportError(MSG_UNKNOWN_ERROR))
        else:
            self._classify(response)
        return self._state

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _validate(self, url: str) -> str:
        target = url.strip()
        if not target:
            raise ValidationError(MSG_EMPTY_URL)
        if self._gated and not self._credentials.has_credential():
            self._credential_prompt_requested = True
            raise CredentialRequiredError(MSG_CREDENTIAL_REQUIRED)
        if not is_well_formed_url(target):
            raise MalformedUrlError(MSG_MALFORMED_URL)
        return target

    def _compose_request(self, url: str) -> GenerationRequest:
        api_key = self._credentials.retrieve() if self._gated else None
        return GenerationRequest(url=url, api_key=api_key)

    def _classify(self, response: GenerationResponse) -> None:
        if not response.success or response.data is None:
            self._fail(ServiceError(response.error or MSG_SERVICE_FAILED))
            return

        data = response.data
        if not data.has_documentation:
            self._message = data.message or MSG_NO_DOCUMENTATION
            self._transition(GenerationState.NO_DOCUMENTATION_FOUND)
            return

        if not data.is_packageable:
            self._fail(ServiceError(MSG_MISSING_FILES))
            return

        self._result = data
        self._message = f"Generated skill '{data.skill_folder_name}'"
        self._transition(GenerationState.SUCCEEDED)

    def _fail(self, exc: Docs2SkillError) -> None:
        self._error = exc
        self._message = exc.message
        self._transition(GenerationState.FAILED)

    def _transition(self, state: GenerationState) -> None:
        logger.debug("Generation state %s -> %s", self._state.value, state.value)
        self._state = state
        for listener in self._listeners:
            listener(state)

    @contextmanager
    def _generation_in_progress(self) -> Iterator[None]:
        self._in_flight = True
        try:
            yield
        finally:
            self._in_flight = False
