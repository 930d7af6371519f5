"""Exception hierarchy for docs2skill.

All exceptions inherit from :class:`Docs2SkillError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`docs2skill.exit_codes`.
The :class:`~docs2skill.orchestrator.GenerationOrchestrator` records these
as the reason for a ``FAILED`` state; the top-level handler in
:func:`docs2skill.app.main` catches ``Docs2SkillError`` and exits with the
appropriate code, while unexpected exceptions produce a crash log.

Subclass hierarchy::

    Docs2SkillError (exit 1)
    +-- ValidationError          (exit 2)
    +-- MalformedUrlError        (exit 2)
    +-- CredentialRequiredError  (exit 3)
    +-- ServiceError             (exit 5)
    +-- TransportError           (exit 6)
    +-- ArchiveError             (exit 1)
    +-- ConfigError              (exit 1)

A service answer without documentation is *not* an error and has no
exception class; see :data:`~docs2skill.exit_codes.EXIT_NO_DOCUMENTATION`.
"""

from docs2skill.exit_codes import (
    EXIT_CONNECTION_ERROR,
    EXIT_CREDENTIAL_REQUIRED,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SERVICE_ERROR,
)


class Docs2SkillError(Exception):
    """Base exception for all docs2skill errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`docs2skill.exit_codes`.

    Args:
        message: Human-readable error description shown to the user.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class ValidationError(Docs2SkillError):
    """Raised when the submitted URL is empty."""

    exit_code = EXIT_INVALID_USAGE


class MalformedUrlError(Docs2SkillError):
    """Raised when the submitted URL is not a well-formed absolute URL."""

    exit_code = EXIT_INVALID_USAGE


class CredentialRequiredError(Docs2SkillError):
    """Raised in gated mode when no API key has been saved yet."""

    exit_code = EXIT_CREDENTIAL_REQUIRED


class ServiceError(Docs2SkillError):
    """Raised when the generation service reports failure or sends no payload."""

    exit_code = EXIT_SERVICE_ERROR


class TransportError(Docs2SkillError):
    """Raised on network failures or an unparseable service response.

    The message is the underlying error's message, surfaced verbatim.
    """

    exit_code = EXIT_CONNECTION_ERROR


class ArchiveError(Docs2SkillError):
    """Raised when a result cannot be packaged (no documentation or no files)."""

    exit_code = EXIT_GENERIC_FAILURE


class ConfigError(Docs2SkillError):
    """Raised for configuration problems (invalid JSON, missing credential)."""

    exit_code = EXIT_GENERIC_FAILURE
