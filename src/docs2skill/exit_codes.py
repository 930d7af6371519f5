"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific outcome category and is referenced by the
corresponding :class:`~docs2skill.exceptions.Docs2SkillError` subclass.
Shell wrappers can inspect the exit code to tell a rejected URL from a
service failure without parsing stderr.

Example::

    $ docs2skill generate https://example.com/blog
    $ echo $?
    4   # EXIT_NO_DOCUMENTATION -- the page holds no API reference
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The URL was empty or malformed, or the command was invoked incorrectly."""

EXIT_CREDENTIAL_REQUIRED = 3
"""Gated mode is active and no API key has been saved."""

EXIT_NO_DOCUMENTATION = 4
"""The service answered, but found no API documentation at the URL."""

EXIT_SERVICE_ERROR = 5
"""The generation service reported a failure or returned an empty payload."""

EXIT_CONNECTION_ERROR = 6
"""The service could not be reached or its response could not be parsed."""
