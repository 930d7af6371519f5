"""docs2skill -- Turn API documentation URLs into downloadable Claude Code skills.

This package submits a documentation URL to a remote skill generation
service and, when the service finds API documentation there, packages the
returned ``SKILL.md`` and reference files into a ``<skill>.zip`` archive
that a coding assistant can consume.

Typical workflow::

    docs2skill key set fc-1234...                 # only needed in gated mode
    docs2skill generate https://docs.example.com/api --output ./skills

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models for the wire protocol and configuration.
    config: XDG-aware configuration with precedence resolution.
    orchestrator: Request lifecycle state machine.
    archive: In-memory zip assembly of a generated skill.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
