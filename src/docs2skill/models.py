"""Canonical Pydantic models shared across all docs2skill modules.

This is the single source of truth for data shapes in the project. The
models fall into two groups:

**Configuration models** -- serialised as JSON in the user's config
directory: :class:`RequestConfig` and :class:`GlobalConfig`.

**Wire models** -- the generation service's request/response contract:
:class:`GenerationRequest`, :class:`Endpoint`, :class:`SkillReference`,
:class:`FileBundle`, :class:`GenerationResult`, and
:class:`GenerationResponse`.

Wire models use snake_case attribute names with camelCase aliases matching
the service's JSON (``hasDocumentation``, ``skillFolderName``, ...). Both
spellings are accepted on input (``populate_by_name``); dump with
``by_alias=True`` to produce the wire form.
"""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_SERVICE_URL = "http://localhost:3000/api/generate-skills"


# --- Configuration ---


class RequestConfig(BaseModel):
    """HTTP settings applied to the generation request."""

    timeout: int = Field(
        default=120, description="Request timeout in seconds (generation crawls the site)"
    )
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/docs2skill/config.json``.

    Loaded and saved by :func:`~docs2skill.config.load_global_config` and
    :func:`~docs2skill.config.save_global_config`. Fields here have the
    lowest precedence and can be overridden by environment variables or CLI
    flags. See :func:`~docs2skill.config.resolve_config`.
    """

    service_url: str = Field(
        default=DEFAULT_SERVICE_URL,
        description="Endpoint of the skill generation service",
    )
    gated: bool = Field(
        default=False,
        description="Require a saved API key before any generation request",
    )
    output_dir: str = Field(
        default=".", description="Default directory for downloaded skill archives"
    )
    request: RequestConfig = Field(default_factory=RequestConfig)


# --- Wire models ---


class GenerationRequest(BaseModel):
    """Outbound body of one generation attempt. Built fresh per attempt."""

    model_config = ConfigDict(populate_by_name=True)

    url: str = Field(min_length=1)
    api_key: Optional[str] = Field(default=None, alias="apiKey")

    def to_wire(self) -> dict[str, str]:
        """Return the JSON body; ``apiKey`` is omitted when unset."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Endpoint(BaseModel):
    """One API endpoint the service inferred from the documentation.

    ``method`` is conventionally GET/POST/PUT/DELETE but is not constrained.
    """

    name: str
    method: str
    path: str
    description: str = ""


class SkillReference(BaseModel):
    """A reference file placed under ``references/`` in the skill folder."""

    name: str
    content: str


class FileBundle(BaseModel):
    """File contents of a generated skill."""

    model_config = ConfigDict(populate_by_name=True)

    skill_md: str = Field(alias="skillMd")
    references: list[SkillReference] = Field(default_factory=list)


class GenerationResult(BaseModel):
    """Classified outcome of one generation request.

    ``has_documentation`` discriminates the two shapes: when ``False`` only
    ``message`` is meaningful; when ``True`` the service, endpoint, and file
    fields describe the generated skill.
    """

    model_config = ConfigDict(populate_by_name=True)

    has_documentation: bool = Field(alias="hasDocumentation")
    message: Optional[str] = None
    service_name: Optional[str] = Field(default=None, alias="serviceName")
    service_description: Optional[str] = Field(
        default=None, alias="serviceDescription"
    )
    endpoints: list[Endpoint] = Field(default_factory=list)
    files: Optional[FileBundle] = None
    credits_used: Optional[Union[int, float]] = Field(default=None, alias="creditsUsed")
    skill_folder_name: Optional[str] = Field(default=None, alias="skillFolderName")

    @property
    def is_packageable(self) -> bool:
        """Whether this result carries everything an archive needs."""
        return (
            self.has_documentation
            and self.files is not None
            and bool(self.skill_folder_name)
        )


class GenerationResponse(BaseModel):
    """Inbound JSON envelope from the generation service."""

    success: bool
    error: Optional[str] = None
    data: Optional[GenerationResult] = None
