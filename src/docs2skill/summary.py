"""Human-readable views of a generated skill.

These helpers only format; they never change the result. In particular
:func:`preview` truncates for display, while the archive always carries the
full file contents.
"""

from __future__ import annotations

from typing import Optional

from docs2skill.models import GenerationResult

PREVIEW_LIMIT = 800
"""Characters of a file shown by :func:`preview` before ``...``."""


def pluralize(count: int, noun: str) -> str:
    """Return ``"1 endpoint"`` / ``"2 endpoints"`` style counts."""
    return f"{count} {noun}{'' if count == 1 else 's'}"


def stats(result: GenerationResult) -> list[str]:
    """Endpoint count, reference file count and credits used, if any."""
    references = result.files.references if result.files else []
    lines = [
        pluralize(len(result.endpoints), "endpoint"),
        pluralize(len(references), "reference file"),
    ]
    if result.credits_used:
        lines.append(f"{result.credits_used} credits used")
    return lines


def structure_tree(result: GenerationResult) -> str:
    """Render the skill folder layout as a tree.

    Example::

        stripe-api/
        ├── SKILL.md           # Instructions on when/how to use
        └── references/
            └── auth.md
    """
    references = result.files.references if result.files else []
    lines = [
        f"{result.skill_folder_name}/",
        "├── SKILL.md           # Instructions on when/how to use",
        "└── references/",
    ]
    for i, ref in enumerate(references):
        branch = "└──" if i == len(references) - 1 else "├──"
        lines.append(f"    {branch} {ref.name}")
    return "\n".join(lines)


def preview(content: str, limit: Optional[int] = PREVIEW_LIMIT) -> str:
    """Return *content* cut to *limit* characters, with ``...`` if cut.

    ``None`` disables truncation.
    """
    if limit is None or len(content) <= limit:
        return content
    return content[:limit] + "..."


def endpoint_rows(result: GenerationResult) -> list[list[str]]:
    """Endpoint table rows in received order: method, path, name, description."""
    return [[ep.method, ep.path, ep.name, ep.description] for ep in result.endpoints]
