"""Generate command -- turn a documentation URL into a skill archive.

Submits the URL to the generation service through
:class:`~docs2skill.orchestrator.GenerationOrchestrator`, prints a summary
of the generated skill, and saves ``<skill>.zip`` (or, with ``--extract``,
the unpacked skill folder).

Typical usage::

    docs2skill generate https://docs.stripe.com/api
    docs2skill generate https://docs.stripe.com/api --output ./skills --endpoints
    docs2skill generate https://docs.stripe.com/api --no-download --preview
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any, Optional

import typer

from docs2skill.archive import ArchiveBuilder, extract_skill
from docs2skill.auth.credential_store import CredentialStore
from docs2skill.config import resolve_config
from docs2skill.exceptions import Docs2SkillError
from docs2skill.exit_codes import EXIT_NO_DOCUMENTATION
from docs2skill.models import GenerationResult, GlobalConfig
from docs2skill.orchestrator import GenerationOrchestrator, GenerationState
from docs2skill.output import OutputFormat, error, get_output, info, progress, success, suggest
from docs2skill.summary import PREVIEW_LIMIT, endpoint_rows, preview, stats, structure_tree


def build_orchestrator(config: GlobalConfig, store: CredentialStore) -> GenerationOrchestrator:
    """Create the orchestrator used by :func:`generate_command`."""
    return GenerationOrchestrator.from_config(config, store)


def build_credential_store() -> CredentialStore:
    """Create the credential store used by the CLI."""
    return CredentialStore()


def generate_command(
    ctx: typer.Context,
    url: str = typer.Argument(help="Documentation URL, e.g. https://docs.example.com/api."),
    output_dir: Optional[str] = typer.Option(
        None, "--output", "-o", help="Directory to save the skill into."
    ),
    extract: bool = typer.Option(
        False, "--extract", help="Write the skill folder instead of a zip archive."
    ),
    no_download: bool = typer.Option(
        False, "--no-download", help="Only show the result; save nothing."
    ),
    show_endpoints: bool = typer.Option(
        False, "--endpoints", help="List the endpoints found in the documentation."
    ),
    show_files: bool = typer.Option(
        False, "--preview", help="Preview SKILL.md and the first reference file."
    ),
    full: bool = typer.Option(
        False, "--full", help="Do not truncate previews."
    ),
) -> None:
    """Generate a Claude Code skill from API documentation.

    Args:
        ctx: Typer context carrying the global flags.
        url: Documentation page to generate the skill from.
        output_dir: Destination directory; defaults to the configured
            ``output_dir``.
        extract: Write ``<skill>/SKILL.md`` and ``<skill>/references/*``
            instead of ``<skill>.zip``.
        no_download: Skip saving entirely.
        show_endpoints: Print the endpoint table.
        show_files: Print truncated previews of the generated files.
        full: Disable preview truncation.

    Raises:
        typer.Exit: With the failure's exit code, or
            :data:`~docs2skill.exit_codes.EXIT_NO_DOCUMENTATION` when the
            page holds no API documentation.
    """
    obj: dict[str, Any] = ctx.obj or {}

    try:
        config = resolve_config(
            cli_service_url=obj.get("service_url"),
            cli_gated=obj.get("gated"),
        )
    except Docs2SkillError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    store = build_credential_store()
    orchestrator = build_orchestrator(config, store)
    orchestrator.add_listener(_report_progress)

    if orchestrator.gated and store.has_credential():
        info(f"Using API key {store.masked_view()}")

    state = asyncio.run(orchestrator.submit(url))

    if (
        state is GenerationState.FAILED
        and orchestrator.credential_prompt_requested
        and _can_prompt(obj)
    ):
        info(orchestrator.message or "")
        candidate = typer.prompt("Firecrawl API key", hide_input=True, default="", show_default=False)
        store.save(candidate)
        if store.has_credential():
            success(f"API key saved ({store.masked_view()})")
            state = asyncio.run(orchestrator.submit(url))

    if state is GenerationState.FAILED:
        exc = orchestrator.error
        error(orchestrator.message or "Generation failed")
        if orchestrator.credential_prompt_requested:
            suggest("Save your key: docs2skill key set")
        raise typer.Exit(code=exc.exit_code if exc is not None else 1)

    if state is GenerationState.NO_DOCUMENTATION_FOUND:
        info(orchestrator.message or "No API documentation found")
        raise typer.Exit(code=EXIT_NO_DOCUMENTATION)

    result = orchestrator.result
    assert result is not None  # SUCCEEDED guarantees a result

    saved: Optional[Path] = None
    if not no_download:
        directory = output_dir or config.output_dir
        try:
            if extract:
                saved = extract_skill(result, directory)
            else:
                payload = asyncio.run(ArchiveBuilder().build_async(result))
                saved = payload.save(directory)
        except (Docs2SkillError, OSError) as exc:
            error(f"Could not save skill: {exc}")
            raise typer.Exit(code=1) from None

    _render_result(result, saved, show_endpoints, show_files, full)

    if saved is not None:
        success(f"Skill saved to {saved}")
        if not extract:
            suggest(f"Unpack into your skills directory: unzip {saved}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _report_progress(state: GenerationState) -> None:
    if state is GenerationState.REQUESTING:
        progress("Generating...")


def _can_prompt(obj: dict[str, Any]) -> bool:
    return not obj.get("no_input", False) and sys.stdin.isatty()


def _render_result(
    result: GenerationResult,
    saved: Optional[Path],
    show_endpoints: bool,
    show_files: bool,
    full: bool,
) -> None:
    output = get_output()
    limit = None if full else PREVIEW_LIMIT

    if output.format == OutputFormat.JSON:
        data = result.model_dump(mode="json", by_alias=True, exclude={"files"})
        data["references"] = [r.name for r in result.files.references] if result.files else []
        data["savedTo"] = str(saved) if saved is not None else None
        output.format_response(data)
        return

    output.print_data(f"{result.service_name or result.skill_folder_name} Skill")
    if result.service_description:
        output.print_data(result.service_description)
    output.print_data(" · ".join(stats(result)))
    output.print_block(structure_tree(result), title="Skill Structure", lexer="text")

    if show_endpoints and result.endpoints:
        output.print_table(
            ["Method", "Path", "Name", "Description"],
            endpoint_rows(result),
            title="Endpoints",
        )

    if show_files and result.files is not None:
        output.print_block(preview(result.files.skill_md, limit), title="SKILL.md")
        if result.files.references:
            first = result.files.references[0]
            output.print_block(preview(first.content, limit), title=f"references/{first.name}")
