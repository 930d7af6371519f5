"""Key commands -- manage the generation service API key.

Provides the ``docs2skill key`` sub-command group. The key is stored
locally (see :class:`~docs2skill.auth.credential_store.CredentialStore`)
and is only ever sent as the ``apiKey`` field of a generation request in
gated mode. It is displayed masked, never in full.

Typical workflow::

    docs2skill key set             # prompts without echo
    docs2skill key show            # fc-abc...7890
"""

from __future__ import annotations

from typing import Optional

import typer

from docs2skill.commands.generate import build_credential_store
from docs2skill.exit_codes import EXIT_INVALID_USAGE
from docs2skill.output import error, info, print_data, success, suggest


key_app = typer.Typer(no_args_is_help=True)


@key_app.command("show")
def key_show() -> None:
    """Show the saved API key in masked form.

    Example::

        docs2skill key show
    """
    store = build_credential_store()
    if not store.has_credential():
        info("No API key saved.")
        suggest("Save one: docs2skill key set")
        return

    print_data(store.masked_view())
    info("API key saved")


@key_app.command("set")
def key_set(
    key: Optional[str] = typer.Argument(
        None, help="API key. Omit to be prompted without echo."
    ),
) -> None:
    """Save the API key, replacing any previously saved key.

    Surrounding whitespace is removed. A blank key is rejected and leaves
    the saved key untouched.

    Raises:
        typer.Exit: With code 2 if the key is blank.

    Example::

        docs2skill key set fc-0123456789abcdef
        docs2skill key set
    """
    if key is None:
        key = typer.prompt("Firecrawl API key", hide_input=True, default="", show_default=False)

    store = build_credential_store()
    if not key.strip():
        error("API key must not be empty.")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    store.save(key)
    success(f"API key saved ({store.masked_view()})")
    info("Get your API key at https://www.firecrawl.dev/app/api-keys")
