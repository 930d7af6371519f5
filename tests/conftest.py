"""Shared test fixtures for docs2skill.

Provides reusable fixtures for isolated config environments, credential
stores, canned service payloads, output state, and running CLI commands.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from docs2skill.auth.credential_store import CredentialStore, MemoryBackend
from docs2skill.client.async_client import GenerationClient
from docs2skill.output import OutputFormat, OutputManager, reset_output, set_output


SERVICE_URL = "https://skills.example.com/api/generate-skills"
DOCS_URL = "https://docs.stripe.com/api"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When CliRunner redirects those streams and the test
    finishes, the cached references become stale.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration and credentials to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path,
    clears all DOCS2SKILL_* environment variables, and changes the working
    directory to tmp_path.
    """
    monkeypatch.setattr("docs2skill.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in [
        "DOCS2SKILL_SERVICE_URL",
        "DOCS2SKILL_GATED",
        "DOCS2SKILL_APP_MODE",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Credential fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def memory_store() -> CredentialStore:
    """A credential store with no key saved."""
    return CredentialStore(MemoryBackend())


@pytest.fixture
def keyed_store() -> CredentialStore:
    """A credential store holding a saved key."""
    store = CredentialStore(MemoryBackend())
    store.save("fc-abcdef1234567890")
    return store


# ---------------------------------------------------------------------------
# Service payload fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def stripe_payload() -> dict[str, Any]:
    """A successful, documentation-bearing service response."""
    return {
        "success": True,
        "data": {
            "hasDocumentation": True,
            "serviceName": "Stripe",
            "serviceDescription": "Payments infrastructure for the internet.",
            "endpoints": [
                {
                    "name": "Create charge",
                    "method": "POST",
                    "path": "/v1/charges",
                    "description": "Charge a payment source.",
                },
                {
                    "name": "List customers",
                    "method": "GET",
                    "path": "/v1/customers",
                    "description": "Returns a list of customers.",
                },
            ],
            "files": {
                "skillMd": "# Stripe\n\nUse this skill to call the Stripe API.\n",
                "references": [
                    {"name": "auth.md", "content": "# Auth\n\nBearer sk_test_...\n"},
                    {"name": "charges.md", "content": "# Charges\n\nPOST /v1/charges\n"},
                ],
            },
            "creditsUsed": 12,
            "skillFolderName": "stripe-api",
        },
    }


@pytest.fixture
def no_docs_payload() -> dict[str, Any]:
    return {
        "success": True,
        "data": {"hasDocumentation": False, "message": "No API reference found"},
    }


# ---------------------------------------------------------------------------
# HTTP fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_client() -> Callable[..., GenerationClient]:
    """Factory for a GenerationClient backed by an httpx.MockTransport.

    Accepts either a handler function or a JSON-serialisable payload that
    every request is answered with.
    """

    def _factory(handler_or_payload: Any, status_code: int = 200) -> GenerationClient:
        if callable(handler_or_payload):
            handler = handler_or_payload
        else:
            body = json.dumps(handler_or_payload).encode("utf-8")

            def handler(request: httpx.Request) -> httpx.Response:
                return httpx.Response(
                    status_code,
                    content=body,
                    headers={"content-type": "application/json"},
                )

        return GenerationClient(SERVICE_URL, transport=httpx.MockTransport(handler))

    return _factory


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet PLAIN-format output manager."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
