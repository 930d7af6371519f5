"""Persistent store for the generation service API key.

The key lives under one fixed name, :data:`API_KEY_STORAGE_KEY`, in a small
key-value backend. The default :class:`FileBackend` keeps a JSON object in
``~/.local/share/docs2skill/credentials.json`` (XDG) or the
platform-equivalent directory. Files are written atomically with ``0o600``
permissions so that secrets are never world-readable, even momentarily.

The backend is abstracted behind :class:`CredentialBackend` (``get`` /
``set`` over a key) so an OS keychain or encrypted store can replace the
file without touching the orchestrator.

The stored value is never printed; use :meth:`CredentialStore.masked_view`
for display.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from docs2skill.config import atomic_write, get_data_dir
from docs2skill.exceptions import ConfigError

API_KEY_STORAGE_KEY = "firecrawl_api_key"
"""Fixed key under which the API key is persisted."""

_MASK = "•" * 10
_MASK_THRESHOLD = 10


def mask_api_key(key: str) -> str:
    """Return a display-safe rendering of *key*.

    Keys of ten characters or fewer collapse to a fixed ten-bullet mask so
    their length is not revealed. Longer keys show the first six and last
    four characters around ``...``.

    Example::

        >>> mask_api_key("abcdef1234567890")
        'abcdef...7890'
    """
    if len(key) <= _MASK_THRESHOLD:
        return _MASK
    return f"{key[:6]}...{key[-4:]}"


class CredentialBackend(ABC):
    """Minimal durable key-value interface used by :class:`CredentialStore`."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under *key*, or ``None``."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""


class MemoryBackend(CredentialBackend):
    """In-process backend. Values do not survive the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class FileBackend(CredentialBackend):
    """JSON file backend with atomic ``0o600`` writes.

    Args:
        path: File to use. Defaults to ``<data_dir>/credentials.json``.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path if path is not None else get_data_dir() / "credentials.json"

    @property
    def path(self) -> Path:
        """The filesystem path of the credential file."""
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.is_file():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        atomic_write(self._path, json.dumps(data, indent=2) + "\n", mode=0o600)


class CredentialStore:
    """Lifecycle of the optional API key: check, mask, save, retrieve.

    There is no delete operation; a key is replaced only by
    saving a new one (last write wins).

    Args:
        backend: Durable key-value backend. Defaults to :class:`FileBackend`.

    Example::

        store = CredentialStore()
        store.save("  fc-abcdef1234567890  ")
        assert store.retrieve() == "fc-abcdef1234567890"
        store.masked_view()  # 'fc-abc...7890'
    """

    def __init__(self, backend: Optional[CredentialBackend] = None) -> None:
        self._backend = backend if backend is not None else FileBackend()

    @property
    def backend(self) -> CredentialBackend:
        return self._backend

    def has_credential(self) -> bool:
        """Return ``True`` iff a value is stored under the fixed key."""
        return bool(self._backend.get(API_KEY_STORAGE_KEY))

    def masked_view(self) -> str:
        """Return the stored key in masked form.

        Raises:
            ConfigError: If no key is stored. Callers should check
                :meth:`has_credential` first.
        """
        value = self._backend.get(API_KEY_STORAGE_KEY)
        if not value:
            raise ConfigError("No API key saved")
        return mask_api_key(value)

    def save(self, candidate: str) -> None:
        """Persist the trimmed *candidate*; a blank candidate is ignored."""
        value = candidate.strip()
        if not value:
            return
        self._backend.set(API_KEY_STORAGE_KEY, value)

    def retrieve(self) -> Optional[str]:
        """Return the stored key, or ``None`` when absent."""
        return self._backend.get(API_KEY_STORAGE_KEY) or None
