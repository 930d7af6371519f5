"""API key storage for the generation service.

The main entry points are:

- :class:`CredentialStore` -- presence check, masked display, save and
  retrieval of the single API key.
- :class:`CredentialBackend` -- the ``get``/``set`` interface a store
  persists through, with :class:`FileBackend` (default) and
  :class:`MemoryBackend` implementations.
- :func:`mask_api_key` -- display-safe rendering of a key.

Typical usage::

    from docs2skill.auth import CredentialStore

    store = CredentialStore()
    if store.has_credential():
        print(store.masked_view())
"""

from docs2skill.auth.credential_store import (
    API_KEY_STORAGE_KEY,
    CredentialBackend,
    CredentialStore,
    FileBackend,
    MemoryBackend,
    mask_api_key,
)

__all__ = [
    "API_KEY_STORAGE_KEY",
    "CredentialBackend",
    "CredentialStore",
    "FileBackend",
    "MemoryBackend",
    "mask_api_key",
]
