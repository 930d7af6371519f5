"""Package a generated skill as a zip archive.

:class:`ArchiveBuilder` assembles, entirely in memory, the archive offered
to the user as ``<skill_folder_name>.zip``::

    <skill_folder_name>/SKILL.md
    <skill_folder_name>/references/<reference 1 name>
    <skill_folder_name>/references/<reference 2 name>
    ...

Entries are written in that order with a fixed timestamp, so the same
result always yields the same bytes. Contents are stored as UTF-8 and are
never truncated.

:func:`extract_skill` writes the same layout as a plain directory, for
callers that want the skill folder rather than the archive.
"""

from __future__ import annotations

import asyncio
import io
import zipfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Union

from docs2skill.config import atomic_write
from docs2skill.exceptions import ArchiveError
from docs2skill.models import GenerationResult

SKILL_FILENAME = "SKILL.md"
REFERENCES_DIRNAME = "references"

_FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)
_FILE_MODE = 0o644


@dataclass(frozen=True)
class ArchivePayload:
    """A built archive, ready to be saved or offered for download.

    Attributes:
        filename: Suggested file name, ``<skill_folder_name>.zip``.
        data: The complete zip file.
        entries: Archive member paths in write order.
    """

    filename: str
    data: bytes
    entries: tuple[str, ...]

    def save(self, directory: Union[str, Path]) -> Path:
        """Write the archive into *directory* as :attr:`filename`.

        Returns:
            Path of the written file.
        """
        root = Path(directory).resolve()
        target = (root / self.filename).resolve()
        if target.parent != root:
            raise ArchiveError(f"Refusing to write outside the output directory: {self.filename}")
        atomic_write(target, self.data)
        return Path(directory) / self.filename


def _is_safe_folder_name(name: str) -> bool:
    """A single relative path segment: no separators, no ``.``/``..``."""
    if "/" in name or "\\" in name or "\x00" in name:
        return False
    return name.strip() not in {"", ".", ".."}


def skill_entries(result: GenerationResult) -> list[tuple[str, str]]:
    """Return ``(archive path, content)`` pairs for *result* in write order.

    Raises:
        ArchiveError: If *result* has no documentation, no files, or no
            usable skill folder name.
    """
    if not result.has_documentation:
        raise ArchiveError("Cannot package a result without API documentation")
    if result.files is None or not result.skill_folder_name:
        raise ArchiveError("Cannot package a result without skill files")

    folder = result.skill_folder_name
    if not _is_safe_folder_name(folder):
        raise ArchiveError(f"Invalid skill folder name: {folder!r}")
    entries = [(f"{folder}/{SKILL_FILENAME}", result.files.skill_md)]
    for ref in result.files.references:
        entries.append((f"{folder}/{REFERENCES_DIRNAME}/{ref.name}", ref.content))
    return entries


class ArchiveBuilder:
    """Build a deterministic zip archive from a successful result.

    Args:
        compression: ``zipfile`` compression method.
    """

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED) -> None:
        self._compression = compression

    def build(self, result: GenerationResult) -> ArchivePayload:
        """Assemble the archive for *result*.

        Raises:
            ArchiveError: If *result* is not documentation-bearing.
        """
        entries = skill_entries(result)

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=self._compression) as zf:
            for path, content in entries:
                info = zipfile.ZipInfo(path, date_time=_FIXED_DATE_TIME)
                info.compress_type = self._compression
                info.external_attr = _FILE_MODE << 16
                zf.writestr(info, content.encode("utf-8"))

        return ArchivePayload(
            filename=f"{result.skill_folder_name}.zip",
            data=buffer.getvalue(),
            entries=tuple(path for path, _ in entries),
        )

    async def build_async(self, result: GenerationResult) -> ArchivePayload:
        """Run :meth:`build` in a worker thread and await the payload."""
        return await asyncio.to_thread(self.build, result)


def extract_skill(result: GenerationResult, directory: Union[str, Path]) -> Path:
    """Write the skill folder for *result* under *directory*.

    Returns:
        Path of the created ``<skill_folder_name>`` directory.

    Raises:
        ArchiveError: If *result* cannot be packaged or an entry would land
            outside *directory*.
    """
    root = Path(directory).resolve()
    for path, content in skill_entries(result):
        relative = PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts:
            raise ArchiveError(f"Refusing to write outside the output directory: {path}")
        target = root.joinpath(*relative.parts)
        atomic_write(target, content)
    return root / str(result.skill_folder_name)
