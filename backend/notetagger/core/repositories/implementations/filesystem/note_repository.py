from __future__ import annotations

import asyncio
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from notetagger.core.models.note import Note, NoteRef
from notetagger.core.repositories.note_repository import NoteRepository
from notetagger.utils.files import atomic_write_text
from notetagger.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = get_logger(__name__)

NOTE_SUFFIX = ".md"


class FilesystemNoteRepository(NoteRepository):
    """Markdown vault stored as plain files under a root directory.

    Paths are vault-relative POSIX strings. Anything that resolves outside the
    vault, or that is not a markdown file, is reported as missing.
    """

    def __init__(self, vault_path: str | Path) -> None:
        self._root = Path(vault_path).resolve()

    def _resolve(self, path: str) -> Path | None:
        if not path or not path.endswith(NOTE_SUFFIX):
            return None
        candidate = (self._root / PurePosixPath(path)).resolve()
        if not candidate.is_relative_to(self._root):
            logger.warning("Rejected path outside vault: %s", path)
            return None
        return candidate

    def _to_ref(self, file_path: Path) -> NoteRef:
        return NoteRef(path=file_path.relative_to(self._root).as_posix(), title=file_path.stem)

    def _read_note(self, file_path: Path) -> Note | None:
        ref = self._to_ref(file_path)
        try:
            # newline="" keeps CRLF terminators intact
            with open(file_path, encoding="utf-8", newline="") as fh:
                text = fh.read()
        except UnicodeDecodeError as err:
            logger.warning("Skipping note %s, not valid UTF-8: %s", ref.path, err)
            return None
        return Note(path=ref.path, title=ref.title, text=text)

    async def get(self, path: str) -> Note | None:
        file_path = self._resolve(path)
        if file_path is None:
            return None

        def _read() -> Note | None:
            if not file_path.is_file():
                return None
            return self._read_note(file_path)

        return await asyncio.to_thread(_read)

    async def list(self, *, limit: int = 50) -> Sequence[NoteRef]:
        def _scan() -> list[NoteRef]:
            if not self._root.is_dir():
                return []
            notes: list[NoteRef] = []
            for file_path in sorted(self._root.rglob(f"*{NOTE_SUFFIX}")):
                relative = file_path.relative_to(self._root)
                # Skip .obsidian, .trash and other hidden folders
                if any(part.startswith(".") for part in relative.parts):
                    continue
                if not file_path.is_file():
                    continue
                notes.append(self._to_ref(file_path))
                if len(notes) >= limit:
                    break
            return notes

        return await asyncio.to_thread(_scan)

    async def write(self, path: str, text: str) -> Note:
        file_path = self._resolve(path)
        if file_path is None:
            raise ValueError(f"Invalid note path: {path}")

        def _write() -> Note:
            atomic_write_text(file_path, text)
            ref = self._to_ref(file_path)
            return Note(path=ref.path, title=ref.title, text=text)

        note = await asyncio.to_thread(_write)
        logger.info("Wrote note %s (%d chars)", note.path, len(text))
        return note
