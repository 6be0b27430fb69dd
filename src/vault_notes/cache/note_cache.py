"""
Registry of open notes for one vault.

Design:
    Primary store: Dict[Path, Note]   (one Note per resolved file path)

Notes are single-writer objects. The MCP server and the REST API run on
different threads, so every access to a cached note goes through _lock
(threading.RLock); handlers hold it across multi-step mutations via
``with cache.lock:``.
"""

import logging
import threading
from datetime import date, datetime
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Iterator, List, Optional, Set, Union

from vault_notes.constants import MARKDOWN_SUFFIX
from vault_notes.note import Note
from vault_notes.storage.vault_file import VaultFile
from vault_notes.utils.dates import to_filename

log = logging.getLogger(__name__)


def _mtime(path: Path) -> Optional[float]:
    try:
        return path.stat().st_mtime
    except OSError:
        return None


class NoteCache:
    """
    Opens notes relative to a vault root and keeps them for reuse.

    Call initialize() before use. Paths given to the public methods are
    relative to the vault root and may omit the ``.md`` suffix; paths that
    resolve outside the vault raise ValueError.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._notes: Dict[Path, Note] = {}
        self._mtimes: Dict[Path, Optional[float]] = {}
        self._vault_root: Optional[Path] = None
        self._exclude_dirs: Set[str] = set()
        self._daily_folder = "daily"
        self._initialized_at: Optional[datetime] = None

    # ------------------------------------------------------------------
    # Initialisation
    # ------------------------------------------------------------------

    def initialize(
        self,
        vault_root: Path,
        exclude_dirs: Set[str],
        daily_folder: str = "daily",
    ) -> None:
        self._vault_root = Path(vault_root).resolve()
        self._exclude_dirs = set(exclude_dirs)
        self._daily_folder = daily_folder
        self._initialized_at = datetime.now()
        log.info("Note cache ready: %s", self._vault_root)

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def vault_root(self) -> Path:
        if self._vault_root is None:
            raise RuntimeError("NoteCache.initialize() has not been called")
        return self._vault_root

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _split(self, rel_path: str) -> Dict[str, str]:
        """Split a vault-relative path into VaultFile folder/filename."""
        pure = PurePosixPath(rel_path.replace("\\", "/"))
        filename = pure.name
        if not filename:
            raise ValueError(f"Not a note path: '{rel_path}'")
        if not filename.endswith(MARKDOWN_SUFFIX):
            filename += MARKDOWN_SUFFIX
        folder = str(pure.parent) if str(pure.parent) != "." else ""
        return {"folder": folder, "filename": filename}

    def _resolve(self, folder: str, filename: str) -> Path:
        root = self.vault_root
        path = (root / folder / filename).resolve()
        try:
            path.relative_to(root)
        except ValueError:
            raise ValueError(f"Path escapes the vault: '{folder}/{filename}'") from None
        return path

    def _relative(self, path: Path) -> str:
        return path.relative_to(self.vault_root).as_posix()

    def _write(self, path: Path, note: Note) -> None:
        note.save()
        self._mtimes[path] = _mtime(path)

    def _walk_notes(self, root: Path) -> Iterator[Path]:
        """Yield every markdown file under root, respecting exclusions."""
        for path in root.rglob("*" + MARKDOWN_SUFFIX):
            if not path.is_file():
                continue
            rel = path.relative_to(self.vault_root)
            if any(part in self._exclude_dirs for part in rel.parts[:-1]):
                continue
            yield path

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def open(self, rel_path: str) -> Note:
        """
        Return the note at a vault-relative path, creating the entry if needed.

        A cached note without unsaved changes is replaced by a fresh one when
        the file changed on disk since it was opened.
        """
        parts = self._split(rel_path)
        path = self._resolve(parts["folder"], parts["filename"])
        with self._lock:
            note = self._notes.get(path)
            mtime = _mtime(path)
            if note is not None and not note.is_dirty and self._mtimes.get(path) != mtime:
                log.debug("Reloading %s (changed on disk)", path)
                note = None
            if note is None:
                note = Note(VaultFile(self.vault_root, parts["filename"], parts["folder"]))
                self._notes[path] = note
                self._mtimes[path] = mtime
            return note

    def get(self, rel_path: str) -> Optional[Note]:
        """An already-open note, or None."""
        parts = self._split(rel_path)
        path = self._resolve(parts["folder"], parts["filename"])
        with self._lock:
            return self._notes.get(path)

    def find(self, rel_path: str) -> Optional[Note]:
        """
        The note at a path if it is open or exists on disk, else None.

        Unlike open(), a missing file never adds an entry, and a clean entry
        whose file is gone is dropped.
        """
        parts = self._split(rel_path)
        path = self._resolve(parts["folder"], parts["filename"])
        with self._lock:
            note = self._notes.get(path)
            if path.is_file() or (note is not None and note.is_dirty):
                return self.open(rel_path)
            self._notes.pop(path, None)
            self._mtimes.pop(path, None)
            return None

    def daily_note(self, day: Union[date, datetime, None] = None) -> Note:
        """The note for a given day (today by default) in the daily folder."""
        stem = to_filename(day or datetime.now())
        return self.open(f"{self._daily_folder}/{stem}" if self._daily_folder else stem)

    def list_notes(self, folder: Optional[str] = None) -> List[str]:
        """Vault-relative paths of all notes on disk, sorted."""
        root = self._resolve(folder, "") if folder else self.vault_root
        if not root.is_dir():
            return []
        return sorted(self._relative(p) for p in self._walk_notes(root))

    def save(self, rel_path: str) -> bool:
        """
        Save one open note if it has unsaved changes or no file yet.

        Returns True if the file was written.
        """
        parts = self._split(rel_path)
        path = self._resolve(parts["folder"], parts["filename"])
        with self._lock:
            note = self._notes.get(path)
            if note is None or (not note.is_dirty and note.file.exists()):
                return False
            self._write(path, note)
            return True

    def save_all(self) -> int:
        """
        Save every dirty note. Returns the number written.

        A note that fails to write is logged and stays dirty; the rest are
        still saved.
        """
        written = 0
        with self._lock:
            dirty = [(path, note) for path, note in self._notes.items() if note.is_dirty]
            for path, note in dirty:
                try:
                    self._write(path, note)
                except OSError:
                    log.exception("Failed to save %s", path)
                    continue
                written += 1
        if written:
            log.info("Saved %d notes", written)
        return written

    def discard(self, rel_path: str) -> bool:
        """Forget an open note without saving it."""
        parts = self._split(rel_path)
        path = self._resolve(parts["folder"], parts["filename"])
        with self._lock:
            self._mtimes.pop(path, None)
            return self._notes.pop(path, None) is not None

    def status(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "vault_root": str(self._vault_root) if self._vault_root else None,
                "notes_open": len(self._notes),
                "notes_dirty": sum(1 for n in self._notes.values() if n.is_dirty),
                "exclude_dirs": sorted(self._exclude_dirs),
                "daily_folder": self._daily_folder,
                "initialized_at": self._initialized_at.isoformat() if self._initialized_at else None,
            }
