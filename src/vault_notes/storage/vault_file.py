"""
File access for notes inside a vault.

A VaultFile resolves its path once, from the vault root plus an optional
folder plus a file name, and never recomputes it. Reading a file that does
not exist gives an empty string so a missing note behaves like a new, empty
one. Write errors are not caught.
"""

import logging
from pathlib import Path
from typing import List, Protocol, Union

from vault_notes.constants import EMPTY, NEWLINE

log = logging.getLogger(__name__)


class NoteFile(Protocol):
    """What a Note needs from its backing file."""

    def exists(self) -> bool: ...

    def read(self) -> str: ...

    def write(self, content: str) -> None: ...


class VaultFile:
    """A single UTF-8 text file addressed relative to a vault root."""

    def __init__(
        self,
        vault_root: Union[str, Path],
        filename: str,
        folder: str = EMPTY,
    ) -> None:
        self.vault_root = Path(vault_root)
        self.folder_path = self.vault_root / folder if folder else self.vault_root
        self.filename = filename
        self.path = self.folder_path / filename

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> str:
        if not self.exists():
            return EMPTY
        return self.path.read_text(encoding="utf-8")

    def write(self, content: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(content, encoding="utf-8")
        log.debug("Wrote %d chars to %s", len(content), self.path)

    def append(self, content: str) -> None:
        """Add content on a new line after whatever the file holds."""
        existing = self.read()
        self.write(NEWLINE.join([existing, content]) if existing else content)

    def lines(self) -> List[str]:
        return self.read().split(NEWLINE)

    def save_lines(self, lines: List[str]) -> None:
        self.write(NEWLINE.join(lines))

    def __repr__(self) -> str:
        return f"VaultFile({str(self.path)!r})"
