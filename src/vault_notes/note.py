"""
Note documents.

A Note is bound to one file. Its text is read and parsed lazily, the first
time the front matter or sections are accessed, and written back by save().

State:
    unparsed -> parsed (clean) -> parsed (dirty) -> parsed (clean) on save

Every mutation made through the front matter, the section index or a
section marks the note dirty. Sections and the front matter reach the note
through a notifier that only holds a weak reference to it.

Usage:
    note = Note.open(vault_root, "2025-10-05.md", folder="daily")
    note.set_frontmatter_property("tags", "journal, daily")
    note.sections.add("Agenda", level=2).append("- 09:00 Standup")
    note.save()
"""

from __future__ import annotations

import logging
import weakref
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from vault_notes.constants import EMPTY, NEWLINE
from vault_notes.models.frontmatter import FrontMatter
from vault_notes.models.section import Section, Sections
from vault_notes.parsers.note_parser import parse_content, serialize
from vault_notes.storage.vault_file import NoteFile, VaultFile

log = logging.getLogger(__name__)


def _weak_notifier(note: Note) -> Callable[[], None]:
    ref = weakref.ref(note)

    def notify() -> None:
        target = ref()
        if target is not None:
            target._mark_dirty()

    return notify


class Note:
    """A parsed markdown note: front matter plus ordered sections."""

    def __init__(self, file: NoteFile) -> None:
        self.file = file
        self.raw = EMPTY
        self._frontmatter = FrontMatter()
        self._sections: List[Section] = []
        self._parsed = False
        self._dirty = False
        self._notify = _weak_notifier(self)

    @classmethod
    def open(
        cls,
        vault_root: Union[str, Path],
        filename: str,
        folder: str = EMPTY,
    ) -> Note:
        """Bind a note to ``vault_root/folder/filename``. Nothing is read yet."""
        return cls(VaultFile(vault_root, filename, folder))

    @property
    def path(self) -> Optional[Path]:
        return getattr(self.file, "path", None)

    @property
    def is_parsed(self) -> bool:
        return self._parsed

    # ------------------------------------------------------------------
    # Parse / save
    # ------------------------------------------------------------------

    def parse(self) -> None:
        """Read and parse the file. Does nothing once the note is parsed."""
        if self._parsed:
            return

        raw = self.file.read()
        frontmatter, sections = parse_content(raw, self._notify)

        self.raw = raw
        self._frontmatter = frontmatter
        self._sections = sections
        self._parsed = True
        log.debug(
            "Parsed %s: %d front matter keys, %d sections",
            self.path, len(frontmatter), len(sections),
        )

    def to_string(self) -> str:
        """The note text that save() would write."""
        self.parse()
        return serialize(self._frontmatter, self._sections)

    def save(self) -> None:
        """Write the note back to its file and clear the dirty flag."""
        content = self.to_string()
        self.file.write(content)
        self.raw = content
        self._mark_dirty(False)
        log.debug("Saved %s", self.path)

    # ------------------------------------------------------------------
    # Dirty tracking
    # ------------------------------------------------------------------

    def _mark_dirty(self, dirty: bool = True) -> None:
        self._dirty = dirty

    @property
    def is_dirty(self) -> bool:
        """True when there are changes that have not been saved."""
        return self._dirty

    # ------------------------------------------------------------------
    # Front matter
    # ------------------------------------------------------------------

    @property
    def frontmatter(self) -> FrontMatter:
        self.parse()
        return self._frontmatter

    def set_frontmatter_property(self, key: str, value: Any) -> Note:
        self.frontmatter.set(key, value)
        return self

    def set_frontmatter(self, values: Mapping[str, Any]) -> Note:
        """Set several properties; nothing changes if any of them is invalid."""
        self.frontmatter.update(values)
        return self

    def remove_frontmatter_property(self, key: str) -> bool:
        return self.frontmatter.remove(key)

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    @property
    def sections(self) -> Sections:
        self.parse()
        return Sections(self._sections, self._notify)

    def headings(self) -> List[Dict[str, object]]:
        """Every titled section as ``{"text", "level", "section"}``."""
        return self.sections.headings()

    def content(self) -> str:
        """The rendered sections without the front matter."""
        return NEWLINE.join(section.render() for section in self.sections)

    def __repr__(self) -> str:
        state = "unparsed" if not self._parsed else ("dirty" if self._dirty else "clean")
        return f"Note({str(self.path)!r}, {state})"
