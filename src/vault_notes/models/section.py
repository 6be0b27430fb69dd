"""
Note sections and the ordered index over them.

A note body is a flat list of sections in document order. Each section has a
heading level (0 for the untitled text before the first heading, 1-6 for
``#`` to ``######``). Nesting is not enforced; a section's subsections are
simply the run of deeper sections that follows it.

Sections report mutations through a listener callable supplied by the owning
note. The listener must not keep the note alive; Note passes a closure over a
weak reference.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Iterable, Iterator, List, Optional, Union

from vault_notes.constants import (
    EMPTY,
    HEADING_MARKER,
    MAX_HEADING_LEVEL,
    NEWLINE,
    PATH_DELIMITER,
    ROOT_LEVEL,
    SPACE,
)

if TYPE_CHECKING:
    from vault_notes.models.task import NoteTask

Listener = Optional[Callable[[], None]]


def _index_of(sections: List[Section], target: Section) -> int:
    """Position of ``target`` by identity, or -1."""
    for i, section in enumerate(sections):
        if section is target:
            return i
    return -1


@dataclass(eq=False)
class Section:
    """
    A heading and the body text beneath it.

    ``title == ""`` marks the untitled root section, which renders without a
    heading line. A titled section always has a level between 1 and 6.
    """

    title: str = EMPTY
    body: str = EMPTY
    level: int = 1
    listener: Listener = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not ROOT_LEVEL <= self.level <= MAX_HEADING_LEVEL:
            raise ValueError(
                f"Section level must be between {ROOT_LEVEL} and {MAX_HEADING_LEVEL}, got {self.level}"
            )
        if self.title and self.level == ROOT_LEVEL:
            raise ValueError(f"Titled section '{self.title}' needs a heading level of at least 1")
        if NEWLINE in self.title or "\r" in self.title:
            raise ValueError(f"Section title must be a single line: {self.title!r}")

    def _notify(self) -> None:
        if self.listener is not None:
            self.listener()

    @property
    def heading_markdown(self) -> str:
        """``## Title`` for titled sections, '' for the root section."""
        if not self.title:
            return EMPTY
        return HEADING_MARKER * self.level + SPACE + self.title

    def append(self, text: str) -> None:
        """Add text after the body, starting it on a new line."""
        if self.body and not self.body.endswith(NEWLINE):
            self.body += NEWLINE
        self.body += text
        self._notify()

    def prepend(self, text: str) -> None:
        """Add text before the body, ending it with a line break."""
        if text and not text.endswith(NEWLINE):
            text += NEWLINE
        self.body = text + self.body
        self._notify()

    def is_empty(self) -> bool:
        return not self.body.strip()

    def render(self) -> str:
        parts = []
        if self.title:
            parts.append(self.heading_markdown)
        if self.body:
            parts.append(self.body)
        return NEWLINE.join(parts)

    def subsections(self, all_sections: Iterable[Section]) -> List[Section]:
        """
        Sections nested under this one.

        Returns the contiguous run right after this section whose levels are
        all deeper, stopping at the first section of the same or a higher
        level. Empty when this section is not part of ``all_sections``.
        """
        ordered = list(all_sections)
        start = _index_of(ordered, self)
        if start == -1:
            return []

        nested = []
        for section in ordered[start + 1:]:
            if section.level <= self.level:
                break
            nested.append(section)
        return nested

    def tasks(self) -> List[NoteTask]:
        """Task lines in the body, parsed in order."""
        from vault_notes.parsers.task_parser import parse_tasks

        return parse_tasks(self.body)

    def add_task(self, task: NoteTask) -> None:
        self.append(task.to_markdown())

    def __str__(self) -> str:
        return self.render()


class Sections:
    """
    Live, ordered view over a note's sections.

    The list is shared with the note, so additions and removals made here are
    what the note saves. Title lookups (find, find_all, find_by_path) ignore
    case; insert_after and remove-by-title match titles exactly.
    """

    def __init__(self, sections: List[Section], listener: Listener = None) -> None:
        self._sections = sections
        self._listener = listener

    def _notify(self) -> None:
        if self._listener is not None:
            self._listener()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def find(self, title: str) -> Optional[Section]:
        wanted = title.lower()
        for section in self._sections:
            if section.title.lower() == wanted:
                return section
        return None

    def find_all(self, title: str) -> List[Section]:
        wanted = title.lower()
        return [s for s in self._sections if s.title.lower() == wanted]

    def find_by_level(self, level: int) -> List[Section]:
        return [s for s in self._sections if s.level == level]

    def find_by_path(self, path: str, delimiter: str = PATH_DELIMITER) -> Optional[Section]:
        """
        Resolve a heading path such as ``"Projects > Work > Today"``.

        Each component must appear after the previous match and before any
        section at the previous match's level or higher; otherwise the path
        does not resolve and None is returned.
        """
        parts = [part.strip() for part in path.split(delimiter)]

        found: Optional[Section] = None
        current_level = 0

        for part in parts:
            wanted = part.lower()
            start = _index_of(self._sections, found) + 1 if found is not None else 0

            found = None
            for section in self._sections[start:]:
                if current_level > 0 and section.level <= current_level:
                    break
                if section.title.lower() == wanted:
                    found = section
                    current_level = section.level
                    break

            if found is None:
                return None

        return found

    def headings(self) -> List[Dict[str, object]]:
        """Titled sections as ``{"text", "level", "section"}`` dicts."""
        return [
            {"text": s.title, "level": s.level, "section": s}
            for s in self._sections
            if s.title
        ]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(
        self,
        title: str,
        body: str = EMPTY,
        level: int = 1,
        insert_after: Optional[str] = None,
    ) -> Section:
        """
        Create a section and insert it.

        The new section goes right after the first section titled exactly
        ``insert_after``; when that is not given or not found it is appended
        at the end.
        """
        section = Section(title=title, body=body, level=level, listener=self._listener)

        index = -1
        if insert_after:
            index = next(
                (i for i, s in enumerate(self._sections) if s.title == insert_after), -1
            )

        if index == -1:
            self._sections.append(section)
        else:
            self._sections.insert(index + 1, section)

        self._notify()
        return section

    def remove(self, title_or_section: Union[str, Section]) -> bool:
        """Remove by exact title (first match) or by the section object itself."""
        if isinstance(title_or_section, str):
            index = next(
                (i for i, s in enumerate(self._sections) if s.title == title_or_section), -1
            )
        else:
            index = _index_of(self._sections, title_or_section)

        if index == -1:
            return False

        del self._sections[index]
        self._notify()
        return True

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    def to_list(self) -> List[Section]:
        return self._sections

    def __iter__(self) -> Iterator[Section]:
        return iter(list(self._sections))

    def __len__(self) -> int:
        return len(self._sections)

    def __getitem__(self, index: int) -> Section:
        return self._sections[index]
