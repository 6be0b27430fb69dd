"""
Normalized tag sets.

Tags are shared between front matter (stored as a list) and task lines
(rendered inline as ``#tag``). Both sides clean their input through
``clean_tag`` so ``"#work"``, ``" work "`` and ``"work"`` are the same tag.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, List, Optional, Union

from vault_notes.constants import EMPTY, SPACE, TAG_PREFIX

TagInput = Union[str, Iterable[str], None]

# "work, urgent", "work urgent" and "#work #urgent" all split the same way.
# A tag never contains a separator or a double quote.
_TAG_SPLIT = re.compile(r"[,\s\"]+")


def clean_tag(tag: str) -> str:
    """Strip surrounding whitespace and one leading '#'."""
    cleaned = tag.strip()
    if cleaned.startswith(TAG_PREFIX):
        cleaned = cleaned[len(TAG_PREFIX):].strip()
    return cleaned


class Tags:
    """An insertion-ordered set of cleaned tag names."""

    def __init__(self, tags: TagInput = None) -> None:
        self._tags: List[str] = []
        for tag in self._split(tags):
            self.add(tag)

    @staticmethod
    def _split(tags: TagInput) -> List[str]:
        if not tags:
            return []
        if isinstance(tags, (str, int, float)):
            return _TAG_SPLIT.split(str(tags))
        return [part for tag in tags for part in _TAG_SPLIT.split(str(tag))]

    def add(self, tag: str) -> None:
        """Add one tag; raises ValueError if it contains a separator or a quote."""
        cleaned = clean_tag(tag)
        if _TAG_SPLIT.search(cleaned):
            raise ValueError(f"Tag may not contain spaces, ',' or '\"': {tag!r}")
        if cleaned and cleaned not in self._tags:
            self._tags.append(cleaned)

    def remove(self, tag: str) -> None:
        cleaned = clean_tag(tag)
        self._tags = [t for t in self._tags if t != cleaned]

    def has(self, tag: str) -> bool:
        return clean_tag(tag) in self._tags

    def is_empty(self) -> bool:
        return not self._tags

    def to_list(self) -> List[str]:
        """Tags as a plain list (the front matter representation)."""
        return list(self._tags)

    def to_inline_string(self, separator: Optional[str] = None) -> str:
        """Tags as ``#a #b`` for task lines; empty string when there are none."""
        if not self._tags:
            return EMPTY
        sep = SPACE if separator is None else separator
        return sep.join(f"{TAG_PREFIX}{tag}" for tag in self._tags)

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and self.has(tag)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._tags))

    def __len__(self) -> int:
        return len(self._tags)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Tags):
            return self._tags == other._tags
        return NotImplemented

    def __repr__(self) -> str:
        return f"Tags({self._tags!r})"
