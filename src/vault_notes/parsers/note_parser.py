"""
Parser and serializer for note text.

Main API:
    parse_content(text)  -> (FrontMatter, [Section, ...])
    serialize(frontmatter, sections)  -> text

Parsing is a single top-to-bottom pass:
- A front matter block is recognised only when the very first line is
  ``---`` and a later line is ``---`` as well; otherwise the whole text is
  body.
- ``#`` to ``######`` followed by whitespace and a title starts a section.
- Text before the first heading becomes an untitled level-0 section.
- Blank lines at the start of a section body are dropped, and a section
  that has neither a title nor any text is not kept.

serialize(parse_content(text)) is a fixed point after one pass: serializing,
re-parsing and serializing again gives the same text.
"""

import re
from typing import Callable, List, Optional, Tuple

from vault_notes.constants import (
    EMPTY,
    FRONTMATTER_DELIMITER,
    NEWLINE,
    ROOT_LEVEL,
)
from vault_notes.models.frontmatter import FrontMatter
from vault_notes.models.section import Section

_HEADING = re.compile(r"^(#{1,6})\s+(\S.*)$")
_BOM = "\ufeff"


# ---------------------------------------------------------------------------
# Low-level parsers
# ---------------------------------------------------------------------------

def parse_heading(line: str) -> Optional[Tuple[int, str]]:
    """Return (level, title) for a heading line, or None."""
    m = _HEADING.match(line)
    if not m:
        return None
    return len(m.group(1)), m.group(2)


def split_frontmatter(lines: List[str]) -> Tuple[str, int]:
    """
    Locate the front matter block.

    Returns:
        (frontmatter_text, body_start_index)
        frontmatter_text excludes the delimiter lines. When the first line is
        not a delimiter, or the block is never closed, returns ("", 0).
    """
    if not lines or lines[0] != FRONTMATTER_DELIMITER:
        return EMPTY, 0

    for i in range(1, len(lines)):
        if lines[i] == FRONTMATTER_DELIMITER:
            return NEWLINE.join(lines[1:i]), i + 1

    return EMPTY, 0


def _keep(section: Section) -> bool:
    return bool(section.title) or bool(section.body.strip())


# ---------------------------------------------------------------------------
# Main parse / serialize API
# ---------------------------------------------------------------------------

def parse_content(
    content: str,
    listener: Optional[Callable[[], None]] = None,
) -> Tuple[FrontMatter, List[Section]]:
    """
    Parse note text into front matter and an ordered list of sections.

    Args:
        content: Full note text
        listener: Change callback handed to the front matter and every section

    Returns:
        (FrontMatter, sections) with sections in document order
    """
    if not content:
        return FrontMatter(on_change=listener), []

    lines = content.lstrip(_BOM).replace("\r\n", NEWLINE).split(NEWLINE)
    frontmatter_text, body_start = split_frontmatter(lines)
    frontmatter = FrontMatter(frontmatter_text, on_change=listener)

    sections: List[Section] = []
    current = Section(title=EMPTY, level=ROOT_LEVEL, listener=listener)

    for line in lines[body_start:]:
        heading = parse_heading(line)
        if heading:
            if _keep(current):
                sections.append(current)
            level, title = heading
            current = Section(title=title, level=level, listener=listener)
            continue

        # Drop blank lines until the section has real content
        if current.body or line.strip():
            current.body += (NEWLINE if current.body else EMPTY) + line

    if _keep(current):
        sections.append(current)

    return frontmatter, sections


def serialize(frontmatter: FrontMatter, sections: List[Section]) -> str:
    """
    Render front matter and sections back to note text.

    A blank line is placed between two parts whenever the earlier one does
    not already end with a line break.
    """
    parts: List[str] = []

    if frontmatter.exists():
        parts.append(frontmatter.to_string())

    for section in sections:
        if parts and not parts[-1].endswith(NEWLINE):
            parts.append(EMPTY)
        parts.append(section.render())

    return NEWLINE.join(parts)
