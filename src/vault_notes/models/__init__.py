from .tags import Tags, clean_tag
from .frontmatter import FrontMatter, FrontMatterValue, parse_frontmatter
from .section import Section, Sections
from .task import NoteTask

__all__ = [
    "Tags",
    "clean_tag",
    "FrontMatter",
    "FrontMatterValue",
    "parse_frontmatter",
    "Section",
    "Sections",
    "NoteTask",
]
