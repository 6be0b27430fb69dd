from .note_parser import parse_content, serialize, split_frontmatter, parse_heading
from .task_parser import parse_task_line, parse_tasks

__all__ = [
    "parse_content",
    "serialize",
    "split_frontmatter",
    "parse_heading",
    "parse_task_line",
    "parse_tasks",
]
