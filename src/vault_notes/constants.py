"""
Shared markup constants for vault notes.

Every component that reads or writes note text takes its delimiters and
markers from here so the on-disk format is defined in one place.
"""

from typing import Dict

NEWLINE = "\n"
EMPTY = ""
SPACE = " "

# Front matter block
FRONTMATTER_DELIMITER = "---"
FRONTMATTER_KEY_SEPARATOR = ":"
LIST_OPEN = "["
LIST_CLOSE = "]"
LIST_SEPARATOR = ","
DOUBLE_QUOTE = '"'
SINGLE_QUOTE = "'"
TRUE_LITERAL = "true"
FALSE_LITERAL = "false"
TAGS_KEY = "tags"

# Headings
HEADING_MARKER = "#"
MAX_HEADING_LEVEL = 6
ROOT_LEVEL = 0
PATH_DELIMITER = " > "

# Tags
TAG_PREFIX = "#"

# Tasks (Obsidian Tasks plugin compatible)
CHECKBOX = "- [ ]"
CHECKBOX_COMPLETED = "- [x]"

DATE_TO_EMOJI: Dict[str, str] = {
    "due": "📅",
    "scheduled": "⏳",
    "start": "🛫",
}

PRIORITY_TO_EMOJI: Dict[str, str] = {
    "highest": "🔺",
    "high": "⏫",
    "medium": "🔼",
    "low": "🔽",
    "lowest": "⏬",
}

EMOJI_TO_DATE: Dict[str, str] = {v: k for k, v in DATE_TO_EMOJI.items()}
EMOJI_TO_PRIORITY: Dict[str, str] = {v: k for k, v in PRIORITY_TO_EMOJI.items()}

MARKDOWN_SUFFIX = ".md"
