"""
Flat front matter block.

Only the subset of YAML that notes actually use is supported: one
``key: value`` pair per line, where the value is a string, a number, a
boolean or a bracketed list of strings. Anything else on a line is kept as
a plain string, and lines that are not ``key: value`` are skipped.

The value type is the closed union ``FrontMatterValue``. ``render_value``
dispatches on it exhaustively, so an unsupported value is rejected when it is
set rather than when the note is written.
"""

from __future__ import annotations

import math
import re
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from vault_notes.constants import (
    DOUBLE_QUOTE,
    EMPTY,
    FALSE_LITERAL,
    FRONTMATTER_DELIMITER,
    FRONTMATTER_KEY_SEPARATOR,
    LIST_CLOSE,
    LIST_OPEN,
    LIST_SEPARATOR,
    NEWLINE,
    SINGLE_QUOTE,
    TAGS_KEY,
    TRUE_LITERAL,
)
from vault_notes.models.tags import Tags

FrontMatterValue = Union[str, int, float, bool, List[str]]

_INT_PATTERN = re.compile(r"^[+-]?\d+$")
_DECIMAL_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_LINE_BREAK = re.compile(r"[\r\n]")


# ---------------------------------------------------------------------------
# Value coercion
# ---------------------------------------------------------------------------

def _is_quoted(text: str) -> bool:
    return len(text) >= 2 and text[0] == text[-1] and text[0] in (DOUBLE_QUOTE, SINGLE_QUOTE)


def _unquote(text: str) -> str:
    """Remove one layer of matching single or double quotes."""
    return text[1:-1] if _is_quoted(text) else text


def coerce_value(raw: str) -> FrontMatterValue:
    """
    Convert the raw text after ``key:`` into a typed value.

    Precedence: bracketed list, quoted string, boolean literal, decimal
    number, plain string.
    """
    value = raw.strip()

    if value.startswith(LIST_OPEN) and value.endswith(LIST_CLOSE):
        inner = value[1:-1]
        if not inner.strip():
            return []
        return [_unquote(item.strip()) for item in inner.split(LIST_SEPARATOR)]

    if _is_quoted(value):
        return _unquote(value)

    if value == TRUE_LITERAL:
        return True
    if value == FALSE_LITERAL:
        return False

    if _INT_PATTERN.match(value):
        return int(value)
    if _DECIMAL_PATTERN.match(value):
        return float(value)

    return value


def render_value(value: FrontMatterValue) -> str:
    """Render a value the way it appears after ``key: `` on disk."""
    if isinstance(value, bool):
        return TRUE_LITERAL if value else FALSE_LITERAL
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return f'{DOUBLE_QUOTE}{value}{DOUBLE_QUOTE}'
    if isinstance(value, list):
        items = ", ".join(f'{DOUBLE_QUOTE}{item}{DOUBLE_QUOTE}' for item in value)
        return f"{LIST_OPEN}{items}{LIST_CLOSE}"
    raise TypeError(f"Unsupported front matter value: {value!r}")


def _validate_key(key: object) -> str:
    if not isinstance(key, str) or not key or key != key.strip():
        raise ValueError(f"Invalid front matter key: {key!r}")
    if FRONTMATTER_KEY_SEPARATOR in key or _LINE_BREAK.search(key):
        raise ValueError(f"Front matter key may not contain ':' or line breaks: {key!r}")
    return key


def _validate_value(key: str, value: object) -> FrontMatterValue:
    """
    Check that a value renders to one line that parses back to itself.

    Raises TypeError for values outside ``FrontMatterValue`` and ValueError
    for text that would break the block: line breaks anywhere, and ',' or '"'
    inside list items.
    """
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"Front matter number '{key}' must be finite")
    if isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        if _LINE_BREAK.search(value):
            raise ValueError(f"Front matter value '{key}' may not contain line breaks")
        return value
    if isinstance(value, (list, tuple)):
        if not all(isinstance(item, str) for item in value):
            raise TypeError(f"Front matter list '{key}' must contain only strings")
        for item in value:
            if _LINE_BREAK.search(item) or LIST_SEPARATOR in item or DOUBLE_QUOTE in item:
                raise ValueError(
                    f"Front matter list '{key}' has an item with ',', '\"' or a line break: {item!r}"
                )
        return list(value)
    raise TypeError(
        f"Unsupported front matter value for '{key}': {type(value).__name__}"
    )


def _normalize(key: object, value: object) -> FrontMatterValue:
    key = _validate_key(key)
    if key == TAGS_KEY:
        tags = value if isinstance(value, Tags) else Tags(value)  # type: ignore[arg-type]
        return tags.to_list()
    return _validate_value(key, value)


def parse_frontmatter(text: str) -> Dict[str, FrontMatterValue]:
    """
    Parse the lines of a front matter block (with or without delimiters).

    Returns an empty dict for blank input. Lines without a colon are skipped;
    later duplicates of a key overwrite earlier ones.
    """
    data: Dict[str, FrontMatterValue] = {}
    if not text.strip():
        return data

    for line in text.split(NEWLINE):
        stripped = line.strip()
        if not stripped or stripped == FRONTMATTER_DELIMITER:
            continue

        key, sep, raw = line.partition(FRONTMATTER_KEY_SEPARATOR)
        key = key.strip()
        if not sep or not key:
            continue

        value = coerce_value(raw)
        if key == TAGS_KEY:
            value = Tags(value).to_list()
        data[key] = value

    return data


# ---------------------------------------------------------------------------
# FrontMatter
# ---------------------------------------------------------------------------

class FrontMatter:
    """
    Ordered key/value metadata at the top of a note.

    ``on_change`` is called after every mutation; the owning note uses it to
    track unsaved changes.
    """

    def __init__(
        self,
        text: str = EMPTY,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self.raw = text
        self._data: Dict[str, FrontMatterValue] = parse_frontmatter(text)
        self._on_change = on_change

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def get(self, key: str, default: Optional[FrontMatterValue] = None) -> Optional[FrontMatterValue]:
        return self._data.get(key, default)

    def set(self, key: str, value: object) -> None:
        """Set a value. ``tags`` is normalized into a cleaned list of tag names."""
        self._data[key] = _normalize(key, value)
        self._notify()

    def update(self, values: Mapping[str, object]) -> None:
        """Set several values; all are checked before any is stored."""
        checked = [(key, _normalize(key, value)) for key, value in values.items()]
        if not checked:
            return
        for key, value in checked:
            self._data[key] = value
        self._notify()

    def remove(self, key: str) -> bool:
        """Delete a key. Returns False when it was not present."""
        if key not in self._data:
            return False
        del self._data[key]
        self._notify()
        return True

    def exists(self) -> bool:
        """True when there is at least one key to write."""
        return bool(self._data)

    def items(self) -> List[Tuple[str, FrontMatterValue]]:
        return list(self._data.items())

    def to_dict(self) -> Dict[str, FrontMatterValue]:
        """A copy of the data; lists are copied too."""
        return {k: list(v) if isinstance(v, list) else v for k, v in self._data.items()}

    def to_string(self) -> str:
        """Serialize to a delimited block, or '' when there is nothing to write."""
        if not self._data:
            return EMPTY

        lines = [FRONTMATTER_DELIMITER]
        for key, value in self._data.items():
            lines.append(f"{key}{FRONTMATTER_KEY_SEPARATOR} {render_value(value)}")
        lines.append(FRONTMATTER_DELIMITER)
        return NEWLINE.join(lines)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __getitem__(self, key: str) -> FrontMatterValue:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._data))

    def __len__(self) -> int:
        return len(self._data)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"FrontMatter({self._data!r})"
