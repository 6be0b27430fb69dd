"""
Note handler functions shared by MCP tools and REST API.

Handlers return plain dicts. A missing note, section or key is reported as
``{"error": ...}``; invalid arguments raise ValueError / TypeError and the
caller decides how to surface them. Mutating handlers save the note before
returning.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from vault_notes.constants import PATH_DELIMITER
from vault_notes.models.section import Section
from vault_notes.models.task import NoteTask
from vault_notes.note import Note
from vault_notes.utils.dates import resolve_date

log = logging.getLogger(__name__)


def _section_to_dict(section: Section, all_sections: Optional[List[Section]] = None) -> dict:
    d = {
        "title": section.title,
        "level": section.level,
        "body": section.body,
    }
    if all_sections is not None:
        d["subsections"] = [s.title for s in section.subsections(all_sections)]
    return d


def _note_to_dict(note: Note, path: str) -> dict:
    return {
        "path": path,
        "frontmatter": note.frontmatter.to_dict(),
        "sections": [_section_to_dict(s) for s in note.sections],
        "dirty": note.is_dirty,
    }


def _find_section(note: Note, heading: str) -> Optional[Section]:
    """Look up by heading path ("A > B") or by a single heading."""
    if PATH_DELIMITER in heading:
        return note.sections.find_by_path(heading)
    return note.sections.find(heading)


def _not_found(path: str) -> dict:
    return {"error": f"Note '{path}' not found"}


@contextmanager
def _editing(cache, path: str) -> Iterator[Note]:
    """
    Open a note for a mutating handler.

    If the edit fails on a note that had no file and no unsaved changes, the
    cache entry is dropped so the partial note is never written.
    """
    note = cache.open(path)
    is_new = not note.file.exists() and not note.is_dirty
    try:
        yield note
    except Exception:
        if is_new:
            cache.discard(path)
        raise


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------

def handle_note_list(cache, *, folder: Optional[str] = None) -> List[dict]:
    return [{"path": p} for p in cache.list_notes(folder)]


def handle_note_get(cache, *, path: str) -> dict:
    with cache.lock:
        note = cache.find(path)
        if note is None:
            return _not_found(path)
        return _note_to_dict(note, path)


def handle_note_create(
    cache,
    *,
    path: str,
    frontmatter: Optional[Dict[str, Any]] = None,
    body: str = "",
) -> dict:
    with cache.lock:
        if cache.find(path) is not None:
            raise ValueError(f"Note '{path}' already exists")
        with _editing(cache, path) as note:
            if frontmatter:
                note.set_frontmatter(frontmatter)
            if body:
                note.sections.add("", body=body, level=0)
            cache.save(path)
        log.info("Created note %s", path)
        return _note_to_dict(note, path)


def handle_daily_note(cache, *, day: Optional[str] = None) -> dict:
    when = resolve_date(day) if day else None
    if day and when is None:
        raise ValueError(f"Unrecognised date: '{day}'")
    with cache.lock:
        note = cache.daily_note(when)
        rel = note.path.relative_to(cache.vault_root).as_posix()
        return _note_to_dict(note, rel)


# ---------------------------------------------------------------------------
# Front matter
# ---------------------------------------------------------------------------

def handle_frontmatter_set(cache, *, path: str, key: str, value: Any) -> dict:
    with cache.lock:
        with _editing(cache, path) as note:
            note.set_frontmatter_property(key, value)
            cache.save(path)
        return {"path": path, "frontmatter": note.frontmatter.to_dict()}


def handle_frontmatter_remove(cache, *, path: str, key: str) -> dict:
    with cache.lock:
        note = cache.find(path)
        if note is None:
            return _not_found(path)
        if not note.remove_frontmatter_property(key):
            return {"error": f"Key '{key}' not found in '{path}'"}
        cache.save(path)
        return {"path": path, "frontmatter": note.frontmatter.to_dict()}


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

def handle_section_get(cache, *, path: str, heading: str) -> dict:
    with cache.lock:
        note = cache.find(path)
        if note is None:
            return _not_found(path)
        section = _find_section(note, heading)
        if section is None:
            return {"error": f"Section '{heading}' not found in '{path}'"}
        return _section_to_dict(section, note.sections.to_list())


def handle_section_add(
    cache,
    *,
    path: str,
    title: str,
    body: str = "",
    level: int = 1,
    insert_after: Optional[str] = None,
) -> dict:
    with cache.lock:
        with _editing(cache, path) as note:
            section = note.sections.add(title, body=body, level=level, insert_after=insert_after)
            cache.save(path)
        return _section_to_dict(section)


def handle_section_append(
    cache,
    *,
    path: str,
    heading: str,
    text: str,
    prepend: bool = False,
) -> dict:
    with cache.lock:
        note = cache.find(path)
        if note is None:
            return _not_found(path)
        section = _find_section(note, heading)
        if section is None:
            return {"error": f"Section '{heading}' not found in '{path}'"}
        if prepend:
            section.prepend(text)
        else:
            section.append(text)
        cache.save(path)
        return _section_to_dict(section)


def handle_section_remove(cache, *, path: str, heading: str) -> dict:
    with cache.lock:
        note = cache.find(path)
        if note is None:
            return _not_found(path)
        section = _find_section(note, heading)
        if section is None or not note.sections.remove(section):
            return {"error": f"Section '{heading}' not found in '{path}'"}
        cache.save(path)
        return {"path": path, "removed": heading}


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------

def handle_task_add(
    cache,
    *,
    path: str,
    heading: str,
    description: str,
    due: Optional[str] = None,
    scheduled: Optional[str] = None,
    start: Optional[str] = None,
    priority: Optional[str] = None,
    tags: Optional[str] = None,
    level: int = 2,
) -> dict:
    """Append a task line to a section, creating the section if it is missing."""
    dates = {}
    for name, value in (("due_date", due), ("scheduled_date", scheduled), ("start_date", start)):
        if value:
            resolved = resolve_date(value)
            if resolved is None:
                raise ValueError(f"Unrecognised date: '{value}'")
            dates[name] = resolved

    task = NoteTask(description=description, priority=priority or None, tags=tags, **dates)

    with cache.lock:
        with _editing(cache, path) as note:
            section = _find_section(note, heading)
            if section is None:
                section = note.sections.add(heading, level=level)
            section.add_task(task)
            cache.save(path)
        return {
            "path": path,
            "section": section.title,
            "task": task.to_markdown(),
            "tasks": [t.to_markdown() for t in section.tasks()],
        }


def handle_task_list(cache, *, path: str, heading: Optional[str] = None) -> dict:
    with cache.lock:
        note = cache.find(path)
        if note is None:
            return _not_found(path)
        if heading:
            section = _find_section(note, heading)
            if section is None:
                return {"error": f"Section '{heading}' not found in '{path}'"}
            sections = [section]
        else:
            sections = note.sections.to_list()
        return {
            "path": path,
            "tasks": [
                {
                    "section": s.title,
                    "description": t.description,
                    "completed": t.completed,
                    "due": t.due_date.isoformat() if t.due_date else None,
                    "priority": t.priority,
                    "tags": t.tags.to_list(),
                }
                for s in sections
                for t in s.tasks()
            ],
        }


def handle_cache_status(cache) -> dict:
    return cache.status()
