"""MCP tool registration for vault-notes."""

import json
import logging
from typing import Any, Optional

from mcp.server.fastmcp import FastMCP

from vault_notes.api.handlers import (
    handle_cache_status,
    handle_daily_note,
    handle_frontmatter_remove,
    handle_frontmatter_set,
    handle_note_create,
    handle_note_get,
    handle_note_list,
    handle_section_add,
    handle_section_append,
    handle_section_get,
    handle_section_remove,
    handle_task_add,
    handle_task_list,
)

log = logging.getLogger(__name__)


def _dump(result: Any) -> str:
    return json.dumps(result, indent=2, default=str)


def _error(exc: Exception) -> str:
    log.warning("Tool call rejected: %s", exc)
    return _dump({"error": str(exc)})


def register_tools(mcp: FastMCP, cache) -> None:
    """Register all MCP tools onto the FastMCP instance."""

    # ------------------------------------------------------------------
    # Note tools
    # ------------------------------------------------------------------

    @mcp.tool()
    def note_list(folder: Optional[str] = None) -> str:
        """
        List notes in the vault.

        Args:
            folder: Only list notes under this vault-relative folder

        Returns:
            JSON array of {"path": ...} objects, sorted by path
        """
        try:
            return _dump(handle_note_list(cache, folder=folder))
        except ValueError as e:
            return _error(e)

    @mcp.tool()
    def note_get(path: str) -> str:
        """
        Read a note's front matter and sections.

        Args:
            path: Vault-relative note path ("Projects/Roadmap" or "Projects/Roadmap.md")

        Returns:
            JSON with "frontmatter" and an ordered "sections" list (title, level, body)
        """
        try:
            return _dump(handle_note_get(cache, path=path))
        except ValueError as e:
            return _error(e)

    @mcp.tool()
    def note_create(path: str, frontmatter: Optional[dict] = None, body: str = "") -> str:
        """
        Create a new note.

        Args:
            path: Vault-relative note path; must not exist yet
            frontmatter: Initial front matter (strings, numbers, booleans, string lists)
            body: Initial text before any heading

        Returns:
            The created note as JSON, or an error
        """
        try:
            return _dump(handle_note_create(cache, path=path, frontmatter=frontmatter, body=body))
        except (ValueError, TypeError) as e:
            return _error(e)

    @mcp.tool()
    def daily_note(day: Optional[str] = None) -> str:
        """
        Open the daily note for a day.

        Args:
            day: "today" (default), "tomorrow", an ISO date, a weekday name, ...

        Returns:
            The daily note as JSON
        """
        try:
            return _dump(handle_daily_note(cache, day=day))
        except ValueError as e:
            return _error(e)

    # ------------------------------------------------------------------
    # Front matter tools
    # ------------------------------------------------------------------

    @mcp.tool()
    def frontmatter_set(path: str, key: str, value: Any) -> str:
        """
        Set a front matter property and save the note.

        The "tags" key accepts "a, b", "#a #b" or a list and is stored as a
        cleaned list of tag names.

        Args:
            path: Vault-relative note path
            key: Property name
            value: String, number, boolean or list of strings

        Returns:
            The note's front matter as JSON
        """
        try:
            return _dump(handle_frontmatter_set(cache, path=path, key=key, value=value))
        except (ValueError, TypeError) as e:
            return _error(e)

    @mcp.tool()
    def frontmatter_remove(path: str, key: str) -> str:
        """
        Remove a front matter property and save the note.

        Args:
            path: Vault-relative note path
            key: Property name
        """
        try:
            return _dump(handle_frontmatter_remove(cache, path=path, key=key))
        except ValueError as e:
            return _error(e)

    # ------------------------------------------------------------------
    # Section tools
    # ------------------------------------------------------------------

    @mcp.tool()
    def section_get(path: str, heading: str) -> str:
        """
        Read one section.

        Args:
            path: Vault-relative note path
            heading: Heading text (case-insensitive) or a heading path such as
                     "Projects > Work" where each part is nested under the previous

        Returns:
            JSON with title, level, body and the titles of its subsections
        """
        try:
            return _dump(handle_section_get(cache, path=path, heading=heading))
        except ValueError as e:
            return _error(e)

    @mcp.tool()
    def section_add(
        path: str,
        title: str,
        body: str = "",
        level: int = 1,
        insert_after: Optional[str] = None,
    ) -> str:
        """
        Add a section and save the note.

        Args:
            path: Vault-relative note path
            title: Heading text
            body: Section text
            level: Heading level 1-6
            insert_after: Exact title of the section to insert after (default: end of note)
        """
        try:
            return _dump(
                handle_section_add(
                    cache,
                    path=path,
                    title=title,
                    body=body,
                    level=level,
                    insert_after=insert_after,
                )
            )
        except ValueError as e:
            return _error(e)

    @mcp.tool()
    def section_append(path: str, heading: str, text: str, prepend: bool = False) -> str:
        """
        Add text to the end (or start) of a section and save the note.

        Args:
            path: Vault-relative note path
            heading: Heading text or heading path ("A > B")
            text: Text to add
            prepend: Add at the start of the section instead of the end
        """
        try:
            return _dump(
                handle_section_append(cache, path=path, heading=heading, text=text, prepend=prepend)
            )
        except ValueError as e:
            return _error(e)

    @mcp.tool()
    def section_remove(path: str, heading: str) -> str:
        """
        Remove a section (its heading and body, not its subsections) and save.

        Args:
            path: Vault-relative note path
            heading: Heading text or heading path ("A > B")
        """
        try:
            return _dump(handle_section_remove(cache, path=path, heading=heading))
        except ValueError as e:
            return _error(e)

    # ------------------------------------------------------------------
    # Task tools
    # ------------------------------------------------------------------

    @mcp.tool()
    def task_add(
        path: str,
        heading: str,
        description: str,
        due: Optional[str] = None,
        scheduled: Optional[str] = None,
        start: Optional[str] = None,
        priority: Optional[str] = None,
        tags: Optional[str] = None,
    ) -> str:
        """
        Append a checkbox task to a section (created if missing) and save.

        Args:
            path: Vault-relative note path
            heading: Heading text or heading path
            description: Task text
            due: Due date (ISO date or "tomorrow", "Friday", "in 3 days", ...)
            scheduled: Scheduled date
            start: Start date
            priority: highest, high, medium, low or lowest
            tags: "a, b" or "#a #b"
        """
        try:
            return _dump(
                handle_task_add(
                    cache,
                    path=path,
                    heading=heading,
                    description=description,
                    due=due,
                    scheduled=scheduled,
                    start=start,
                    priority=priority,
                    tags=tags,
                )
            )
        except ValueError as e:
            return _error(e)

    @mcp.tool()
    def task_list(path: str, heading: Optional[str] = None) -> str:
        """
        List checkbox tasks in a note, optionally in one section only.

        Args:
            path: Vault-relative note path
            heading: Heading text or heading path
        """
        try:
            return _dump(handle_task_list(cache, path=path, heading=heading))
        except ValueError as e:
            return _error(e)

    @mcp.tool()
    def cache_status() -> str:
        """
        Show note cache statistics.

        Returns:
            JSON with vault root, open and dirty note counts, exclusions
        """
        return _dump(handle_cache_status(cache))
