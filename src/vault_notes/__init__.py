"""
vault-notes: structured markdown notes for a personal vault.

Main API:
    from vault_notes import Note

    note = Note.open(vault_root, "Inbox.md")
    section = note.sections.find_by_path("Projects > Today")
    section.append("- [ ] Call the bank")
    note.save()
"""

from vault_notes.integrations import Calendar, CalendarEvent, Location
from vault_notes.models import FrontMatter, NoteTask, Section, Sections, Tags
from vault_notes.note import Note
from vault_notes.storage import NoteFile, VaultFile

__version__ = "0.1.0"

__all__ = [
    "Calendar",
    "CalendarEvent",
    "FrontMatter",
    "Location",
    "Note",
    "NoteFile",
    "NoteTask",
    "Section",
    "Sections",
    "Tags",
    "VaultFile",
]
