from .note_cache import NoteCache

__all__ = ["NoteCache"]
