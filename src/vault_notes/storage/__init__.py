from .vault_file import NoteFile, VaultFile

__all__ = ["NoteFile", "VaultFile"]
