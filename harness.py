"""
Interactive harness for testing vault-notes without MCP integration.

Usage:
    python harness.py <VAULT_ROOT> [--exclude .git,.obsidian]

Drops you into an interactive REPL where you can call cache methods directly.
Also runs a quick smoke test on startup to verify note parsing works.
"""

import json
import sys
from pathlib import Path

# Add src/ to path so imports work
sys.path.insert(0, str(Path(__file__).parent / "src"))

from vault_notes.cache.note_cache import NoteCache
from vault_notes.config import DEFAULT_EXCLUDE_DIRS, parse_exclude_dirs
from vault_notes.parsers.note_parser import parse_content, serialize


def smoke_test(cache: NoteCache) -> None:
    """Quick automated checks after initialization."""
    notes = cache.list_notes()
    print("\n=== Smoke Test ===")
    print(f"  Vault root:     {cache.vault_root}")
    print(f"  Notes found:    {len(notes)}")

    # Spot-check: parse the first few notes and re-serialize them
    unstable = []
    for rel in notes[:20]:
        note = cache.open(rel)
        once = note.to_string()
        print(f"    {rel}: {len(note.frontmatter)} keys, {len(note.sections)} sections")
        if serialize(*parse_content(once)) != once:
            unstable.append(rel)
    if len(notes) > 20:
        print(f"    ... and {len(notes) - 20} more")

    print(f"\n  Not stable after one save: {len(unstable)}")
    for rel in unstable:
        print(f"    {rel}")

    print("\n=== Smoke Test Complete ===\n")


def _print_note(cache: NoteCache, rel: str) -> None:
    note = cache.open(rel)
    if not note.file.exists():
        print(f"  Note '{rel}' not found")
        return
    print(f"  Path:        {note.path}")
    print(f"  Front matter:{json.dumps(note.frontmatter.to_dict(), default=str)}")
    for h in note.headings():
        print(f"  {'  ' * (h['level'] - 1)}{'#' * h['level']} {h['text']}")


def repl(cache: NoteCache) -> None:
    """Simple REPL for interactive exploration."""
    print("Interactive mode. Type 'help' for commands, 'quit' to exit.\n")

    commands = {
        "help":     "Show this help",
        "status":   "Show cache status",
        "ls":       "List notes. Usage: ls [folder]",
        "note":     "Show a note outline. Usage: note <path>",
        "section":  "Print a section. Usage: section <path> <heading or A > B>",
        "tasks":    "List tasks in a note. Usage: tasks <path>",
        "raw":      "Print the text save() would write. Usage: raw <path>",
        "daily":    "Show today's daily note",
        "quit":     "Exit",
    }

    while True:
        try:
            line = input("vault-notes> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not line:
            continue

        parts = line.split()
        cmd = parts[0].lower()

        try:
            if cmd == "quit" or cmd == "exit":
                break

            elif cmd == "help":
                for k, v in commands.items():
                    print(f"  {k:12s} {v}")

            elif cmd == "status":
                print(json.dumps(cache.status(), indent=2, default=str))

            elif cmd == "ls":
                folder = parts[1] if len(parts) > 1 else None
                for rel in cache.list_notes(folder):
                    print(f"  {rel}")

            elif cmd == "note":
                if len(parts) < 2:
                    print("Usage: note <path>")
                    continue
                _print_note(cache, parts[1])

            elif cmd == "section":
                if len(parts) < 3:
                    print("Usage: section <path> <heading>")
                    continue
                note = cache.open(parts[1])
                heading = " ".join(parts[2:])
                if " > " in heading:
                    section = note.sections.find_by_path(heading)
                else:
                    section = note.sections.find(heading)
                if section:
                    print(section.render())
                else:
                    print(f"  Section '{heading}' not found")

            elif cmd == "tasks":
                if len(parts) < 2:
                    print("Usage: tasks <path>")
                    continue
                note = cache.open(parts[1])
                for section in note.sections:
                    for task in section.tasks():
                        print(f"  [{section.title or '-'}] {task.to_markdown()}")

            elif cmd == "raw":
                if len(parts) < 2:
                    print("Usage: raw <path>")
                    continue
                print(cache.open(parts[1]).to_string())

            elif cmd == "daily":
                note = cache.daily_note()
                _print_note(cache, note.path.relative_to(cache.vault_root).as_posix())

            else:
                print(f"Unknown command: {cmd}. Type 'help' for available commands.")

        except ValueError as e:
            print(f"  Error: {e}")


def main():
    if len(sys.argv) < 2:
        print("Usage: python harness.py <VAULT_ROOT> [--exclude .git,.obsidian]")
        sys.exit(1)

    vault_root = Path(sys.argv[1]).resolve()
    if not vault_root.is_dir():
        print(f"Error: {vault_root} is not a directory")
        sys.exit(1)

    exclude_dirs = parse_exclude_dirs(DEFAULT_EXCLUDE_DIRS)
    args = sys.argv[2:]
    if "--exclude" in args:
        i = args.index("--exclude")
        if i + 1 < len(args):
            exclude_dirs = parse_exclude_dirs(args[i + 1])

    print(f"Initializing cache from: {vault_root}")
    print(f"Exclude dirs: {exclude_dirs}")

    cache = NoteCache()
    cache.initialize(vault_root, exclude_dirs)

    smoke_test(cache)
    repl(cache)

    print("Done.")


if __name__ == "__main__":
    main()
