"""
vault-notes server entry point.

Startup sequence:
1. Read settings from the environment
2. Initialize NoteCache for the vault root
3. Start REST API server in background thread (if API_ENABLED)
4. Register all MCP tools
5. Run MCP server (stdio transport), saving dirty notes on exit
"""

import logging
import sys
import threading

from mcp.server.fastmcp import FastMCP

from vault_notes.api.tools import register_tools
from vault_notes.cache.note_cache import NoteCache
from vault_notes.config import Settings

log = logging.getLogger(__name__)


def _start_api_server(cache: NoteCache, port: int) -> None:
    """Run the FastAPI/uvicorn server in a daemon thread."""
    import uvicorn

    from vault_notes.api.app import create_app

    app = create_app(cache)
    log.info("Starting REST API on port %d", port)
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="warning")


def main() -> None:
    settings = Settings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if settings.vault_root is None:
        log.error("VAULT_ROOT environment variable is not set")
        sys.exit(1)

    if not settings.vault_root.is_dir():
        log.error("VAULT_ROOT does not exist or is not a directory: %s", settings.vault_root)
        sys.exit(1)

    log.info("Vault root: %s", settings.vault_root)
    log.info("Excluded dirs: %s", settings.exclude_dirs)

    cache = NoteCache()
    cache.initialize(settings.vault_root, settings.exclude_dirs, settings.daily_folder)

    if settings.api_enabled:
        api_thread = threading.Thread(
            target=_start_api_server, args=(cache, settings.api_port), daemon=True
        )
        api_thread.start()

    mcp = FastMCP("vault-notes")
    register_tools(mcp, cache)

    log.info("Starting vault-notes server")
    try:
        mcp.run(transport="stdio")
    finally:
        cache.save_all()


if __name__ == "__main__":
    main()
