"""REST API routes for vault-notes."""

from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

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

FrontMatterInput = Union[bool, int, float, str, List[str]]


# ---------------------------------------------------------------------------
# Request body models
# ---------------------------------------------------------------------------


class NoteCreateBody(BaseModel):
    path: str
    frontmatter: Optional[Dict[str, FrontMatterInput]] = None
    body: str = ""


class FrontMatterSetBody(BaseModel):
    value: FrontMatterInput


class SectionAddBody(BaseModel):
    title: str
    body: str = ""
    level: int = 1
    insert_after: Optional[str] = None


class SectionAppendBody(BaseModel):
    heading: str
    text: str
    prepend: bool = False


class TaskAddBody(BaseModel):
    heading: str
    description: str
    due: Optional[str] = None
    scheduled: Optional[str] = None
    start: Optional[str] = None
    priority: Optional[str] = None
    tags: Optional[str] = None


def _unwrap(result: Any, status_code: int = 404) -> Any:
    if isinstance(result, dict) and "error" in result:
        raise HTTPException(status_code=status_code, detail=result["error"])
    return result


def register_routes(app_router: APIRouter, cache) -> None:
    """Attach note REST routes that use the shared cache."""

    @app_router.get("/notes")
    def list_notes(folder: Optional[str] = Query(None)):
        try:
            return handle_note_list(cache, folder=folder)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @app_router.post("/notes", status_code=201)
    def create_note(body: NoteCreateBody):
        try:
            return handle_note_create(cache, **body.model_dump())
        except (ValueError, TypeError) as e:
            raise HTTPException(status_code=400, detail=str(e))

    @app_router.get("/notes/{path:path}/sections")
    def get_section(path: str, heading: str = Query(...)):
        try:
            result = handle_section_get(cache, path=path, heading=heading)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _unwrap(result)

    @app_router.post("/notes/{path:path}/sections", status_code=201)
    def add_section(path: str, body: SectionAddBody):
        try:
            return handle_section_add(cache, path=path, **body.model_dump())
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @app_router.patch("/notes/{path:path}/sections")
    def append_section(path: str, body: SectionAppendBody):
        try:
            result = handle_section_append(cache, path=path, **body.model_dump())
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _unwrap(result)

    @app_router.delete("/notes/{path:path}/sections")
    def remove_section(path: str, heading: str = Query(...)):
        try:
            result = handle_section_remove(cache, path=path, heading=heading)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _unwrap(result)

    @app_router.put("/notes/{path:path}/frontmatter/{key}")
    def set_frontmatter(path: str, key: str, body: FrontMatterSetBody):
        try:
            return handle_frontmatter_set(cache, path=path, key=key, value=body.value)
        except (ValueError, TypeError) as e:
            raise HTTPException(status_code=400, detail=str(e))

    @app_router.delete("/notes/{path:path}/frontmatter/{key}")
    def remove_frontmatter(path: str, key: str):
        try:
            result = handle_frontmatter_remove(cache, path=path, key=key)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _unwrap(result)

    @app_router.get("/notes/{path:path}/tasks")
    def list_tasks(path: str, heading: Optional[str] = Query(None)):
        try:
            result = handle_task_list(cache, path=path, heading=heading)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _unwrap(result)

    @app_router.post("/notes/{path:path}/tasks", status_code=201)
    def add_task(path: str, body: TaskAddBody):
        try:
            return handle_task_add(cache, path=path, **body.model_dump())
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @app_router.get("/notes/{path:path}")
    def get_note(path: str):
        try:
            result = handle_note_get(cache, path=path)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _unwrap(result)

    @app_router.get("/daily")
    def get_daily(day: Optional[str] = Query(None)):
        try:
            return handle_daily_note(cache, day=day)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @app_router.get("/cache/status")
    def get_cache_status():
        return handle_cache_status(cache)
