"""File selection endpoints: upload, list, remove, clear."""

from __future__ import annotations

from fastapi import APIRouter, File, Query, Request, UploadFile
from fastapi.concurrency import run_in_threadpool

from sheetmerge.api.schemas import EntrySummary
from sheetmerge.models.file_entry import RawFile

router = APIRouter(tags=["files"])


@router.post("", status_code=201)
async def upload_files(
    request: Request,
    uploads: list[UploadFile] = File(...),
    sheet_index: int = Query(default=0, ge=0),
) -> list[EntrySummary]:
    """Register and decode uploaded files.

    The upload filename may carry folder segments (``reports/jan.xlsx``);
    it becomes the entry path and its last segment the entry name.
    """
    session = request.app.state.session
    raw_files = []
    for upload in uploads:
        path = (upload.filename or "").replace("\\", "/")
        content = await upload.read()
        raw_files.append(RawFile(
            content=content,
            name=path.rsplit("/", 1)[-1],
            path=path,
            size_bytes=len(content),
        ))
    entries = await run_in_threadpool(session.add_files, raw_files, sheet_index)
    return [EntrySummary.from_entry(entry) for entry in entries]


@router.get("")
def list_files(request: Request, keyword: str = "") -> dict:
    """Visible entries for ``keyword`` plus the unfiltered total."""
    session = request.app.state.session
    visible = session.visible_entries(keyword)
    return {
        "total": len(session.entries()),
        "visible": len(visible),
        "files": [EntrySummary.from_entry(entry).model_dump(mode="json") for entry in visible],
    }


@router.delete("/{entry_id}")
def remove_file(request: Request, entry_id: str) -> EntrySummary:
    return EntrySummary.from_entry(request.app.state.session.remove(entry_id))


@router.delete("", status_code=204)
def clear_files(request: Request) -> None:
    request.app.state.session.clear()
