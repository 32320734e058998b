"""Merge and schema suggestion endpoints."""

from __future__ import annotations

from urllib.parse import quote

from fastapi import APIRouter, Request, Response

from sheetmerge.merge.output import XLSX_CONTENT_TYPE
from sheetmerge.models.merge import MergeConfiguration
from sheetmerge.models.schema_mapping import HeaderSuggestion

router = APIRouter(tags=["merge"])


@router.post("/merge")
def merge_files(request: Request, config: MergeConfiguration) -> Response:
    """Merge the visible, decoded files and return the workbook as a download."""
    data = request.app.state.session.merge(config)
    file_name = config.resolved_output_file_name()
    return Response(
        content=data,
        media_type=XLSX_CONTENT_TYPE,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(file_name)}"},
    )


@router.post("/schema/suggest")
def suggest_schema(request: Request, config: MergeConfiguration) -> HeaderSuggestion:
    return request.app.state.session.suggest_headers(config)
