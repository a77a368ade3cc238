"""
PDF export endpoints.

Each POST renders the document and returns it as an attachment; with
``?save=true`` the file is also written to the export directory.
"""

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response
from pydantic import Field

from app.models import (
    ExportModel,
    InvoiceExportInput,
    ProposalInput,
    RenderedDocument,
    TimesheetExportInput,
)
from app.services import (
    export_all_timesheets,
    export_invoice_pdf,
    export_timesheet_pdf,
    generate_offer_proposal_pdf,
    get_export_storage,
)

router = APIRouter()


class TimesheetBatchRequest(ExportModel):
    projects: list[TimesheetExportInput] = Field(default_factory=list)
    is_paid: bool = False


def _pdf_response(document: RenderedDocument) -> Response:
    return Response(
        content=document.content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{document.filename}"',
            "X-Document-Id": document.document_id,
            "X-Page-Count": str(document.page_count),
        },
    )


async def _finish(document: RenderedDocument, save: bool) -> Response:
    if save:
        await get_export_storage().save(document)
    return _pdf_response(document)


@router.post("/proposal")
async def export_proposal(
    payload: ProposalInput,
    save: bool = Query(False, description="Also save to the export directory"),
) -> Response:
    """Offer proposal: cover, overview and pricing pages."""
    document = await generate_offer_proposal_pdf(payload)
    return await _finish(document, save)


@router.post("/timesheet")
async def export_timesheet(
    payload: TimesheetExportInput,
    save: bool = Query(False, description="Also save to the export directory"),
) -> Response:
    document = await export_timesheet_pdf(payload)
    return await _finish(document, save)


@router.post("/timesheets/batch")
async def export_timesheets_batch(payload: TimesheetBatchRequest):
    """
    Export every paid (or pending) project and save the files.

    Projects whose filenames collide are saved under numbered names.
    Responds 400 when no project has the requested status.
    """
    documents = await export_all_timesheets(payload.projects, payload.is_paid)
    storage = get_export_storage()
    saved = []
    for document in documents:
        path = await storage.save(document, overwrite=False)
        saved.append(
            {
                "document_id": document.document_id,
                "filename": path.name,
                "page_count": document.page_count,
                "path": str(path),
            }
        )
    return {"count": len(saved), "documents": saved}


@router.post("/invoice")
async def export_invoice(
    payload: InvoiceExportInput,
    save: bool = Query(False, description="Also save to the export directory"),
) -> Response:
    document = await export_invoice_pdf(payload)
    return await _finish(document, save)


@router.get("/files/{filename}")
async def download_saved_export(filename: str) -> Response:
    """Download a previously saved export."""
    content = await get_export_storage().get(filename)
    if content is None:
        raise HTTPException(status_code=404, detail="Export not found")
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
