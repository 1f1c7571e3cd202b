"""Export endpoints for the vendor profile workbook and report."""

import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from tprm_wizard.api.dependencies import get_store
from tprm_wizard.services import report_renderer, workbook_renderer
from tprm_wizard.services.export_projector import (
    project_report,
    project_workbook,
    report_filename,
    workbook_filename,
)
from tprm_wizard.services.wizard_store import WizardStore

logger = logging.getLogger(__name__)

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _content_disposition(filename: str, ascii_filename: str) -> str:
    """Attachment header with an ASCII name and an RFC 5987 UTF-8 name."""
    disposition = f'attachment; filename="{ascii_filename}"'
    if filename != ascii_filename:
        disposition += f"; filename*=UTF-8''{quote(filename)}"
    return disposition


def _attachment(
    content: bytes, media_type: str, filename: str, ascii_filename: str
) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={
            "Content-Disposition": _content_disposition(filename, ascii_filename),
            "X-Content-Type-Options": "nosniff",
        },
    )


@router.get("/export/xlsx/{session_id}")
async def export_workbook(session_id: str, store: WizardStore = Depends(get_store)):
    """
    Download the vendor profile as an Excel workbook.

    Six sheets: Vendor Overview, Risk Scenarios, FAIR Inputs,
    FAIR Results, Treatment Options and Decision Log.
    """
    snapshot = store.snapshot()
    sheets = project_workbook(snapshot)
    filename = workbook_filename(snapshot)
    ascii_filename = workbook_filename(snapshot, ascii_only=True)

    try:
        content = workbook_renderer.render_workbook(sheets)
    except Exception as e:
        logger.exception("Workbook export failed for session %s", session_id)
        raise HTTPException(
            status_code=500,
            detail=f"Workbook export failed: {str(e)}",
        )

    logger.info(
        "Exported workbook %s (%s)",
        filename,
        ", ".join(f"{s.name}={len(s.rows)}" for s in sheets),
    )
    return _attachment(content, XLSX_MEDIA_TYPE, filename, ascii_filename)


@router.get("/export/pdf/{session_id}")
async def export_pdf(session_id: str, store: WizardStore = Depends(get_store)):
    """
    Download the vendor report as PDF.

    Vendor overview, key metrics per scenario, treatment
    recommendations and the decision log.
    """
    snapshot = store.snapshot()
    report = project_report(snapshot)
    filename = report_filename(snapshot)
    ascii_filename = report_filename(snapshot, ascii_only=True)

    try:
        content = report_renderer.render_report_pdf(report)
    except (ImportError, OSError):
        # WeasyPrint raises OSError when its native libraries are missing
        logger.exception("PDF engine unavailable")
        raise HTTPException(
            status_code=501,
            detail="PDF generation not available. Install weasyprint.",
        )
    except Exception as e:
        logger.exception("PDF export failed for session %s", session_id)
        raise HTTPException(
            status_code=500,
            detail=f"PDF generation failed: {str(e)}",
        )

    logger.info("Exported report %s (%d scenarios)", filename, len(snapshot.scenarios))
    return _attachment(content, "application/pdf", filename, ascii_filename)
