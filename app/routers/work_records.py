# app/routers/work_records.py
from __future__ import annotations

from urllib.parse import quote

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.user import User
from app.routers.auth import require_editor
from app.schemas.documents import BulkGenerateIn, GenerateDocumentIn
from app.services.audit import record_audit
from app.services.batch_service import generate_batch
from app.services.document_service import generate_one
from app.services.renderers import DEFAULT_RENDERERS

router = APIRouter(prefix="/work-records", tags=["WorkRecords"])


def get_renderers():
    """MIME -> renderer; test override bằng app.dependency_overrides."""
    return DEFAULT_RENDERERS


def _attachment(filename: str) -> dict:
    # header chỉ nhận latin-1 -> tên file tiếng Nhật phải percent-encode (RFC 5987)
    return {"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"}


# ================= XUẤT 1 PHIẾU =================
@router.post("/{record_id}/generate-document")
def generate_document(
    record_id: str,
    payload: GenerateDocumentIn,
    request: Request,
    db: Session = Depends(get_db),
    renderers=Depends(get_renderers),
    user: User = Depends(require_editor),
):
    doc = generate_one(db, record_id, payload.template_id, user.id, renderers=renderers)
    record_audit(
        db,
        action="DOCUMENT_GENERATE",
        target_type="InspectionRecord",
        target_id=record_id,
        new_values={"template_id": payload.template_id, "filename": doc.filename},
        request=request,
    )
    return Response(content=doc.content, media_type=doc.content_type, headers=_attachment(doc.filename))


# ================= IN HÀNG LOẠT (ZIP) =================
@router.post("/bulk-generate-documents")
def bulk_generate_documents(
    payload: BulkGenerateIn,
    request: Request,
    db: Session = Depends(get_db),
    renderers=Depends(get_renderers),
    user: User = Depends(require_editor),
):
    result = generate_batch(db, payload.work_record_ids, payload.template_id, user.id, renderers=renderers)
    record_audit(
        db,
        action="DOCUMENT_BULK_GENERATE",
        target_type="DocumentTemplate",
        target_id=payload.template_id,
        new_values={
            "requested": len(payload.work_record_ids or []),
            "generated": len(result.entries),
            "skipped": result.skipped,
        },
        request=request,
    )
    return Response(content=result.content, media_type=result.content_type, headers=_attachment(result.filename))
