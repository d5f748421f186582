# app/routers/document_templates.py
from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, Response, UploadFile
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app.models.document_template import DOCX_MIME, XLSX_MIME, DocumentTemplate
from app.models.user import User
from app.routers.auth import require_editor, require_user
from app.schemas.documents import TemplateListOut, TemplateOut
from app.services.audit import record_audit
from app.services.document_service import extension_for
from app.services.repository import find_active_template, visible_templates_query
from app.utils.soft_delete import exclude_inactive, soft_delete

router = APIRouter(prefix="/document-templates", tags=["DocumentTemplates"])

log = logging.getLogger("documents")

ALLOWED_MIME_TYPES = (DOCX_MIME, XLSX_MIME)
TEMPLATE_TYPES = ("REPORT", "QUOTE", "CONTRACT")


def download_filename(tpl: DocumentTemplate) -> str:
    ext = "." + extension_for(tpl.mime_type)
    return tpl.name if tpl.name.lower().endswith(ext) else tpl.name + ext


@router.get("", response_model=TemplateListOut)
def list_templates(
    template_type: Optional[str] = Query(None, alias="templateType"),
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    q = visible_templates_query(db, user.id)
    if template_type:
        q = q.filter(DocumentTemplate.template_type == template_type)
    # template mặc định lên trước, sau đó mới nhất trước
    rows = q.order_by(DocumentTemplate.is_default.desc(), DocumentTemplate.created_at.desc()).all()
    return {"templates": [TemplateOut.model_validate(r) for r in rows]}


@router.post("", response_model=TemplateOut, status_code=201)
def upload_template(
    request: Request,
    file: Optional[UploadFile] = File(None),
    template_type: Optional[str] = Form(None, alias="templateType"),
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    is_default: bool = Form(False, alias="isDefault"),
    db: Session = Depends(get_db),
    user: User = Depends(require_editor),
):
    if file is None:
        raise HTTPException(400, "ファイルが指定されていません")
    if not template_type or not (name or "").strip():
        raise HTTPException(400, "テンプレートタイプと名前は必須です")
    if template_type not in TEMPLATE_TYPES:
        raise HTTPException(400, f"不明なテンプレートタイプです: {template_type}")
    if file.content_type not in ALLOWED_MIME_TYPES:
        raise HTTPException(400, "サポートされていないファイル形式です（.docxまたは.xlsxのみ）")

    data = file.file.read()
    if len(data) > settings.TEMPLATE_MAX_BYTES:
        raise HTTPException(400, "ファイルサイズが大きすぎます（最大5MB）")

    # chỉ 1 template mặc định cho mỗi loại
    if is_default:
        (
            db.query(DocumentTemplate)
            .filter(DocumentTemplate.template_type == template_type, DocumentTemplate.is_default.is_(True))
            .update({DocumentTemplate.is_default: False}, synchronize_session=False)
        )

    tpl = DocumentTemplate(
        user_id=user.id,
        template_type=template_type,
        name=name.strip(),
        description=description or None,
        file_data=data,
        file_size=len(data),
        mime_type=file.content_type,
        is_active=True,
        is_default=is_default,
    )
    db.add(tpl)
    db.commit()
    db.refresh(tpl)
    log.info("template uploaded id=%s type=%s mime=%s size=%d", tpl.id, template_type, tpl.mime_type, tpl.file_size)

    record_audit(
        db,
        action="TEMPLATE_UPLOAD",
        target_type="DocumentTemplate",
        target_id=tpl.id,
        new_values={"name": tpl.name, "template_type": template_type, "is_default": is_default},
        request=request,
    )
    return tpl


@router.get("/{template_id}")
def download_template(
    template_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    tpl = find_active_template(db, template_id, user.id, template_type=None)
    if tpl is None:
        raise HTTPException(404, "テンプレートが見つかりません")
    return Response(
        content=tpl.file_data,
        media_type=tpl.mime_type,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(download_filename(tpl))}"},
    )


# ================= XOÁ (soft delete) =================
@router.delete("/{template_id}")
def delete_template(
    template_id: str,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(require_editor),
):
    tpl = (
        exclude_inactive(DocumentTemplate, db.query(DocumentTemplate))
        .filter(DocumentTemplate.id == template_id)
        .first()
    )
    if tpl is None:
        raise HTTPException(404, "テンプレートが見つかりません")

    # template của người khác: mặc định -> chỉ ADMIN; riêng tư -> không thấy được (trừ ADMIN)
    if tpl.user_id != user.id and user.role != "ADMIN":
        if not tpl.is_default:
            raise HTTPException(404, "テンプレートが見つかりません")
        raise HTTPException(403, "このテンプレートを削除する権限がありません")

    soft_delete(tpl)
    db.commit()
    log.info("template soft-deleted id=%s by user=%s", tpl.id, user.id)

    record_audit(
        db,
        action="TEMPLATE_DELETE",
        target_type="DocumentTemplate",
        target_id=template_id,
        new_values={"is_active": False},
        request=request,
    )
    return {"ok": True, "message": "テンプレートを削除しました"}
