# ================================
# file: app/services/document_service.py
# ================================
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Mapping, Optional

from sqlalchemy.orm import Session

from ..core.errors import NotFoundError, TemplateRenderError, ValidationError
from ..models import DocumentTemplate, InspectionRecord
from ..utils.datetime import iso_date_utc
from .placeholders import build_placeholders
from .renderers import EXTENSIONS, get_renderer
from .repository import find_active_template, find_work_record

log = logging.getLogger("documents")

FILENAME_PREFIX = "作業記録"
_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


@dataclass
class GeneratedDocument:
    content: bytes
    filename: str
    content_type: str


# ---------- Helper ----------
def _safe_part(v: Optional[object]) -> str:
    # "/" trong tên công ty sẽ tạo thư mục con trong ZIP
    return _UNSAFE_FILENAME_CHARS.sub("_", "" if v is None else str(v)).strip()


def build_filename(record: InspectionRecord, extension: str) -> str:
    """作業記録_{công ty}_{thiết bị}_{YYYY-MM-DD}.{ext}"""
    equipment = record.equipment
    company = getattr(equipment, "company", None)
    parts = [
        FILENAME_PREFIX,
        _safe_part(getattr(company, "name", None)),
        _safe_part(getattr(equipment, "name", None)),
        iso_date_utc(record.inspection_date),
    ]
    return "_".join(parts) + f".{extension}"


def extension_for(mime_type: str) -> str:
    return EXTENSIONS.get(mime_type, "bin")


def load_template(db: Session, template_id: Optional[str], user_id: str) -> DocumentTemplate:
    if not template_id:
        raise ValidationError("テンプレートIDが指定されていません")
    template = find_active_template(db, template_id, user_id)
    if template is None:
        raise NotFoundError("テンプレートが見つかりません")
    return template


# ---------- Xuất 1 phiếu ----------
def generate_one(
    db: Session,
    record_id: str,
    template_id: Optional[str],
    user_id: str,
    renderers: Optional[Mapping[str, object]] = None,
) -> GeneratedDocument:
    if not template_id:
        raise ValidationError("テンプレートIDが指定されていません")

    record = find_work_record(db, record_id)
    if record is None:
        raise NotFoundError("作業記録が見つかりません")

    template = load_template(db, template_id, user_id)
    renderer = get_renderer(template.mime_type, renderers)

    placeholders = build_placeholders(record)
    try:
        content = renderer.render(template.file_data, placeholders)
    except TemplateRenderError:
        log.error("render failed (record=%s, template=%s)", record.id, template.id, exc_info=True)
        raise

    return GeneratedDocument(
        content=content,
        filename=build_filename(record, extension_for(template.mime_type)),
        content_type=template.mime_type,
    )
