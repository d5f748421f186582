# ================================
# file: app/services/batch_service.py
# ================================
"""
In hàng loạt: N phiếu × 1 template -> 1 file ZIP.

Records are rendered one at a time into a single in-memory archive. A record
that fails is logged and skipped; the batch still returns (possibly an empty ZIP).
"""
from __future__ import annotations

import logging
import zipfile
from dataclasses import dataclass, field
from io import BytesIO
from typing import Dict, List, Mapping, Optional, Sequence

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.errors import DocumentError, NotFoundError, ValidationError
from .document_service import build_filename, extension_for, load_template
from .placeholders import build_placeholders
from .renderers import get_renderer
from .repository import find_work_records

log = logging.getLogger("documents")

ARCHIVE_FILENAME = "作業記録一括印刷.zip"
ZIP_MIME = "application/zip"


@dataclass
class BatchResult:
    content: bytes
    filename: str = ARCHIVE_FILENAME
    content_type: str = ZIP_MIME
    entries: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


def build_archive(entries: Mapping[str, bytes]) -> bytes:
    buf = BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return buf.getvalue()


def _dedupe_name(name: str, record_id: str) -> str:
    stem, dot, ext = name.rpartition(".")
    return f"{stem}_{record_id}{dot}{ext}"


def generate_batch(
    db: Session,
    record_ids: Optional[Sequence[str]],
    template_id: Optional[str],
    user_id: str,
    renderers: Optional[Mapping[str, object]] = None,
) -> BatchResult:
    if not record_ids:
        raise ValidationError("作業記録IDが指定されていません")
    if not template_id:
        raise ValidationError("テンプレートIDが指定されていません")

    template = load_template(db, template_id, user_id)

    records = find_work_records(db, record_ids)
    if not records:
        raise NotFoundError("作業記録が見つかりません")

    result = BatchResult(content=b"")
    try:
        renderer = get_renderer(template.mime_type, renderers)
    except DocumentError:
        log.error("unsupported template mime type: %s (template=%s)", template.mime_type, template.id)
        result.skipped = [r.id for r in records]
        result.content = build_archive({})
        return result

    template_bytes = template.file_data
    extension = extension_for(template.mime_type)
    entries: Dict[str, bytes] = {}

    for record in records:
        try:
            content = renderer.render(template_bytes, build_placeholders(record))
        except Exception:
            log.exception("batch: record %s skipped", record.id)
            result.skipped.append(record.id)
            continue

        name = build_filename(record, extension)
        if name in entries:
            if settings.BATCH_DEDUPLICATE_FILENAMES:
                name = _dedupe_name(name, record.id)
            else:
                log.warning("batch: duplicate file name %s, record %s overwrites previous entry", name, record.id)
        entries[name] = content

    result.entries = list(entries)
    result.content = build_archive(entries)
    return result
