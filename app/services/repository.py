# ================================
# file: app/services/repository.py
# ================================
from __future__ import annotations

from typing import List, Optional, Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from ..models import DocumentTemplate, Equipment, InspectionRecord
from ..utils.soft_delete import exclude_inactive

REPORT_TEMPLATE = "REPORT"


def _record_query(db: Session):
    # nạp sẵn equipment -> company / project và user (1 query, không lazy-load từng dòng)
    return db.query(InspectionRecord).options(
        joinedload(InspectionRecord.equipment).joinedload(Equipment.company),
        joinedload(InspectionRecord.equipment).joinedload(Equipment.project),
        joinedload(InspectionRecord.user),
    )


def find_work_record(db: Session, record_id: str) -> Optional[InspectionRecord]:
    return _record_query(db).filter(InspectionRecord.id == record_id).first()


def find_work_records(db: Session, record_ids: Sequence[str]) -> List[InspectionRecord]:
    """
    1 query `IN (...)`; giữ thứ tự theo danh sách id truyền vào, bỏ id không tồn tại.
    """
    ids = [i for i in dict.fromkeys(record_ids) if i]
    if not ids:
        return []
    rows = _record_query(db).filter(InspectionRecord.id.in_(ids)).all()
    by_id = {r.id: r for r in rows}
    return [by_id[i] for i in ids if i in by_id]


def visible_templates_query(db: Session, user_id: str):
    """Template còn active và (của chính user HOẶC là template mặc định)."""
    q = exclude_inactive(DocumentTemplate, db.query(DocumentTemplate))
    return q.filter(or_(DocumentTemplate.user_id == user_id, DocumentTemplate.is_default.is_(True)))


def find_active_template(
    db: Session,
    template_id: str,
    user_id: str,
    template_type: Optional[str] = REPORT_TEMPLATE,
) -> Optional[DocumentTemplate]:
    q = visible_templates_query(db, user_id).filter(DocumentTemplate.id == template_id)
    if template_type:
        q = q.filter(DocumentTemplate.template_type == template_type)
    return q.first()
