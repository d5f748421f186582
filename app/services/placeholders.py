# ================================
# file: app/services/placeholders.py
# ================================
"""
Dựng bảng placeholder phẳng {key: str} cho 1 phiếu công việc (作業記録).

Keys are either fixed metadata keys (workType, companyName, ...) or checklist keys
`{section}_{category}_{item}` / `{section}_{category}_{item}_defect_label`.
Values are always strings; missing data gives "" (never "None").
"""
from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Optional

from ..models import InspectionRecord
from ..utils.datetime import fmt_date_ja, fmt_datetime_ja
from .inspection_items import ChecklistData, iter_item_paths, placeholder_key
from .labels import (
    defect_label,
    judgment_label,
    project_status_label,
    work_type_label,
)

CURRENCY_SYMBOL = "¥"


# ---------- Helper ----------
def _s(v: Optional[object]) -> str:
    return "" if v is None else str(v)


def _to_decimal(v: Optional[object]) -> Optional[Decimal]:
    if v in (None, ""):
        return None
    try:
        return v if isinstance(v, Decimal) else Decimal(str(v))
    except InvalidOperation:
        return None


def fmt_amount_raw(v: Optional[object]) -> str:
    """1000000.00 -> '1000000', 1234.50 -> '1234.5'; 0 / None -> ''."""
    d = _to_decimal(v)
    if not d:
        return ""
    if d == d.to_integral_value():
        return str(int(d))
    return format(d.normalize(), "f")


def fmt_amount_yen(v: Optional[object]) -> str:
    """1000000 -> '¥1,000,000' (nhóm hàng nghìn, tối đa 3 chữ số thập phân)."""
    d = _to_decimal(v)
    if not d:
        return ""
    q = d.quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)
    sign = "-" if q < 0 else ""
    int_part, _, frac = format(abs(q), "f").partition(".")
    frac = frac.rstrip("0")
    grouped = f"{int(int_part):,}" + (f".{frac}" if frac else "")
    return f"{CURRENCY_SYMBOL}{sign}{grouped}"


def build_checklist_placeholders(checklist: ChecklistData) -> Dict[str, str]:
    """
    Sinh đủ 2 key cho MỌI hạng mục trong danh mục, kể cả khi dữ liệu không có.
    Keys in the stored JSON that are not in the item catalogue are ignored.
    """
    out: Dict[str, str] = {}
    for section, category, item in iter_item_paths():
        key = placeholder_key(section.id, category.id, item.id)
        out[key] = checklist.judgment(section.id, category.id, item.id)
        out[f"{key}_defect_label"] = defect_label(checklist.defect(section.id, category.id, item.id))
    return out


# ---------- Builder ----------
def build_placeholders(record: InspectionRecord) -> Dict[str, str]:
    """
    `record` phải được nạp sẵn equipment → company / project và user.
    """
    equipment: Any = record.equipment
    company: Any = getattr(equipment, "company", None)
    project: Any = getattr(equipment, "project", None)
    user: Any = record.user

    checklist = ChecklistData.from_text(record.checklist_data, record_id=record.id)

    project_status = getattr(project, "status", None)
    amount = getattr(project, "amount", None)

    data: Dict[str, str] = {
        # Thông tin phiếu
        "workType": _s(record.work_type),
        "workTypeLabel": work_type_label(record.work_type),
        "inspectionDate": fmt_date_ja(record.inspection_date),
        "inspectionDateDateTime": fmt_datetime_ja(record.inspection_date),
        "overallJudgment": _s(record.overall_judgment),
        "overallJudgmentLabel": judgment_label(record.overall_judgment),
        "findings": _s(record.findings),
        "documentNumber": _s(record.document_number),
        "installationFactory": _s(record.installation_factory),

        # Thiết bị
        "equipmentName": _s(getattr(equipment, "name", None)),
        "equipmentModel": _s(getattr(equipment, "model", None)),
        "equipmentSerialNumber": _s(getattr(equipment, "serial_number", None)),
        "equipmentLocation": _s(getattr(equipment, "location", None)),
        "equipmentSpecifications": _s(getattr(equipment, "specifications", None)),

        # Công ty (取引先)
        "companyName": _s(getattr(company, "name", None)),
        "companyPostalCode": _s(getattr(company, "postal_code", None)),
        "companyAddress": _s(getattr(company, "address", None)),
        "companyPhone": _s(getattr(company, "phone", None)),
        "companyEmail": _s(getattr(company, "email", None)),

        # Dự án
        "projectTitle": _s(getattr(project, "title", None)),
        "projectStatus": _s(project_status),
        "projectStatusLabel": project_status_label(project_status),
        "projectStartDate": fmt_date_ja(getattr(project, "start_date", None)),
        "projectEndDate": fmt_date_ja(getattr(project, "end_date", None)),
        "projectAmount": fmt_amount_raw(amount),
        "projectAmountFormatted": fmt_amount_yen(amount),

        # Người phụ trách
        "userName": _s(getattr(user, "name", None)),
        "userEmail": _s(getattr(user, "email", None)),
        "userPhone": _s(getattr(user, "phone", None)),

        # JSON gốc, cho template muốn tự xử lý
        "checklistData": _s(record.checklist_data),
    }
    data.update(build_checklist_placeholders(checklist))
    return data
