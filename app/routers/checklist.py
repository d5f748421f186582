from __future__ import annotations

from fastapi import APIRouter

from app.schemas.checklist import InspectionItemsOut
from app.services.inspection_items import INSPECTION_ITEMS, placeholder_key
from app.services.labels import DEFECT_LABELS, JUDGMENT_SYMBOL_LABELS

router = APIRouter(prefix="/checklist", tags=["Checklist"])


@router.get("/inspection-items", response_model=InspectionItemsOut)
def get_inspection_items():
    """Danh mục hạng mục kiểm tra + bảng ký hiệu, cho form nhập và người soạn template."""
    return {
        "sections": [
            {
                "id": s.id,
                "title": s.title,
                "categories": [
                    {
                        "id": c.id,
                        "title": c.title,
                        "items": [
                            {"id": it.id, "label": it.label, "placeholder": placeholder_key(s.id, c.id, it.id)}
                            for it in c.items
                        ],
                    }
                    for c in s.categories
                ],
            }
            for s in INSPECTION_ITEMS
        ],
        "judgment_symbols": JUDGMENT_SYMBOL_LABELS,
        "defect_codes": DEFECT_LABELS,
    }
