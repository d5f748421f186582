# ================================
# file: app/schemas/checklist.py
# ================================
from pydantic import BaseModel
from typing import Dict, List


class InspectionItemOut(BaseModel):
    id: str
    label: str
    placeholder: str


class InspectionCategoryOut(BaseModel):
    id: str
    title: str
    items: List[InspectionItemOut]


class InspectionSectionOut(BaseModel):
    id: str
    title: str
    categories: List[InspectionCategoryOut]


class InspectionItemsOut(BaseModel):
    sections: List[InspectionSectionOut]
    judgment_symbols: Dict[str, str]
    defect_codes: Dict[str, str]
