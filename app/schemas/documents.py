# ================================
# file: app/schemas/documents.py
# ================================
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# Body để Optional: thiếu id -> 400 với thông báo nghiệp vụ, không phải 422
class GenerateDocumentIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    template_id: Optional[str] = Field(None, alias="templateId")


class BulkGenerateIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    work_record_ids: Optional[List[str]] = Field(None, alias="workRecordIds")
    template_id: Optional[str] = Field(None, alias="templateId")


class TemplateOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    template_type: str
    name: str
    description: Optional[str] = None
    file_size: int
    mime_type: str
    is_default: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TemplateListOut(BaseModel):
    templates: List[TemplateOut]
