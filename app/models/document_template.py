# app/models/document_template.py
from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, LargeBinary, ForeignKey, func
from sqlalchemy.orm import relationship, deferred

from app.db.base import Base
from ._ids import new_id

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class DocumentTemplate(Base):
    __tablename__ = "document_templates"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    # REPORT / QUOTE / CONTRACT
    template_type = Column(String(32), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # blob chỉ nạp khi cần (list không kéo cả file)
    file_data = deferred(Column(LargeBinary, nullable=False))
    file_size = Column(Integer, nullable=False, default=0)
    mime_type = Column(String(128), nullable=False)

    is_active = Column(Boolean, nullable=False, default=True)
    is_default = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User")

    def __repr__(self) -> str:
        return f"<DocumentTemplate(id={self.id}, name='{self.name}', mime='{self.mime_type}')>"
