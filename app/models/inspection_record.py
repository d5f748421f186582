# app/models/inspection_record.py
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship

from app.db.base import Base
from ._ids import new_id


# ================= InspectionRecord (作業記録) =================
class InspectionRecord(Base):
    __tablename__ = "inspection_records"

    id = Column(String(36), primary_key=True, default=new_id)

    equipment_id = Column(String(36), ForeignKey("equipment.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    # INSPECTION / REPAIR / MAINTENANCE / OTHER
    work_type = Column(String(32), nullable=False, default="INSPECTION")
    # lưu naive theo UTC
    inspection_date = Column(DateTime, nullable=False, index=True)
    # GOOD / CAUTION / BAD / REPAIR
    overall_judgment = Column(String(32), nullable=True)

    findings = Column(Text, nullable=True)
    document_number = Column(String(64), nullable=True)
    installation_factory = Column(String(255), nullable=True)

    # JSON: { section: { category: { item: "V", item_defect: "01" } } }
    # chỉ có ý nghĩa khi work_type = INSPECTION
    checklist_data = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    equipment = relationship("Equipment", back_populates="inspection_records")
    user = relationship("User")

    def __repr__(self) -> str:
        return f"<InspectionRecord(id={self.id}, type='{self.work_type}', date={self.inspection_date})>"
