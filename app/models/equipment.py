# app/models/equipment.py
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship

from app.db.base import Base
from ._ids import new_id


class Equipment(Base):
    __tablename__ = "equipment"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    model = Column(String(128), nullable=True)
    serial_number = Column(String(128), nullable=True)
    location = Column(String(255), nullable=True)
    specifications = Column(Text, nullable=True)

    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False, index=True)
    project_id = Column(String(36), ForeignKey("projects.id", ondelete="SET NULL"), nullable=True, index=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    company = relationship("Company", back_populates="equipment")
    project = relationship("Project", back_populates="equipment")
    inspection_records = relationship("InspectionRecord", back_populates="equipment")

    def __repr__(self) -> str:
        return f"<Equipment(id={self.id}, name='{self.name}')>"
