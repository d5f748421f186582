# app/models/company.py
from sqlalchemy import Column, String, Text, DateTime, func
from sqlalchemy.orm import relationship

from app.db.base import Base
from ._ids import new_id


class Company(Base):
    __tablename__ = "companies"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False, index=True)
    postal_code = Column(String(16), nullable=True)
    address = Column(String(255), nullable=True)
    phone = Column(String(32), nullable=True)
    email = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    equipment = relationship("Equipment", back_populates="company")

    def __repr__(self) -> str:
        return f"<Company(id={self.id}, name='{self.name}')>"
