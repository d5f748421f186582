# app/models/project.py
from sqlalchemy import Column, String, DateTime, Numeric, func
from sqlalchemy.orm import relationship

from app.db.base import Base
from ._ids import new_id


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    # PLANNING / IN_PROGRESS / ON_HOLD / COMPLETED
    status = Column(String(32), nullable=False, default="PLANNING")
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)
    amount = Column(Numeric(15, 2), nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    equipment = relationship("Equipment", back_populates="project")

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, title='{self.title}', status='{self.status}')>"
