# Aggregator: cho phép "from app.models import InspectionRecord, DocumentTemplate, ..."

from app.db.base import Base

from .user import User
from .company import Company
from .project import Project
from .equipment import Equipment
from .inspection_record import InspectionRecord
from .document_template import DocumentTemplate
from .audit import AuditLog

__all__ = [
    "Base",
    "User",
    "Company",
    "Project",
    "Equipment",
    "InspectionRecord",
    "DocumentTemplate",
    "AuditLog",
]
