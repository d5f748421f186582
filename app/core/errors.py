# ================================
# file: app/core/errors.py
# ================================
"""
Lỗi nghiệp vụ của luồng xuất phiếu (document generation).

Services raise these; `app.main` turns them into `{"detail": message}` responses.
"""
from __future__ import annotations


class DocumentError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DocumentError):
    """Thiếu templateId / danh sách id phiếu rỗng."""
    status_code = 400


class NotFoundError(DocumentError):
    status_code = 404


class UnsupportedFormatError(DocumentError):
    status_code = 400


class TemplateRenderError(DocumentError):
    """Engine ghép dữ liệu (docx / xlsx) thất bại."""
    status_code = 500
