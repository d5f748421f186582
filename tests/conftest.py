from __future__ import annotations

import os

# phải đặt trước khi import app (settings / engine đọc ENV lúc import)
os.environ["DB_URL"] = "sqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SESSION_SECRET"] = "pytest-secret"
os.environ["DISPLAY_TIMEZONE"] = "Asia/Tokyo"

import json
from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

from app.db.base import Base
from app.db.session import SessionLocal, engine, init_db
from app.models import Company, DocumentTemplate, Equipment, InspectionRecord, Project, User
from app.models.document_template import DOCX_MIME


@pytest.fixture()
def db():
    init_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def make_user(db):
    def _make(username: str = "editor", role: str = "EDITOR", **kw) -> User:
        u = User(
            username=username,
            password_hash=kw.pop("password_hash", "x"),
            role=role,
            name=kw.pop("name", "山田 太郎"),
            email=kw.pop("email", f"{username}@example.jp"),
            phone=kw.pop("phone", "03-1234-5678"),
            is_active=kw.pop("is_active", True),
            **kw,
        )
        db.add(u)
        db.commit()
        return u
    return _make


@pytest.fixture()
def editor(make_user):
    return make_user()


@pytest.fixture()
def make_record(db, editor):
    def _make(
        company_name: str = "株式会社テスト",
        equipment_name: str = "天井クレーン1号",
        amount=Decimal("1000000"),
        with_project: bool = True,
        **kw,
    ) -> InspectionRecord:
        company = Company(
            name=company_name,
            postal_code="100-0001",
            address="東京都千代田区1-1",
            phone="03-0000-0000",
            email="info@test.co.jp",
        )
        project = None
        if with_project:
            project = Project(
                title="定期点検2025",
                status=kw.pop("project_status", "IN_PROGRESS"),
                start_date=datetime(2025, 1, 1, 3, 0),
                end_date=datetime(2025, 3, 31, 3, 0),
                amount=amount,
            )
        equipment = Equipment(
            name=equipment_name,
            model="HX-5",
            serial_number="SN-001",
            location="第2工場",
            specifications="5t",
            company=company,
            project=project,
        )
        rec = InspectionRecord(
            equipment=equipment,
            user_id=kw.pop("user_id", editor.id),
            work_type=kw.pop("work_type", "INSPECTION"),
            inspection_date=kw.pop("inspection_date", datetime(2025, 1, 15, 1, 30)),
            overall_judgment=kw.pop("overall_judgment", "GOOD"),
            findings=kw.pop("findings", "異常なし"),
            document_number=kw.pop("document_number", "DOC-0001"),
            installation_factory=kw.pop("installation_factory", "川崎工場"),
            checklist_data=kw.pop(
                "checklist_data",
                json.dumps({"hoisting": {"brake": {"lining_wear": "V", "lining_wear_defect": "01"}}}),
            ),
        )
        db.add(rec)
        db.commit()
        return rec
    return _make


@pytest.fixture()
def make_template(db, editor):
    def _make(data: bytes, mime_type: str = DOCX_MIME, **kw) -> DocumentTemplate:
        tpl = DocumentTemplate(
            user_id=kw.pop("user_id", editor.id),
            template_type=kw.pop("template_type", "REPORT"),
            name=kw.pop("name", "点検報告書"),
            file_data=data,
            file_size=len(data),
            mime_type=mime_type,
            is_active=kw.pop("is_active", True),
            is_default=kw.pop("is_default", False),
        )
        db.add(tpl)
        db.commit()
        return tpl
    return _make


@pytest.fixture()
def as_user():
    """Trả về hàm override get_current_user bằng 1 user giả (không cần login)."""
    from app.main import app
    from app.routers.auth import get_current_user

    def _login(user_id: str, role: str = "EDITOR", is_active: bool = True):
        fake = SimpleNamespace(id=user_id, role=role, is_active=is_active, username="u", name="u", email=None)
        app.dependency_overrides[get_current_user] = lambda: fake
        return fake

    yield _login
    app.dependency_overrides.clear()

