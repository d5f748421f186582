from __future__ import annotations

from app.core.security import verify_password
from app.models import User
from scripts.ensure_user import main, upsert_user


def test_upsert_creates_then_updates(db) -> None:
    assert upsert_user(db, "sato", "pw-1", "EDITOR", name="佐藤").startswith("CREATED")
    db.commit()
    assert upsert_user(db, "sato", "pw-2", "ADMIN").startswith("UPDATED")
    db.commit()

    u = db.query(User).filter(User.username == "sato").one()
    assert u.role == "ADMIN"
    assert u.name == "佐藤"
    assert verify_password("pw-2", u.password_hash)


def test_main_from_args(db, capsys) -> None:
    main(["suzuki", "secret", "--role", "VIEWER", "--email", "suzuki@example.jp"])
    assert "CREATED suzuki (VIEWER)" in capsys.readouterr().out
    db.expire_all()
    assert db.query(User).filter(User.username == "suzuki").one().email == "suzuki@example.jp"
