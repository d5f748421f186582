# scripts/ensure_user.py
# Tạo / cập nhật tài khoản đăng nhập:
#   python -m scripts.ensure_user admin 'admin123' --role ADMIN --name "管理者"
import argparse

from app.core.security import hash_password
from app.db.session import SessionLocal, engine, init_db
from app.models.user import User

ROLES = ("ADMIN", "EDITOR", "VIEWER")


def upsert_user(db, username, password, role, name=None, email=None, phone=None):
    u = db.query(User).filter(User.username == username).first()
    if u:
        u.password_hash = hash_password(password)
        u.role = role
        u.is_active = True
        if name: u.name = name
        if email: u.email = email
        if phone: u.phone = phone
        msg = f"UPDATED {username} ({role})"
    else:
        u = User(username=username, password_hash=hash_password(password),
                 role=role, name=name, email=email, phone=phone, is_active=True)
        db.add(u)
        msg = f"CREATED {username} ({role})"
    return msg


def main(argv=None):
    p = argparse.ArgumentParser(description="Create or update a login user")
    p.add_argument("username")
    p.add_argument("password")
    p.add_argument("--role", default="EDITOR", choices=ROLES)
    p.add_argument("--name")
    p.add_argument("--email")
    p.add_argument("--phone")
    args = p.parse_args(argv)

    print("DB =", engine.url.render_as_string(hide_password=True))
    init_db()
    db = SessionLocal()
    try:
        print(upsert_user(db, args.username, args.password, args.role, args.name, args.email, args.phone))
        db.commit()
        users = db.query(User).all()
        print("Users in DB:", [(x.username, x.role, x.is_active) for x in users])
    finally:
        db.close()


if __name__ == "__main__":
    main()
