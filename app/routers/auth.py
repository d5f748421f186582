# app/routers/auth.py
import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Request, Form, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import or_
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from app.db.session import get_db
from app.models.user import User
from app.core.security import verify_password

router = APIRouter()

# Idle timeout: 1 giờ
IDLE_TIMEOUT_SEC = 1 * 60 * 60

EDITOR_ROLES = ("ADMIN", "EDITOR")


def get_current_user(request: Request, db: Session = Depends(get_db)) -> Optional[User]:
    sess = request.session
    now = int(time.time())
    last = int(sess.get("_last_seen") or 0)
    if last and (now - last) > IDLE_TIMEOUT_SEC:
        sess.clear()
        return None
    # cập nhật mốc hoạt động cuối
    sess["_last_seen"] = now

    uid = sess.get("uid")
    if not uid:
        return None
    return db.get(User, uid)


def require_user(user: Optional[User] = Depends(get_current_user)) -> User:
    if not user:
        raise HTTPException(HTTP_401_UNAUTHORIZED, "認証が必要です")
    if not user.is_active:
        raise HTTPException(HTTP_403_FORBIDDEN, "User disabled")
    return user


def require_roles(*roles: str):
    def _dep(user: User = Depends(require_user)) -> User:
        if roles and user.role not in roles:
            raise HTTPException(HTTP_403_FORBIDDEN, "権限がありません")
        return user
    return _dep


# ADMIN hoặc EDITOR (xuất phiếu, upload template)
require_editor = require_roles(*EDITOR_ROLES)


def _user_out(user: User) -> dict:
    return {
        "id": user.id,
        "username": user.username,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "is_active": user.is_active,
    }


@router.post("/login")
def login(
    request: Request,
    username: str = Form(...),
    password: str = Form(...),
    db: Session = Depends(get_db),
):
    user = (
        db.query(User)
        .filter(or_(User.username == username, User.email == username))
        .first()
    )
    if not user or not verify_password(password, user.password_hash):
        raise HTTPException(HTTP_401_UNAUTHORIZED, "Invalid credentials")
    if not user.is_active:
        raise HTTPException(HTTP_403_FORBIDDEN, "User disabled")

    user.last_login_at = datetime.now(timezone.utc)
    db.commit()

    request.session.clear()
    request.session["uid"] = user.id
    request.session["_last_seen"] = int(time.time())
    request.session["name"] = user.name or user.username
    request.session["username"] = user.username
    request.session["role"] = user.role
    return {"ok": True, "user": _user_out(user)}


@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    return {"ok": True}


@router.get("/me")
def me(user: User = Depends(require_user)):
    return _user_out(user)
