# app/core/security.py
import os

from passlib.context import CryptContext

# cấu hình rounds có thể chỉnh qua ENV (test dùng rounds thấp cho nhanh)
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))
_pwd = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def hash_password(password: str) -> str:
    return _pwd.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    try:
        return _pwd.verify(plain_password, password_hash)
    except ValueError:
        # hash hỏng / sai định dạng -> coi như sai mật khẩu
        return False
