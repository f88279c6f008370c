from passlib.context import CryptContext
from ..core.config import get_settings


def build_password_context(scheme: str = None) -> CryptContext:
    return CryptContext(schemes=[scheme or get_settings().password_hash_scheme], deprecated="auto")


pwd_context = build_password_context()


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)
