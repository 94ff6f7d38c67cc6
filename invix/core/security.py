import secrets
import time
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from invix.core.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def _normalize_password(password: str) -> str:
    """
    bcrypt max 72 BYTE sınırı vardır.
    UTF-8 güvenli truncate.
    """
    return password.encode("utf-8")[:72].decode("utf-8", errors="ignore")


def hash_password(password: str) -> str:
    return pwd_context.hash(_normalize_password(password))


def verify_password(password: str, hashed: str) -> bool:
    if not hashed:
        return False
    try:
        return pwd_context.verify(_normalize_password(password), hashed)
    except ValueError:
        # hash formatı tanınmıyor
        return False


_DUMMY_HASH: Optional[str] = None


def verify_dummy_password(password: str) -> bool:
    """
    Aday satır yokken de bir bcrypt doğrulaması yapar; bilinmeyen
    kullanıcı ile yanlış şifre aynı sürede reddedilir.
    """
    global _DUMMY_HASH
    if _DUMMY_HASH is None:
        _DUMMY_HASH = hash_password(secrets.token_urlsafe(16))
    verify_password(password, _DUMMY_HASH)
    return False


def new_session_token(kind: str, principal_id: str) -> str:
    """
    Oturum kimliği: tür + principal id + ns zaman damgası + rastgele ek.
    Tür öneki ("client_" / "admin_") iki ad alanını birbirinden ayırır.
    """
    return f"{kind}_{principal_id}_{time.time_ns()}_{secrets.token_hex(4)}"


def sign_value(key: str, value: str) -> str:
    return jwt.encode(
        {"key": key, "value": value},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def unsign_value(key: str, signed: str) -> Optional[str]:
    """Returns None for tampered values or values signed for another key."""
    try:
        payload = jwt.decode(
            signed,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
    except JWTError:
        return None

    if payload.get("key") != key:
        return None
    value = payload.get("value")
    return value if isinstance(value, str) else None
