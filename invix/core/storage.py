"""
Tarayıcı tarafı kalıcı anahtar/değer deposu.
Web için cookie, testler ve script'ler için bellek içi dict.
"""
from abc import ABC, abstractmethod
from typing import Dict, Optional

from fastapi import Request, Response

from invix.core.config import settings
from invix.core.logger import logger
from invix.core.security import sign_value, unsign_value

CLIENT_SESSION_KEY = "client_session"
CLIENT_ID_KEY = "current_client_id"

ADMIN_SESSION_KEY = "admin_session"
ADMIN_ID_KEY = "current_admin_id"
ADMIN_DATA_KEY = "admin_data"

CLIENT_KEYS = (CLIENT_SESSION_KEY, CLIENT_ID_KEY)
ADMIN_KEYS = (ADMIN_SESSION_KEY, ADMIN_ID_KEY, ADMIN_DATA_KEY)


class DurableStorage(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...


class MemoryStorage(DurableStorage):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class CookieStorage(DurableStorage):
    """
    Request cookie'lerinden okur, response üzerine Set-Cookie yazar.
    Değerler imzalıdır; imzası tutmayan cookie yok sayılır.
    """

    def __init__(self, request: Request, response: Response):
        self._response = response
        self._values: Dict[str, str] = {}

        for key in CLIENT_KEYS + ADMIN_KEYS:
            raw = request.cookies.get(key)
            if raw is None:
                continue
            value = unsign_value(key, raw)
            if value is None:
                logger.warning(f"COOKIE REJECTED | key={key}")
                continue
            self._values[key] = value

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
        self._response.set_cookie(
            key=key,
            value=sign_value(key, value),
            max_age=settings.SESSION_COOKIE_MAX_AGE,
            httponly=True,
            samesite="lax",
            secure=settings.COOKIE_SECURE,
        )

    def remove(self, key: str) -> None:
        self._values.pop(key, None)
        self._response.delete_cookie(
            key=key,
            httponly=True,
            samesite="lax",
            secure=settings.COOKIE_SECURE,
        )
