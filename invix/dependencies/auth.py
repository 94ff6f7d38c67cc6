from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fastapi import Depends, HTTPException, Request, Response, status

from invix.core.config import settings
from invix.core.storage import CookieStorage
from invix.db.row_store import RowStore
from invix.dependencies.db import get_row_store
from invix.services.session_store import SessionStore


async def get_session_store(
    request: Request,
    response: Response,
    rows: RowStore = Depends(get_row_store),
) -> SessionStore:
    store = SessionStore(CookieStorage(request, response), rows)
    await store.init()
    return store


class GuardDecision(str, Enum):
    LOADING = "loading"
    REDIRECT = "redirect"
    ALLOW = "allow"


@dataclass(frozen=True)
class GuardOutcome:
    decision: GuardDecision
    location: Optional[str] = None


class AccessGuard:
    """
    Route koruması. Gereken oturum yoksa giriş sayfasına 303 ile yönlendirir,
    store henüz restore ediliyorsa 503 "Loading..." döner. Yetkili istekte
    store'u olduğu gibi route'a verir.
    """

    def __init__(self, require_client: bool = False, require_admin: bool = False):
        self.require_client = require_client
        self.require_admin = require_admin

    def evaluate(self, store: SessionStore) -> GuardOutcome:
        if store.is_loading:
            return GuardOutcome(GuardDecision.LOADING)

        # iki koşul da ayrı ayrı değerlendirilir
        client_ok = not self.require_client or store.client_session is not None
        admin_ok = not self.require_admin or store.admin_session is not None

        if not client_ok:
            return GuardOutcome(GuardDecision.REDIRECT, settings.AUTH_ENTRY_ROUTE)
        if not admin_ok:
            return GuardOutcome(GuardDecision.REDIRECT, settings.ADMIN_ENTRY_ROUTE)
        return GuardOutcome(GuardDecision.ALLOW)

    def __call__(self, store: SessionStore = Depends(get_session_store)) -> SessionStore:
        outcome = self.evaluate(store)

        if outcome.decision == GuardDecision.LOADING:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Loading...",
                headers={"Retry-After": "1"},
            )

        if outcome.decision == GuardDecision.REDIRECT:
            raise HTTPException(
                status_code=status.HTTP_303_SEE_OTHER,
                detail="Authentication required",
                headers={"Location": outcome.location},
            )

        return store


require_client = AccessGuard(require_client=True)
require_admin = AccessGuard(require_admin=True)
require_client_and_admin = AccessGuard(require_client=True, require_admin=True)
