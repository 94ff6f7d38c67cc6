import uuid
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Response, status

from invix.core.config import settings
from invix.core.errors import Err
from invix.core.notifications import Severity
from invix.core.session import PrincipalKind
from invix.db.row_store import RowStore
from invix.dependencies.auth import get_session_store, require_admin
from invix.dependencies.db import get_row_store
from invix.schemas.auth import AuthResponse, LoginRequest
from invix.schemas.clients import AccessUpdate, ClientOut
from invix.services import credential_verifier
from invix.services.session_store import SessionStore

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("")
def admin_entry():
    return {
        "entry": "admin",
        "login": f"{settings.ADMIN_ENTRY_ROUTE}/login",
    }


@router.post("/login", response_model=AuthResponse)
async def admin_login(
    body: LoginRequest,
    response: Response,
    store: SessionStore = Depends(get_session_store),
):
    success = await store.login_as_admin(body.username, body.password)
    if not success:
        response.status_code = status.HTTP_401_UNAUTHORIZED

    return AuthResponse(
        success=success,
        redirect_to=settings.ADMIN_DASHBOARD_ROUTE if success else None,
        notifications=store.notifications.drain(),
    )


@router.post("/logout", response_model=AuthResponse)
def admin_logout(store: SessionStore = Depends(get_session_store)):
    store.logout(PrincipalKind.ADMIN)
    return AuthResponse(
        success=True,
        redirect_to=settings.ADMIN_ENTRY_ROUTE,
        notifications=store.notifications.drain(),
    )


# =====================================================
# CLIENT MANAGEMENT
# =====================================================

def _fetch_clients(rows: RowStore):
    result = credential_verifier.list_clients(rows)
    if isinstance(result, Err):
        raise HTTPException(status_code=502, detail=result.message)
    return result.value


@router.get("/dashboard")
def admin_dashboard(
    store: SessionStore = Depends(require_admin),
    rows: RowStore = Depends(get_row_store),
):
    clients = _fetch_clients(rows)

    return {
        "admin": store.admin.to_display() if store.admin else {"id": store.admin_id},
        "clients_total": len(clients),
        "clients_with_access": sum(1 for c in clients if c.access_status),
        "clients_active": sum(
            1 for c in clients if c.access_status and c.subscription_status == "ACTIVE"
        ),
        "clients_pending": sum(1 for c in clients if not c.access_status),
    }


@router.get("/clients", response_model=list[ClientOut])
def get_all_clients(
    store: SessionStore = Depends(require_admin),
    rows: RowStore = Depends(get_row_store),
):
    return [ClientOut(**asdict(c)) for c in _fetch_clients(rows)]


@router.post("/clients/{row_id}/access")
def update_client_access(
    row_id: uuid.UUID,
    body: AccessUpdate,
    response: Response,
    store: SessionStore = Depends(require_admin),
    rows: RowStore = Depends(get_row_store),
):
    result = credential_verifier.set_client_access(rows, row_id, body.access_status)

    if isinstance(result, Err):
        response.status_code = status.HTTP_400_BAD_REQUEST
        store.notifications.notify("Error", result.message, Severity.DESTRUCTIVE)
        return {"success": False, "client": None, "notifications": store.notifications.drain()}

    state = "enabled" if body.access_status else "disabled"
    store.notifications.notify("Success", f"Client access {state}", Severity.SUCCESS)
    return {
        "success": True,
        "client": ClientOut(**asdict(result.value)),
        "notifications": store.notifications.drain(),
    }
