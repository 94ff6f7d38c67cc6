from fastapi import APIRouter, Depends, Response, status

from invix.core.config import settings
from invix.core.session import PrincipalKind
from invix.dependencies.auth import get_session_store
from invix.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, SessionStateResponse
from invix.services.session_store import SessionStore

router = APIRouter(prefix="/auth", tags=["Client Auth"])


@router.get("")
def auth_entry():
    return {
        "entry": "client",
        "login": f"{settings.AUTH_ENTRY_ROUTE}/login",
        "register": f"{settings.AUTH_ENTRY_ROUTE}/register",
    }


@router.post("/login", response_model=AuthResponse)
async def client_login(
    body: LoginRequest,
    response: Response,
    store: SessionStore = Depends(get_session_store),
):
    success = await store.login_as_client(body.username, body.password)
    if not success:
        response.status_code = status.HTTP_401_UNAUTHORIZED

    return AuthResponse(
        success=success,
        redirect_to=settings.CLIENT_DASHBOARD_ROUTE if success else None,
        notifications=store.notifications.drain(),
    )


@router.post("/register", response_model=AuthResponse)
async def client_register(
    body: RegisterRequest,
    response: Response,
    store: SessionStore = Depends(get_session_store),
):
    success = await store.register_client(
        body.company_name,
        body.password,
        body.email,
        body.phone,
    )
    if not success:
        response.status_code = status.HTTP_400_BAD_REQUEST

    return AuthResponse(success=success, notifications=store.notifications.drain())


@router.post("/logout", response_model=AuthResponse)
def client_logout(store: SessionStore = Depends(get_session_store)):
    store.logout(PrincipalKind.CLIENT)
    return AuthResponse(
        success=True,
        redirect_to=settings.AUTH_ENTRY_ROUTE,
        notifications=store.notifications.drain(),
    )


@router.get("/session", response_model=SessionStateResponse)
def session_state(store: SessionStore = Depends(get_session_store)):
    return SessionStateResponse(
        is_loading=store.is_loading,
        client_authenticated=store.client_session is not None,
        admin_authenticated=store.admin_session is not None,
        client_id=store.client_id,
        admin_id=store.admin_id,
    )
