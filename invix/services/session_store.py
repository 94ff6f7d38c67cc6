import json
from enum import Enum
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from invix.core.errors import Err, SessionStoreNotReady
from invix.core.logger import logger
from invix.core.notifications import NotificationChannel, Severity
from invix.core.security import new_session_token
from invix.core.session import AdminPrincipal, ClientPrincipal, PrincipalKind, Session
from invix.core.storage import (
    ADMIN_DATA_KEY,
    ADMIN_ID_KEY,
    ADMIN_KEYS,
    ADMIN_SESSION_KEY,
    CLIENT_ID_KEY,
    CLIENT_KEYS,
    CLIENT_SESSION_KEY,
    DurableStorage,
)
from invix.db.row_store import RowStore
from invix.services import credential_verifier


class StoreState(str, Enum):
    UNINITIALIZED = "uninitialized"
    RESTORING = "restoring"
    READY = "ready"


class SessionStore:
    """
    Bir tarayıcı bağlamının kimlik durumu ve kalıcı kopyası.

    Client ve admin oturumları birbirinden bağımsızdır: biri açılıp
    kapanırken diğerinin anahtarlarına dokunulmaz. Dışarıya yalnızca
    okuma property'leri ve isimli işlemler açılır.
    """

    def __init__(
        self,
        storage: DurableStorage,
        rows: Optional[RowStore],
        notifications: Optional[NotificationChannel] = None,
        verifier=credential_verifier,
    ):
        self._storage = storage
        self._rows = rows
        self._verifier = verifier
        self.notifications = notifications or NotificationChannel()

        self._state = StoreState.UNINITIALIZED
        self._client_session: Optional[Session] = None
        self._admin_session: Optional[Session] = None
        self._client: Optional[ClientPrincipal] = None
        self._admin: Optional[AdminPrincipal] = None

    # =====================================================
    # READ-ONLY VIEW
    # =====================================================

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._state != StoreState.READY

    @property
    def client_session(self) -> Optional[Session]:
        return self._client_session

    @property
    def admin_session(self) -> Optional[Session]:
        return self._admin_session

    @property
    def client_id(self) -> Optional[str]:
        return self._client_session.principal_id if self._client_session else None

    @property
    def admin_id(self) -> Optional[str]:
        return self._admin_session.principal_id if self._admin_session else None

    @property
    def client(self) -> Optional[ClientPrincipal]:
        """Login sırasında önbelleğe alınan kayıt; restore sonrası None."""
        return self._client

    @property
    def admin(self) -> Optional[AdminPrincipal]:
        return self._admin

    def _ensure_ready(self):
        if self._state != StoreState.READY:
            raise SessionStoreNotReady("SessionStore.init() must complete before use")

    # =====================================================
    # INIT / RESTORE
    # =====================================================

    async def init(self) -> None:
        if self._state != StoreState.UNINITIALIZED:
            return

        self._state = StoreState.RESTORING

        # kalıcı depoya güvenilir, kimlik bilgileri yeniden doğrulanmaz
        token = self._storage.get(CLIENT_SESSION_KEY)
        client_id = self._storage.get(CLIENT_ID_KEY)
        if token and client_id:
            self._client_session = Session(token, PrincipalKind.CLIENT, client_id)

        token = self._storage.get(ADMIN_SESSION_KEY)
        admin_id = self._storage.get(ADMIN_ID_KEY)
        if token and admin_id:
            self._admin_session = Session(token, PrincipalKind.ADMIN, admin_id)
            self._admin = self._restore_admin_data()

        self._state = StoreState.READY

    def _restore_admin_data(self) -> Optional[AdminPrincipal]:
        raw = self._storage.get(ADMIN_DATA_KEY)
        if not raw:
            return None
        try:
            return AdminPrincipal.from_display(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"ADMIN DATA RESTORE FAILED | {e}")
            return None

    # =====================================================
    # CLIENT
    # =====================================================

    async def login_as_client(self, username: str, password: str) -> bool:
        self._ensure_ready()

        try:
            result = await run_in_threadpool(
                self._verifier.verify_client, self._rows, username, password
            )

            if isinstance(result, Err):
                self.notifications.notify("Login Failed", result.message, Severity.DESTRUCTIVE)
                return False

            client: ClientPrincipal = result.value
            token = new_session_token(PrincipalKind.CLIENT.value, client.client_id)

            self._storage.set(CLIENT_SESSION_KEY, token)
            self._storage.set(CLIENT_ID_KEY, client.client_id)
            self._client_session = Session(token, PrincipalKind.CLIENT, client.client_id)
            self._client = client

            self.notifications.notify(
                "Login Successful",
                f"Welcome back, {client.company_name}!",
                Severity.SUCCESS,
            )
            return True

        except Exception:
            logger.exception(f"LOGIN ERROR | kind=client | username={username}")
            self.notifications.notify(
                "Login Error", "An error occurred during login", Severity.DESTRUCTIVE
            )
            return False

    async def register_client(
        self,
        company_name: str,
        password: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> bool:
        self._ensure_ready()

        # kayıt sonrası otomatik giriş yok
        try:
            result = await run_in_threadpool(
                self._verifier.register_client, self._rows, company_name, password, email, phone
            )

            if isinstance(result, Err):
                self.notifications.notify("Registration Failed", result.message, Severity.DESTRUCTIVE)
                return False

            self.notifications.notify(
                "Registration Successful",
                "Account created! You can now login with your company name and password.",
                Severity.SUCCESS,
            )
            return True

        except Exception:
            logger.exception(f"REGISTER ERROR | company={company_name}")
            self.notifications.notify(
                "Registration Error", "An error occurred during registration", Severity.DESTRUCTIVE
            )
            return False

    # =====================================================
    # ADMIN
    # =====================================================

    async def login_as_admin(self, username: str, password: str) -> bool:
        self._ensure_ready()

        try:
            result = await run_in_threadpool(
                self._verifier.verify_admin, self._rows, username, password
            )

            if isinstance(result, Err):
                self.notifications.notify("Login Failed", result.message, Severity.DESTRUCTIVE)
                return False

            admin: AdminPrincipal = result.value
            token = new_session_token(PrincipalKind.ADMIN.value, admin.id)

            self._storage.set(ADMIN_SESSION_KEY, token)
            self._storage.set(ADMIN_ID_KEY, admin.id)
            self._storage.set(ADMIN_DATA_KEY, json.dumps(admin.to_display()))
            self._admin_session = Session(token, PrincipalKind.ADMIN, admin.id)
            self._admin = admin

            self.notifications.notify(
                "Admin Login Successful",
                f"Welcome back, {admin.username}!",
                Severity.SUCCESS,
            )
            return True

        except Exception:
            logger.exception(f"LOGIN ERROR | kind=admin | username={username}")
            self.notifications.notify(
                "Login Error", "An error occurred during admin login", Severity.DESTRUCTIVE
            )
            return False

    # =====================================================
    # LOGOUT
    # =====================================================

    def logout(self, *kinds: PrincipalKind) -> None:
        """Verilen türlerin oturumunu kapatır; tür verilmezse ikisini de."""
        self._ensure_ready()
        kinds = kinds or (PrincipalKind.CLIENT, PrincipalKind.ADMIN)

        if PrincipalKind.CLIENT in kinds:
            for key in CLIENT_KEYS:
                self._storage.remove(key)
            self._client_session = None
            self._client = None

        if PrincipalKind.ADMIN in kinds:
            for key in ADMIN_KEYS:
                self._storage.remove(key)
            self._admin_session = None
            self._admin = None

        logger.info(f"LOGOUT | kinds={','.join(k.value for k in kinds)}")
        self.notifications.notify("Logged Out", "You have been successfully logged out")
