"""
Credential verification for client and admin principals.

The only module that writes to the principal tables (``clients``,
``admins``). Every function returns ``Ok(principal)`` or ``Err(kind,
message)``; row store exceptions never leave this module.
"""
from datetime import datetime, timezone
from typing import Optional

from invix.core.errors import Err, FailureKind, Ok, Result, RowStoreError
from invix.core.logger import logger
from invix.core.security import hash_password, verify_dummy_password, verify_password
from invix.core.session import AdminPrincipal, ClientPrincipal
from invix.db.row_store import RowStore

INVALID_CLIENT_CREDENTIALS = "Invalid credentials or access denied."
INVALID_ADMIN_CREDENTIALS = "Invalid admin credentials."
CLIENT_ID_FAILED = "Error generating client ID"
DUPLICATE_COMPANY = "Company name already exists. Please choose a different name."
CREATE_FAILED = "Failed to create account. Please try again."
UPDATE_ACCESS_FAILED = "Failed to update client access"


def _touch_last_login(rows: RowStore, table: str, row_id) -> None:
    # başarısız olsa bile giriş başarılı sayılır
    try:
        rows.update(table, {"id": row_id}, {"last_login": datetime.now(timezone.utc)})
    except RowStoreError as e:
        logger.warning(f"LAST LOGIN UPDATE FAILED | table={table} | id={row_id} | {e}")


def _match_single(candidates: list, password: str, enabled_field: str) -> Optional[dict]:
    # her ret yolu tam olarak bir bcrypt doğrulaması yapar;
    # erişim bayrağı şifre kontrolünden sonra okunur
    if not candidates:
        verify_dummy_password(password)
        return None

    matches = [row for row in candidates if verify_password(password, row.get("password_hash"))]
    if len(matches) != 1 or not matches[0].get(enabled_field):
        return None
    return matches[0]


# =====================================================
# CLIENT
# =====================================================

def verify_client(rows: RowStore, username: str, password: str) -> Result:
    try:
        candidates = rows.select("clients", {"username": username})
    except RowStoreError as e:
        logger.error(f"CLIENT LOOKUP FAILED | username={username} | {e}")
        return Err(FailureKind.CREDENTIAL_REJECTED, INVALID_CLIENT_CREDENTIALS)

    row = _match_single(candidates, password, "access_status")
    if row is None:
        logger.warning(f"LOGIN FAILED | kind=client | username={username}")
        return Err(FailureKind.CREDENTIAL_REJECTED, INVALID_CLIENT_CREDENTIALS)

    _touch_last_login(rows, "clients", row["id"])

    logger.info(f"LOGIN SUCCESS | kind=client | client_id={row['client_id']}")
    return Ok(ClientPrincipal.from_row(row))


def register_client(
    rows: RowStore,
    company_name: str,
    password: str,
    email: Optional[str] = None,
    phone: Optional[str] = None,
) -> Result:
    try:
        client_id = rows.generate_client_id()
    except RowStoreError as e:
        logger.error(f"CLIENT ID GENERATION FAILED | company={company_name} | {e}")
        return Err(FailureKind.IDENTIFIER_GENERATION_FAILED, CLIENT_ID_FAILED)

    try:
        row = rows.insert("clients", {
            "client_id": client_id,
            "username": company_name,
            "company_name": company_name,
            "password_hash": hash_password(password),
            "email": email or None,
            "phone": phone or None,
            "access_status": True,  # otomatik onay
            "subscription_status": "ACTIVE",
        })
    except RowStoreError as e:
        # company_name / username unique kısıtı; client_id sıradan geldiği
        # için çakışmaz, her unique ihlali isim çakışması sayılır
        if e.is_unique_violation:
            logger.warning(f"REGISTER FAILED | duplicate company={company_name}")
            return Err(FailureKind.DUPLICATE_TENANT_NAME, DUPLICATE_COMPANY)

        logger.error(f"REGISTER FAILED | company={company_name} | {e}")
        return Err(FailureKind.UNKNOWN_FAILURE, CREATE_FAILED)

    logger.info(f"REGISTER SUCCESS | client_id={client_id} | company={company_name}")
    return Ok(ClientPrincipal.from_row(row))


# =====================================================
# ADMIN
# =====================================================

def verify_admin(rows: RowStore, username: str, password: str) -> Result:
    try:
        candidates = rows.select("admins", {"username": username})
    except RowStoreError as e:
        logger.error(f"ADMIN LOOKUP FAILED | username={username} | {e}")
        return Err(FailureKind.CREDENTIAL_REJECTED, INVALID_ADMIN_CREDENTIALS)

    row = _match_single(candidates, password, "is_active")
    if row is None:
        logger.warning(f"LOGIN FAILED | kind=admin | username={username}")
        return Err(FailureKind.CREDENTIAL_REJECTED, INVALID_ADMIN_CREDENTIALS)

    _touch_last_login(rows, "admins", row["id"])

    logger.info(f"LOGIN SUCCESS | kind=admin | admin_id={row['id']}")
    return Ok(AdminPrincipal.from_row(row))


# =====================================================
# ADMIN: CLIENT MANAGEMENT
# =====================================================

def list_clients(rows: RowStore) -> Result:
    try:
        clients = rows.select("clients", order_by="-created_at")
    except RowStoreError as e:
        logger.error(f"CLIENT LIST FAILED | {e}")
        return Err(FailureKind.UNKNOWN_FAILURE, "Failed to fetch clients")

    return Ok([ClientPrincipal.from_row(row) for row in clients])


def set_client_access(rows: RowStore, row_id, enabled: bool) -> Result:
    patch = {
        "access_status": enabled,
        "subscription_status": "ACTIVE" if enabled else "INACTIVE",
    }

    try:
        updated = rows.update("clients", {"id": row_id}, patch)
        if not updated:
            return Err(FailureKind.UNKNOWN_FAILURE, UPDATE_ACCESS_FAILED)
        row = rows.select("clients", {"id": row_id})[0]
    except RowStoreError as e:
        logger.error(f"CLIENT ACCESS UPDATE FAILED | id={row_id} | {e}")
        return Err(FailureKind.UNKNOWN_FAILURE, UPDATE_ACCESS_FAILED)

    logger.info(f"CLIENT ACCESS UPDATED | client_id={row['client_id']} | enabled={enabled}")
    return Ok(ClientPrincipal.from_row(row))
