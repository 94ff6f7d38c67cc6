import pytest

from invix.core import security
from invix.core.errors import Err, FailureKind, Ok, RowStoreError
from invix.core.session import AdminPrincipal, ClientPrincipal
from invix.core.security import verify_password
from invix.db.row_store import RowStore
from invix.services import credential_verifier as cv


class FailingUpdateRows(RowStore):
    def update(self, table, filters, patch):
        raise RowStoreError("connection lost")


class FailingSelectRows(RowStore):
    def select(self, table, filters=None, order_by=None):
        raise RowStoreError("connection lost")


class FailingIdRows(RowStore):
    def generate_client_id(self):
        raise RowStoreError("rpc failed")


class FailingInsertRows(RowStore):
    def insert(self, table, record):
        raise RowStoreError("not null violation", is_unique_violation=False)


# =====================================================
# verify_client
# =====================================================

def test_verify_client_returns_matching_principal(rows, make_client):
    row = make_client("acme", "rightpass")

    result = cv.verify_client(rows, "acme", "rightpass")

    assert isinstance(result, Ok)
    assert isinstance(result.value, ClientPrincipal)
    assert result.value.client_id == row["client_id"]
    assert result.value.company_name == "acme"


def test_verify_client_updates_last_login(rows, make_client):
    make_client("acme", "rightpass")

    cv.verify_client(rows, "acme", "rightpass")

    stored = rows.select("clients", {"username": "acme"})[0]
    assert stored["last_login"] is not None


def test_wrong_password_is_rejected(rows, make_client):
    make_client("acme", "rightpass")

    result = cv.verify_client(rows, "acme", "wrongpass")

    assert isinstance(result, Err)
    assert result.kind == FailureKind.CREDENTIAL_REJECTED
    assert result.message == cv.INVALID_CLIENT_CREDENTIALS


def test_disabled_client_fails_with_correct_password(rows, make_client):
    make_client("acme", "rightpass", access_status=False)

    result = cv.verify_client(rows, "acme", "rightpass")

    assert isinstance(result, Err)
    assert result.kind == FailureKind.CREDENTIAL_REJECTED


def test_rejections_are_indistinguishable(rows, make_client):
    make_client("acme", "rightpass")
    make_client("frozen", "rightpass", access_status=False)

    wrong_password = cv.verify_client(rows, "acme", "nope")
    disabled = cv.verify_client(rows, "frozen", "rightpass")
    unknown = cv.verify_client(rows, "ghost", "rightpass")

    assert wrong_password == disabled == unknown


def test_last_login_failure_does_not_fail_login(db, make_client):
    make_client("acme", "rightpass")

    result = cv.verify_client(FailingUpdateRows(db), "acme", "rightpass")

    assert isinstance(result, Ok)


def test_lookup_error_is_reported_as_rejection(db):
    result = cv.verify_client(FailingSelectRows(db), "acme", "rightpass")

    assert isinstance(result, Err)
    assert result.kind == FailureKind.CREDENTIAL_REJECTED


# =====================================================
# register_client
# =====================================================

def test_register_creates_auto_approved_client(rows):
    result = cv.register_client(rows, "NewCo", "pw")

    assert isinstance(result, Ok)
    stored = rows.select("clients", {"company_name": "NewCo"})[0]
    assert stored["username"] == "NewCo"
    assert stored["access_status"] is True
    assert stored["subscription_status"] == "ACTIVE"
    assert stored["client_id"] == result.value.client_id
    assert stored["password_hash"] != "pw"
    assert verify_password("pw", stored["password_hash"])


def test_registered_client_can_log_in(rows):
    cv.register_client(rows, "NewCo", "pw")

    assert isinstance(cv.verify_client(rows, "NewCo", "pw"), Ok)


def test_register_stores_optional_contact_fields(rows):
    cv.register_client(rows, "NewCo", "pw", email="ops@newco.test", phone="")

    stored = rows.select("clients", {"company_name": "NewCo"})[0]
    assert stored["email"] == "ops@newco.test"
    assert stored["phone"] is None


def test_duplicate_company_name_is_classified(rows):
    cv.register_client(rows, "NewCo", "pw")

    result = cv.register_client(rows, "NewCo", "other")

    assert isinstance(result, Err)
    assert result.kind == FailureKind.DUPLICATE_TENANT_NAME
    assert result.message == cv.DUPLICATE_COMPANY


def test_duplicate_against_seeded_row(rows, make_client):
    make_client("acme", "rightpass")

    result = cv.register_client(rows, "acme", "pw")

    assert result.kind == FailureKind.DUPLICATE_TENANT_NAME


def test_identifier_generation_failure(db):
    result = cv.register_client(FailingIdRows(db), "NewCo", "pw")

    assert isinstance(result, Err)
    assert result.kind == FailureKind.IDENTIFIER_GENERATION_FAILED


def test_other_insert_failure_is_unknown(db):
    result = cv.register_client(FailingInsertRows(db), "NewCo", "pw")

    assert isinstance(result, Err)
    assert result.kind == FailureKind.UNKNOWN_FAILURE
    assert result.message == cv.CREATE_FAILED


def test_generated_client_ids_are_unique(rows):
    first = rows.generate_client_id()
    second = rows.generate_client_id()

    assert first != second
    assert first.startswith("CLT")


# =====================================================
# verify_admin
# =====================================================

def test_verify_admin(rows, make_admin):
    row = make_admin("root", "adminpass")

    result = cv.verify_admin(rows, "root", "adminpass")

    assert isinstance(result, Ok)
    assert isinstance(result.value, AdminPrincipal)
    assert result.value.id == str(row["id"])
    assert result.value.is_super_admin is True


def test_inactive_admin_is_rejected(rows, make_admin):
    make_admin("root", "adminpass", is_active=False)

    result = cv.verify_admin(rows, "root", "adminpass")

    assert isinstance(result, Err)
    assert result.message == cv.INVALID_ADMIN_CREDENTIALS


def test_client_credentials_do_not_open_admin_space(rows, make_client):
    make_client("acme", "rightpass")

    assert isinstance(cv.verify_admin(rows, "acme", "rightpass"), Err)


# =====================================================
# client management
# =====================================================

def test_list_clients_newest_first(rows, make_client):
    make_client("first")
    make_client("second")

    result = cv.list_clients(rows)

    assert [c.username for c in result.value] == ["second", "first"]


def test_set_client_access_toggles_subscription(rows, make_client):
    row = make_client("acme", "rightpass")

    result = cv.set_client_access(rows, row["id"], False)

    assert result.value.access_status is False
    assert result.value.subscription_status == "INACTIVE"
    assert isinstance(cv.verify_client(rows, "acme", "rightpass"), Err)

    result = cv.set_client_access(rows, row["id"], True)

    assert result.value.subscription_status == "ACTIVE"
    assert isinstance(cv.verify_client(rows, "acme", "rightpass"), Ok)


# =====================================================
# timing
# =====================================================

@pytest.fixture
def verify_calls(monkeypatch):
    calls = []
    original = security.pwd_context.verify

    def counting_verify(secret, hashed, *args, **kwargs):
        calls.append(hashed)
        return original(secret, hashed, *args, **kwargs)

    monkeypatch.setattr(security.pwd_context, "verify", counting_verify)
    return calls


@pytest.mark.parametrize("username, password", [
    ("acme", "wrongpass"),
    ("frozen", "rightpass"),
    ("frozen", "wrongpass"),
    ("ghost", "rightpass"),
])
def test_every_client_rejection_runs_one_hash_check(rows, make_client, verify_calls, username, password):
    make_client("acme", "rightpass")
    make_client("frozen", "rightpass", access_status=False)

    result = cv.verify_client(rows, username, password)

    assert isinstance(result, Err)
    assert len(verify_calls) == 1


@pytest.mark.parametrize("username", ["root", "retired", "ghost"])
def test_every_admin_rejection_runs_one_hash_check(rows, make_admin, verify_calls, username):
    make_admin("root", "adminpass")
    make_admin("retired", "adminpass", is_active=False)

    password = "adminpass" if username != "root" else "nope"
    result = cv.verify_admin(rows, username, password)

    assert isinstance(result, Err)
    assert result.message == cv.INVALID_ADMIN_CREDENTIALS
    assert len(verify_calls) == 1


def test_unknown_user_never_matches_the_placeholder_hash(rows):
    first = cv.verify_client(rows, "ghost", "anything")
    second = cv.verify_client(rows, "ghost", "anything")

    assert first == second
    assert first.kind == FailureKind.CREDENTIAL_REJECTED
