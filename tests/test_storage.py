import pytest

from invix.core.security import new_session_token, sign_value, unsign_value
from invix.core.storage import CLIENT_ID_KEY, CLIENT_SESSION_KEY, DurableStorage, MemoryStorage


def test_memory_storage_remove_is_silent_for_missing_keys():
    storage = MemoryStorage({"a": "1"})

    storage.remove("a")
    storage.remove("a")

    assert storage.get("a") is None


def test_signed_value_round_trip():
    signed = sign_value(CLIENT_ID_KEY, "CLT000001")

    assert signed != "CLT000001"
    assert unsign_value(CLIENT_ID_KEY, signed) == "CLT000001"


def test_signed_value_is_bound_to_its_key():
    signed = sign_value(CLIENT_SESSION_KEY, "client_CLT000001_1_aa")

    assert unsign_value(CLIENT_ID_KEY, signed) is None


def test_tampered_value_is_rejected():
    signed = sign_value(CLIENT_ID_KEY, "CLT000001")
    header, payload, signature = signed.split(".")

    assert unsign_value(CLIENT_ID_KEY, f"{header}.{payload}.{signature[::-1]}") is None
    assert unsign_value(CLIENT_ID_KEY, "CLT000002") is None


def test_session_token_shape():
    token = new_session_token("client", "CLT000001")

    kind, principal_id, timestamp, suffix = token.split("_")
    assert kind == "client"
    assert principal_id == "CLT000001"
    assert timestamp.isdigit()
    assert len(suffix) == 8


def test_partial_storage_backend_cannot_be_created():
    class ReadOnlyStorage(DurableStorage):
        def get(self, key):
            return None

    with pytest.raises(TypeError):
        ReadOnlyStorage()
