import tempfile
from pathlib import Path

from chat_core.domain.exceptions import StorageUnavailableError
from chat_core.identity import IdentityStore, generate_identifier, is_valid_identifier
from chat_core.infrastructure.storage.json_store import JsonFileStorage
from chat_core.infrastructure.storage.memory_store import MemoryStorage


class BrokenStorage:
    scope = "session"

    def get_item(self, key):
        raise StorageUnavailableError(code="STORE_READ_ERROR", message="no storage")

    def set_item(self, key, value):
        raise StorageUnavailableError(code="STORE_WRITE_ERROR", message="no storage")

    def remove_item(self, key):
        pass

    def clear(self):
        pass


def test_generate_identifier_is_alnum_and_bounded():
    value = generate_identifier()
    assert len(value) == 32
    assert value.isalnum()
    assert len(generate_identifier(8)) == 8


def test_is_valid_identifier():
    assert is_valid_identifier("a" * 32)
    assert not is_valid_identifier("a" * 33)
    assert not is_valid_identifier("")
    assert not is_valid_identifier(None)
    assert not is_valid_identifier(12345)


def test_session_id_is_stable():
    session = MemoryStorage()
    store = IdentityStore(session_storage=session, persistent_storage=MemoryStorage())
    first = store.get_session_id()
    assert first
    assert store.get_session_id() == first
    assert session.get_item("sessionId") == first


def test_existing_valid_value_is_reused():
    store = IdentityStore(
        session_storage=MemoryStorage({"sessionId": "s-1"}),
        persistent_storage=MemoryStorage({"userId": "u-1"}),
    )
    assert store.get_session_id() == "s-1"
    assert store.get_user_id() == "u-1"


def test_overlength_value_is_regenerated():
    persistent = MemoryStorage({"userId": "x" * 40})
    store = IdentityStore(session_storage=MemoryStorage(), persistent_storage=persistent)
    user_id = store.get_user_id()
    assert user_id != "x" * 40
    assert len(user_id) <= 32
    assert persistent.get_item("userId") == user_id


def test_malformed_value_is_regenerated():
    with tempfile.TemporaryDirectory() as d:
        persistent = JsonFileStorage(root=Path(d))
        persistent.set_item("userId", 42)
        store = IdentityStore(session_storage=MemoryStorage(), persistent_storage=persistent)
        user_id = store.get_user_id()
        assert isinstance(user_id, str) and 0 < len(user_id) <= 32
        assert persistent.get_item("userId") == user_id


def test_user_id_survives_restart():
    with tempfile.TemporaryDirectory() as d:
        root = Path(d) / ".storage"
        first = IdentityStore(MemoryStorage(), JsonFileStorage(root=root)).get_user_id()
        second = IdentityStore(MemoryStorage(), JsonFileStorage(root=root))
        assert second.get_user_id() == first
        # 新会话得到新的 session id
        assert second.get_session_id()


def test_session_and_user_ids_differ():
    store = IdentityStore(MemoryStorage(), MemoryStorage())
    ids = store.identifiers()
    assert ids.session_id != ids.user_id


def test_unavailable_storage_returns_empty_string():
    store = IdentityStore(session_storage=None, persistent_storage=BrokenStorage())
    assert store.get_session_id() == ""
    assert store.get_user_id() == ""


def test_user_id_regenerated_when_file_is_not_utf8():
    with tempfile.TemporaryDirectory() as d:
        persistent = JsonFileStorage(root=Path(d))
        persistent.path.write_bytes(b'{"userId": "\xff\xfe"}')
        store = IdentityStore(session_storage=MemoryStorage(), persistent_storage=persistent)
        user_id = store.get_user_id()
        assert 0 < len(user_id) <= 32
        assert persistent.get_item("userId") == user_id
