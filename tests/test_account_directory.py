from datetime import datetime, timedelta, timezone

import jwt
import pytest

from src.accounts.directory import AccountDirectory
from src.config import Settings
from src.storage.record_store import InMemoryRecordStore
from src.storage.sqlite_record_store import SQLiteRecordStore
from src.templates.fixtures.templates import DEFAULT_TEMPLATES
from src.utils.errors import EmailAlreadyRegistered, InvalidCredentials, InvalidInput, Unauthorized


class DummyLogger:
    def debug(self, *args, **kwargs): pass
    def info(self, *args, **kwargs): pass
    def warning(self, *args, **kwargs): pass


def make_settings(**overrides):
    params = {"jwt_secret": "test-secret", "bcrypt_rounds": 4, "openai_api_key": None}
    params.update(overrides)
    return Settings(_env_file=None, **params)


@pytest.fixture
def record_store():
    return InMemoryRecordStore(seed={"templates": DEFAULT_TEMPLATES, "users": []})


@pytest.fixture
def directory(record_store):
    return AccountDirectory(record_store, make_settings(), DummyLogger())


def test_register_seeds_default_templates_and_issues_token(directory, record_store):
    account, session = directory.register("Ada@Example.com", "s3cret")

    assert account.id
    assert account.email == "Ada@Example.com"
    assert account.password_hash != "s3cret"
    assert [t.id for t in account.templates] == ["email_follow_up", "bug_report"]

    assert session.user.id == account.id
    assert session.user.email == "Ada@Example.com"

    stored = record_store.read_all("users")
    assert len(stored) == 1
    assert stored[0]["id"] == account.id
    assert len(stored[0]["templates"]) == 2


def test_register_assigns_distinct_ids(directory):
    a, _ = directory.register("a@example.com", "pw")
    b, _ = directory.register("b@example.com", "pw")
    assert a.id != b.id


def test_register_rejects_email_differing_only_in_case(directory, record_store):
    directory.register("sam@example.com", "pw")

    with pytest.raises(EmailAlreadyRegistered):
        directory.register("SAM@Example.COM", "other")

    assert len(record_store.read_all("users")) == 1


@pytest.mark.parametrize("email, password", [("", "pw"), ("x@example.com", ""), (None, "pw")])
def test_register_requires_email_and_password(directory, email, password):
    with pytest.raises(InvalidInput):
        directory.register(email, password)


def test_authenticate_is_case_insensitive_on_email(directory):
    account, _ = directory.register("sam@example.com", "pw")

    session = directory.authenticate("Sam@EXAMPLE.com", "pw")

    assert session.user.id == account.id
    assert session.user.email == "sam@example.com"


def test_authenticate_rejects_wrong_password(directory):
    directory.register("sam@example.com", "pw")

    with pytest.raises(InvalidCredentials):
        directory.authenticate("sam@example.com", "wrong")


def test_authenticate_rejects_unknown_email(directory):
    with pytest.raises(InvalidCredentials):
        directory.authenticate("ghost@example.com", "pw")


def test_resolve_roundtrips_session_token(directory):
    account, session = directory.register("sam@example.com", "pw")

    identity = directory.resolve(session.token)

    assert identity.account_id == account.id
    assert identity.email == "sam@example.com"


def test_token_valid_for_seven_days(directory):
    _, session = directory.register("sam@example.com", "pw")

    payload = jwt.decode(session.token, "test-secret", algorithms=["HS256"])

    assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())


def test_resolve_rejects_tampered_token(directory):
    _, session = directory.register("sam@example.com", "pw")

    with pytest.raises(Unauthorized):
        directory.resolve(session.token + "x")


def test_resolve_rejects_token_signed_with_other_secret(record_store):
    issuer = AccountDirectory(record_store, make_settings(jwt_secret="other"), DummyLogger())
    verifier = AccountDirectory(record_store, make_settings(), DummyLogger())
    _, session = issuer.register("sam@example.com", "pw")

    with pytest.raises(Unauthorized):
        verifier.resolve(session.token)


def test_resolve_rejects_expired_token(directory):
    past = datetime.now(timezone.utc) - timedelta(days=8)
    token = jwt.encode(
        {"sub": "acct", "email": "x@example.com", "iat": past, "exp": past + timedelta(days=7)},
        "test-secret",
        algorithm="HS256",
    )

    with pytest.raises(Unauthorized):
        directory.resolve(token)


@pytest.mark.parametrize("token", ["", None, "not-a-jwt"])
def test_resolve_rejects_missing_or_garbage_token(directory, token):
    with pytest.raises(Unauthorized):
        directory.resolve(token)


def test_get_and_save_account(directory):
    account, _ = directory.register("sam@example.com", "pw")
    account.templates = account.templates[:1]

    directory.save_account(account)

    assert [t.id for t in directory.get_account(account.id).templates] == ["email_follow_up"]
    assert directory.get_account("missing") is None


def test_register_seeds_builtin_catalog_on_unseeded_memory_store():
    store = InMemoryRecordStore()
    directory = AccountDirectory(store, make_settings(), DummyLogger())

    account, _ = directory.register("sam@example.com", "pw")

    assert [t.id for t in account.templates] == ["email_follow_up", "bug_report"]
    assert [r["id"] for r in store.read_all("templates")] == ["email_follow_up", "bug_report"]


def test_register_seeds_builtin_catalog_on_fresh_sqlite_store(tmp_path):
    store = SQLiteRecordStore(str(tmp_path / "fresh.db"))
    directory = AccountDirectory(store, make_settings(), DummyLogger())

    account, _ = directory.register("sam@example.com", "pw")

    assert [t.id for t in account.templates] == ["email_follow_up", "bug_report"]
    reloaded = directory.get_account(account.id)
    assert [t.id for t in reloaded.templates] == ["email_follow_up", "bug_report"]


def test_oversized_catalog_is_trimmed_to_account_limit():
    catalog = [{"id": f"t{i}", "name": f"T{i}", "body": "{{x}}"} for i in range(6)]
    directory = AccountDirectory(InMemoryRecordStore(seed={"templates": catalog}), make_settings(), DummyLogger())

    account, _ = directory.register("sam@example.com", "pw")

    assert [t.id for t in account.templates] == ["t0", "t1", "t2", "t3"]


def test_catalog_with_repeated_ids_keeps_first_occurrence():
    catalog = [
        {"id": "a", "name": "first", "body": "1"},
        {"id": "b", "name": "B", "body": "2"},
        {"id": "a", "name": "second", "body": "3"},
    ]
    directory = AccountDirectory(InMemoryRecordStore(seed={"templates": catalog}), make_settings(), DummyLogger())

    account, _ = directory.register("sam@example.com", "pw")

    assert [(t.id, t.name) for t in account.templates] == [("a", "first"), ("b", "B")]
