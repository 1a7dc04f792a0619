from __future__ import annotations

import psycopg
import pytest
from prometheus_client import REGISTRY

from auth_service.domain.contracts import LoginInput, SignupInput
from auth_service.domain.errors import (
    AuthenticationError,
    ConflictError,
    InternalError,
    ValidationError,
)
from auth_service.security.passwords import verify_password


def _signup(service, email="a@x.com", password="secret1", username=None, full_name="Ann"):
    return service.signup(
        SignupInput(full_name=full_name, email=email, password=password, username=username)
    )


def test_signup_stores_hash_not_plaintext(service, repository):
    account = _signup(service)
    stored = repository.get_by_email("a@x.com")
    assert stored.id == account.id
    assert stored.password_hash != "secret1"
    assert verify_password("secret1", stored.password_hash)


def test_empty_username_is_stored_as_null(service, repository):
    _signup(service, username="")
    assert repository.get_by_email("a@x.com").username is None


def test_unique_constraint_backstops_racing_signups(service, repository, monkeypatch):
    _signup(service)
    # both requests passed the existence check before either inserted
    monkeypatch.setattr(repository, "email_exists", lambda email: False)

    with pytest.raises(ConflictError):
        _signup(service, password="another")
    assert len(repository.accounts) == 1


def test_signup_store_failure_is_internal(service, repository, monkeypatch):
    def broken(email):
        raise psycopg.OperationalError("boom")

    monkeypatch.setattr(repository, "email_exists", broken)
    with pytest.raises(InternalError) as excinfo:
        _signup(service)
    assert excinfo.value.message == "Server error"
    assert isinstance(excinfo.value.__cause__, psycopg.OperationalError)


def test_signup_validation_runs_before_store(service, repository, monkeypatch):
    def unexpected(email):
        raise AssertionError("store should not be queried")

    monkeypatch.setattr(repository, "email_exists", unexpected)
    with pytest.raises(ValidationError):
        _signup(service, full_name=None)


def test_login_by_username(service):
    account = _signup(service, username="ann")
    user = service.login(LoginInput(identifier="ann", password="secret1"))
    assert user.id == account.id
    assert user.email == "a@x.com"


def test_login_prefers_email_match_over_username(service):
    # a username that looks like someone else's email
    _signup(service, email="first@x.com", username="b@x.com", password="pw-first")
    second = _signup(service, email="b@x.com", password="pw-second")

    user = service.login(LoginInput(identifier="b@x.com", password="pw-second"))
    assert user.id == second.id


def test_duplicate_usernames_resolve_to_oldest_account(service):
    first = _signup(service, email="one@x.com", username="shared", password="pw")
    _signup(service, email="two@x.com", username="shared", password="pw")

    user = service.login(LoginInput(identifier="shared", password="pw"))
    assert user.id == first.id


def test_login_failures_share_one_error(service):
    _signup(service)
    with pytest.raises(AuthenticationError) as unknown:
        service.login(LoginInput(identifier="ghost@x.com", password="secret1"))
    with pytest.raises(AuthenticationError) as mismatch:
        service.login(LoginInput(identifier="a@x.com", password="secret2"))
    assert unknown.value.message == mismatch.value.message
    assert unknown.value.status_code == mismatch.value.status_code == 401


def test_login_returns_no_sensitive_fields(service):
    _signup(service, username="ann")
    user = service.login(LoginInput(identifier="a@x.com", password="secret1"))
    assert not hasattr(user, "password_hash")
    assert not hasattr(user, "username")


def test_unknown_identifier_still_runs_a_bcrypt_check(service, monkeypatch):
    from auth_service.domain import service as service_module

    checked: list[str] = []
    real_verify = service_module.verify_password

    def recording_verify(plain, digest):
        checked.append(digest)
        return real_verify(plain, digest)

    monkeypatch.setattr(service_module, "verify_password", recording_verify)

    for _ in range(2):
        with pytest.raises(AuthenticationError):
            service.login(LoginInput(identifier="ghost@x.com", password="secret1"))

    assert len(checked) == 2
    assert checked[0].startswith("$2b$04$")
    # the placeholder digest is hashed once and reused
    assert checked[0] == checked[1]


def _sample(name, outcome):
    return REGISTRY.get_sample_value(name, {"outcome": outcome}) or 0.0


def test_outcome_counters_increase(service):
    created = _sample("auth_signup_attempts_total", "created")
    conflict = _sample("auth_signup_attempts_total", "conflict")
    success = _sample("auth_login_attempts_total", "success")
    rejected = _sample("auth_login_attempts_total", "rejected")

    _signup(service)
    with pytest.raises(ConflictError):
        _signup(service)
    service.login(LoginInput(identifier="a@x.com", password="secret1"))
    with pytest.raises(AuthenticationError):
        service.login(LoginInput(identifier="a@x.com", password="wrong"))

    assert _sample("auth_signup_attempts_total", "created") == created + 1
    assert _sample("auth_signup_attempts_total", "conflict") == conflict + 1
    assert _sample("auth_login_attempts_total", "success") == success + 1
    assert _sample("auth_login_attempts_total", "rejected") == rejected + 1
