from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from auth_service.api import routes
from auth_service.api.handlers import install_error_handlers
from auth_service.domain.account import Account
from auth_service.domain.errors import ConflictError
from auth_service.domain.service import AuthService

# bcrypt's minimum cost keeps the suite fast
TEST_ROUNDS = 4


class FakeRepository:
    """In-memory repository mimicking the Postgres users table."""

    def __init__(self) -> None:
        self.accounts: list[Account] = []
        self._seq = 0

    def email_exists(self, email: str) -> bool:
        return any(account.email == email for account in self.accounts)

    def create_user(
        self,
        *,
        full_name: str,
        email: str,
        username: str | None,
        password_hash: str,
    ) -> Account:
        # stands in for the UNIQUE constraint on users.email; checked directly
        # so that patching email_exists cannot bypass it
        if any(account.email == email for account in self.accounts):
            raise ConflictError()
        self._seq += 1
        account = Account(
            id=self._seq,
            full_name=full_name,
            email=email,
            username=username,
            password_hash=password_hash,
        )
        self.accounts.append(account)
        return account

    def find_by_identifier(self, identifier: str) -> Account | None:
        matches = [
            account
            for account in self.accounts
            if account.email == identifier or account.username == identifier
        ]
        matches.sort(key=lambda account: (account.email != identifier, account.id))
        return matches[0] if matches else None

    def get_by_email(self, email: str) -> Account:
        return next(account for account in self.accounts if account.email == email)


@pytest.fixture
def repository() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def service(repository: FakeRepository) -> AuthService:
    return AuthService(repository, bcrypt_rounds=TEST_ROUNDS)


@pytest.fixture
def api_client(service: AuthService):
    """Provide a FastAPI test client with isolated state."""
    app = FastAPI()
    install_error_handlers(app)
    app.include_router(routes.router)
    app.state.auth_service = service

    with TestClient(app) as client:
        yield client
