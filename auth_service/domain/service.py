"""Signup and login workflows over the user repository and password hasher."""

from __future__ import annotations

import logging
import secrets
from typing import Protocol

import psycopg

from .account import Account, AuthenticatedUser
from .contracts import LoginInput, SignupInput
from .errors import AuthenticationError, ConflictError, InternalError, ValidationError
from ..metrics import LOGIN_ATTEMPTS, SIGNUP_ATTEMPTS
from ..security.passwords import DEFAULT_ROUNDS, hash_password, verify_password

logger = logging.getLogger(__name__)


class UserStore(Protocol):
    def email_exists(self, email: str) -> bool: ...

    def create_user(
        self,
        *,
        full_name: str,
        email: str,
        username: str | None,
        password_hash: str,
    ) -> Account: ...

    def find_by_identifier(self, identifier: str) -> Account | None: ...


class AuthService:
    """Account registration and credential checks."""

    def __init__(self, repository: UserStore, *, bcrypt_rounds: int = DEFAULT_ROUNDS) -> None:
        """Store the repository and the bcrypt cost used for new digests."""
        self._repository = repository
        self._bcrypt_rounds = bcrypt_rounds
        self._dummy_digest: str | None = None

    def signup(self, payload: SignupInput) -> Account:
        """Register a new account.

        Raises
        ------
        ValidationError
            ``full_name``, ``email`` or ``password`` is missing or empty.
        ConflictError
            The email is already registered, either found by the pre-check or
            rejected by the store's unique constraint.
        InternalError
            Hashing or storage failed.
        """
        if not payload.full_name or not payload.email or not payload.password:
            SIGNUP_ATTEMPTS.labels(outcome="invalid").inc()
            raise ValidationError()

        try:
            if self._repository.email_exists(payload.email):
                raise ConflictError()
            password_hash = hash_password(payload.password, self._bcrypt_rounds)
            account = self._repository.create_user(
                full_name=payload.full_name,
                email=payload.email,
                username=payload.username or None,
                password_hash=password_hash,
            )
        except ConflictError:
            SIGNUP_ATTEMPTS.labels(outcome="conflict").inc()
            logger.info("signup rejected: email already registered")
            raise
        except (psycopg.Error, ValueError) as exc:
            SIGNUP_ATTEMPTS.labels(outcome="error").inc()
            logger.exception("signup failed")
            raise InternalError() from exc

        SIGNUP_ATTEMPTS.labels(outcome="created").inc()
        logger.info("account %s created", account.id)
        return account

    def login(self, payload: LoginInput) -> AuthenticatedUser:
        """Check credentials and return the matching user profile.

        An unknown identifier and a wrong password both raise the same
        :class:`AuthenticationError`.
        """
        if not payload.identifier or not payload.password:
            LOGIN_ATTEMPTS.labels(outcome="invalid").inc()
            raise ValidationError()

        try:
            account = self._repository.find_by_identifier(payload.identifier)
        except psycopg.Error as exc:
            LOGIN_ATTEMPTS.labels(outcome="error").inc()
            logger.exception("login lookup failed")
            raise InternalError() from exc

        if account is None:
            # an unknown account costs one bcrypt check, same as a wrong password
            verify_password(payload.password, self._unknown_account_digest())
            matched = False
        else:
            matched = verify_password(payload.password, account.password_hash)

        if not matched:
            LOGIN_ATTEMPTS.labels(outcome="rejected").inc()
            logger.warning("login rejected")
            raise AuthenticationError()

        LOGIN_ATTEMPTS.labels(outcome="success").inc()
        logger.info("account %s logged in", account.id)
        return AuthenticatedUser.from_account(account)

    def _unknown_account_digest(self) -> str:
        """Digest checked when no account matches, hashed once at the service's cost."""
        if self._dummy_digest is None:
            self._dummy_digest = hash_password(secrets.token_urlsafe(16), self._bcrypt_rounds)
        return self._dummy_digest
