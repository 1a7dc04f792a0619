from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Account:
    """Stored user account, including the bcrypt digest of its password."""

    id: int
    full_name: str
    email: str
    username: str | None
    password_hash: str


@dataclass(slots=True)
class AuthenticatedUser:
    """Profile handed back after a successful login."""

    id: int
    full_name: str
    email: str

    @classmethod
    def from_account(cls, account: Account) -> "AuthenticatedUser":
        """Project the public fields of a stored account."""
        return cls(id=account.id, full_name=account.full_name, email=account.email)
