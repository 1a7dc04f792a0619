"""Domain-level request contracts shared by multiple layers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class SignupInput:
    """Fields submitted when registering a new account."""

    full_name: str | None
    email: str | None
    password: str | None
    username: str | None = None


@dataclass(slots=True)
class LoginInput:
    """Credentials submitted at login; ``identifier`` is an email or a username."""

    identifier: str | None
    password: str | None
