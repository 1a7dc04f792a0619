"""Prometheus counters for signup and login outcomes."""

from __future__ import annotations

from prometheus_client import Counter

SIGNUP_ATTEMPTS = Counter(
    "auth_signup_attempts_total",
    "Signup requests grouped by outcome.",
    ["outcome"],
)

LOGIN_ATTEMPTS = Counter(
    "auth_login_attempts_total",
    "Login requests grouped by outcome.",
    ["outcome"],
)
