"""Database repository for user accounts."""

from __future__ import annotations

import logging

from psycopg import errors
from psycopg.rows import tuple_row
from psycopg_pool import ConnectionPool

from .domain.account import Account
from .domain.errors import ConflictError

logger = logging.getLogger(__name__)

# email uniqueness is enforced here, not only by the pre-check in the service
SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id BIGSERIAL PRIMARY KEY,
        full_name TEXT NOT NULL,
        email TEXT NOT NULL UNIQUE,
        username TEXT,
        password_hash TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS users_username_idx ON users (username)",
)


class UserRepository:
    """Postgres-backed storage for the ``users`` table."""

    def __init__(self, pool: ConnectionPool) -> None:
        """Store the connection pool used for all database interactions."""
        self._pool = pool

    def ensure_schema(self) -> None:
        """Create the ``users`` table and its indexes when missing."""
        with self._pool.connection() as conn:
            with conn.cursor() as cur:
                for statement in SCHEMA_STATEMENTS:
                    cur.execute(statement)
                conn.commit()
        logger.info("users schema ensured")

    def email_exists(self, email: str) -> bool:
        """Return ``True`` when an account is already registered under ``email``."""
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute("SELECT id FROM users WHERE email = %s", (email,))
                return cur.fetchone() is not None

    def create_user(
        self,
        *,
        full_name: str,
        email: str,
        username: str | None,
        password_hash: str,
    ) -> Account:
        """Insert a new account and return it with its store-assigned id.

        Raises
        ------
        ConflictError
            When the unique constraint on ``email`` rejects the insert, which
            covers concurrent signups that both passed the existence check.
        """
        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=tuple_row) as cur:
                    cur.execute(
                        """
                        INSERT INTO users (full_name, email, username, password_hash)
                        VALUES (%s, %s, %s, %s)
                        RETURNING id, full_name, email, username, password_hash
                        """,
                        (full_name, email, username, password_hash),
                    )
                    row = cur.fetchone()
                    conn.commit()
        except errors.UniqueViolation as exc:
            raise ConflictError() from exc
        return self._map_record(row)

    def find_by_identifier(self, identifier: str) -> Account | None:
        """Return the account whose email or username equals ``identifier``.

        An email match wins over a username match; among equal matches the
        oldest account (lowest id) is returned.
        """
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute(
                    """
                    SELECT id, full_name, email, username, password_hash
                    FROM users
                    WHERE email = %s OR username = %s
                    ORDER BY (email = %s) DESC, id ASC
                    LIMIT 1
                    """,
                    (identifier, identifier, identifier),
                )
                row = cur.fetchone()
                if not row:
                    return None
        return self._map_record(row)

    def _map_record(self, row: tuple) -> Account:
        """Convert a raw database tuple into the domain ``Account`` dataclass."""
        return Account(
            id=row[0],
            full_name=row[1],
            email=row[2],
            username=row[3],
            password_hash=row[4],
        )
