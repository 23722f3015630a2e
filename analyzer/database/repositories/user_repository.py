from typing import Any

from psycopg.errors import UniqueViolation
from psycopg.rows import dict_row

from analyzer.analysis.exceptions import ConflictError
from analyzer.database.connection import get_connection, storage_errors
from analyzer.database.models import UserRecord

_COLUMNS = "id, username, password_hash, created_at, updated_at"


class UserRepository:
    """Database operations for the users table."""

    def find_by_username(self, username: str) -> UserRecord | None:
        return self._find_one("username = %s", (username,))

    def find_by_id(self, user_id: int) -> UserRecord | None:
        return self._find_one("id = %s", (user_id,))

    def create(self, username: str, password_hash: str) -> UserRecord:
        """Insert a new user.

        Raises:
            ConflictError: if the username is already taken.
            PersistenceFailureError: on any other database failure.
        """
        with storage_errors("create user"), get_connection() as conn:
            try:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"""
                        INSERT INTO users (username, password_hash)
                        VALUES (%s, %s)
                        RETURNING {_COLUMNS}
                        """,
                        (username, password_hash),
                    )
                    row = cur.fetchone()
            except UniqueViolation as exc:
                raise ConflictError(f"User '{username}' already exists") from exc
            conn.commit()

        if row is None:
            raise RuntimeError("INSERT INTO users returned no row")
        return self._to_record(row)

    def _find_one(self, where: str, params: tuple[Any, ...]) -> UserRecord | None:
        with storage_errors("load user"), get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(f"SELECT {_COLUMNS} FROM users WHERE {where}", params)
                row = cur.fetchone()

        if row is None:
            return None
        return self._to_record(row)

    @staticmethod
    def _to_record(row: dict[str, Any]) -> UserRecord:
        return UserRecord(
            id=row["id"],
            username=row["username"],
            password_hash=row["password_hash"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
