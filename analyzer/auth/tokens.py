from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import jwt

from analyzer.analysis.exceptions import UnauthorizedError


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenIssuer:
    """Issues and verifies signed, expiring subject tokens."""

    def __init__(
        self,
        *,
        secret: str,
        algorithm: str = "HS256",
        ttl_minutes: int = 60,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = timedelta(minutes=ttl_minutes)
        self._clock = clock

    def issue(self, subject_id: int) -> str:
        now = self._clock()
        payload = {
            "user": {"id": subject_id},
            "iat": now,
            "exp": now + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> int:
        """Return the subject id carried by a valid token.

        Raises:
            UnauthorizedError: if the token is malformed, tampered with or expired.
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError as exc:
            raise UnauthorizedError("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise UnauthorizedError(f"Token is not valid: {exc}") from exc

        user = payload.get("user")
        subject_id = user.get("id") if isinstance(user, dict) else None
        if not isinstance(subject_id, int):
            raise UnauthorizedError("Token payload carries no subject")
        return subject_id
