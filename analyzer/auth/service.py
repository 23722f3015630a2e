from analyzer.analysis.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    InvalidInputError,
    UnauthorizedError,
)
from analyzer.analysis.models import Subject
from analyzer.auth.passwords import dummy_hash, hash_password, verify_password
from analyzer.auth.tokens import TokenIssuer
from analyzer.database.models import UserRecord
from analyzer.database.repositories.user_repository import UserRepository
from analyzer.logging.logger import Log


class AuthService:
    """Registration, login and token authentication for subjects."""

    def __init__(
        self,
        user_repo: UserRepository,
        tokens: TokenIssuer,
        *,
        username_min_length: int = 3,
        password_min_length: int = 6,
    ) -> None:
        self._user_repo = user_repo
        self._tokens = tokens
        self._username_min_length = username_min_length
        self._password_min_length = password_min_length

    def register(self, username: str, password: str) -> str:
        """Create a subject and return a token for it.

        Raises:
            InvalidInputError: if username or password is too short.
            ConflictError: if the username is taken. Nothing is stored.
        """
        self._validate_registration(username, password)
        if self._user_repo.find_by_username(username) is not None:
            raise ConflictError(f"User '{username}' already exists")

        user = self._user_repo.create(username, hash_password(password))
        Log.info(f"Registered user {user.id}")
        return self._tokens.issue(user.id)

    def login(self, username: str, password: str) -> str:
        """Return a token for valid credentials.

        Raises:
            InvalidCredentialsError: for an unknown user or a wrong password alike.
        """
        user = self._user_repo.find_by_username(username)
        if user is None:
            verify_password(password, dummy_hash())
            raise InvalidCredentialsError()
        if not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()
        return self._tokens.issue(user.id)

    def authenticate(self, token: str | None) -> Subject:
        """Resolve a token to its subject.

        Raises:
            UnauthorizedError: if the token is missing, invalid, expired or
                names a subject that no longer exists.
        """
        if not token:
            raise UnauthorizedError("No token, authorization denied")
        subject_id = self._tokens.verify(token)
        user = self._user_repo.find_by_id(subject_id)
        if user is None:
            raise UnauthorizedError(f"Token subject {subject_id} no longer exists")
        return _to_subject(user)

    def _validate_registration(self, username: str, password: str) -> None:
        errors: list[dict[str, str]] = []
        if len(username.strip()) < self._username_min_length:
            errors.append({
                "field": "username",
                "msg": f"Username must be at least {self._username_min_length} characters long",
            })
        if len(password) < self._password_min_length:
            errors.append({
                "field": "password",
                "msg": f"Password must be at least {self._password_min_length} characters long",
            })
        if errors:
            raise InvalidInputError("; ".join(e["msg"] for e in errors), errors=errors)


def _to_subject(user: UserRecord) -> Subject:
    return Subject(id=user.id, username=user.username, created_at=user.created_at)
