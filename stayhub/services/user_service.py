"""Service for user registration, login and bearer-token identity."""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Tuple

import bcrypt
import jwt

from stayhub.domain.errors import Forbidden, NotFound, Unauthenticated, ValidationError
from stayhub.domain.models.user import User
from stayhub.domain.timeutils import utcnow
from stayhub.infrastructure.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Identity:
    """Verified caller identity carried by a bearer token."""

    user_id: str
    email: str


class UserService:
    """Service for managing user authentication and registration."""

    def __init__(
        self,
        user_repository: UserRepository,
        jwt_secret: str,
        jwt_algorithm: str = "HS256",
        jwt_expiration_hours: int = 24 * 7,
    ):
        if jwt_secret == "change-me":
            logger.warning("JWT_SECRET is using the default value. Configure a real secret in production.")
        self.user_repository = user_repository
        self.jwt_secret = jwt_secret
        self.jwt_algorithm = jwt_algorithm
        self.jwt_expiration_hours = jwt_expiration_hours

    def register(self, email: str, password: str, name: str) -> Tuple[User, str]:
        """
        Register a new user.

        Args:
            email: User email
            password: Plain text password
            name: Display name

        Returns:
            Tuple of (User, access_token)

        Raises:
            ValidationError: If a field is blank or the email is already registered
        """
        email_clean = (email or "").strip().lower()
        name_clean = (name or "").strip()
        if not email_clean or not password or not name_clean:
            raise ValidationError("Email, password and name are required")

        with self.user_repository.locked():
            if self.user_repository.get_by_email(email_clean):
                raise ValidationError("A user with this email already exists")

            password_hash = bcrypt.hashpw(
                password.encode("utf-8"), bcrypt.gensalt()
            ).decode("utf-8")

            user = self.user_repository.create(
                email=email_clean,
                password_hash=password_hash,
                name=name_clean,
            )

        logger.info("Registered user %s (%s)", user.id, user.email)
        return user, self.create_token(user)

    def authenticate(self, email: str, password: str) -> Tuple[User, str]:
        """
        Authenticate a user with email and password.

        Returns:
            Tuple of (User, access_token)

        Raises:
            ValidationError: If email or password is missing
            Unauthenticated: If the credentials do not match
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self.user_repository.get_by_email(email)
        if not user or not bcrypt.checkpw(
            password.encode("utf-8"), user.password_hash.encode("utf-8")
        ):
            raise Unauthenticated("Invalid email or password")

        return user, self.create_token(user)

    def create_token(self, user: User) -> str:
        now = utcnow()
        payload = {
            "userId": user.id,
            "email": user.email,
            "iat": now,
            "exp": now + timedelta(hours=self.jwt_expiration_hours),
        }
        return jwt.encode(payload, self.jwt_secret, algorithm=self.jwt_algorithm)

    def resolve_identity(self, token: Optional[str]) -> Identity:
        """
        Verify a bearer token and return the identity it carries.

        Raises:
            Unauthenticated: If no token was supplied
            Forbidden: If the token is invalid or expired
        """
        if not token:
            raise Unauthenticated()
        try:
            payload = jwt.decode(token, self.jwt_secret, algorithms=[self.jwt_algorithm])
        except jwt.InvalidTokenError as exc:
            raise Forbidden("Invalid or expired access token") from exc

        user_id = payload.get("userId")
        if not user_id:
            raise Forbidden("Invalid or expired access token")
        return Identity(user_id=str(user_id), email=str(payload.get("email", "")))

    def get_profile(self, user_id: str) -> User:
        user = self.user_repository.get_by_id(user_id)
        if not user:
            raise NotFound("User not found")
        return user
