# lumina/services/user_service.py

import logging

from lumina.core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from lumina.entities.user import UserRole
from lumina.infrastructure.database.models.user_model import UserModel
from lumina.infrastructure.security.password_hasher import PasswordDigest, PasswordHasher
from lumina.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, user_repository: UserRepository) -> None:
        self._user_repository = user_repository

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.USER,
        avatar: str = "",
    ) -> UserModel:
        email = email.strip().lower()
        if self._user_repository.get_by_email(email) is not None:
            raise ConflictError("Email already registered.")

        digest = PasswordHasher.hash_password(password)
        model = UserModel(
            name=name.strip(),
            email=email,
            role=UserRole(role).value,
            avatar=avatar or "",
            password_algo=digest.algo,
            password_iterations=digest.iterations,
            password_hash=digest.hash,
            password_salt=digest.salt,
        )
        user = self._user_repository.add(model)
        logger.info("user %s registered as %s", user.id, user.role)
        return user

    def get_user(self, *, user_id: int) -> UserModel:
        user = self._user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found.")
        return user

    def authenticate(self, *, email: str, password: str) -> UserModel:
        user = self._user_repository.get_by_email(email.strip().lower())
        if user is None:
            raise UnauthorizedError("Invalid credentials.")

        digest = PasswordDigest(
            algo=user.password_algo,
            iterations=user.password_iterations,
            hash=user.password_hash,
            salt=user.password_salt,
        )
        if not PasswordHasher.verify_password(password, digest):
            raise UnauthorizedError("Invalid credentials.")
        return user
