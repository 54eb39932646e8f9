"""
User Service.

Registration of identity-provider users.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from studyplanner.backend.core.exceptions import ConflictError
from studyplanner.backend.models.user import User
from studyplanner.backend.repositories.user import UserRepository
from studyplanner.backend.schemas.user import UserRegister
from studyplanner.backend.services.base import BaseService


class UserService(BaseService):
    """Service for user registration records."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = UserRepository(session)

    async def register(self, data: UserRegister) -> User:
        """
        Register a user id once.

        Raises:
            ConflictError: If the user id is already registered
        """
        if await self.repo.exists_by_user_id(data.user_id):
            raise ConflictError("User already exists")

        self._log_operation("Registering user", user_id=data.user_id)

        return await self._execute_db_operation(
            "register_user",
            self.repo.create(user_id=data.user_id, email=data.email),
        )
