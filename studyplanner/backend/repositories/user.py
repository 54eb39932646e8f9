"""
User Repository.

Registrations are global rather than owner-scoped: the lookup key is
the identity provider's user id.
"""

from studyplanner.backend.models.user import User
from studyplanner.backend.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_user_id(self, user_id: str) -> User | None:
        return await self._first(self._select(User.user_id == user_id))

    async def exists_by_user_id(self, user_id: str) -> bool:
        return await self.get_by_user_id(user_id) is not None
