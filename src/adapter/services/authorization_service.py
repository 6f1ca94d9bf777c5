"""Repository-backed Authorization Service"""

import logging
from typing import Optional
from src.app.repositories.user_repository import UserRepository
from src.app.services.authorization_service import AuthorizationService
from src.domain.user import Actor

logger = logging.getLogger(__name__)


class RepositoryAuthorizationService(AuthorizationService):
    """Resolves actors from the users table"""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def get_actor(self, user_id: int) -> Optional[Actor]:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            logger.warning(f"Unknown acting user {user_id}")
            return None
        return Actor(user_id=user.id, is_admin=bool(user.is_admin))
