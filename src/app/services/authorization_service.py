"""Authorization Service Interface

Resolves the acting user of an operation into an Actor carrying the admin
flag. Use cases depend on this instead of looking up roles themselves.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.user import Actor


class AuthorizationService(ABC):
    @abstractmethod
    async def get_actor(self, user_id: int) -> Optional[Actor]:
        """
        Resolve a user into an Actor

        Args:
            user_id: Acting user ID

        Returns:
            Actor if the user exists, None otherwise
        """
        pass
