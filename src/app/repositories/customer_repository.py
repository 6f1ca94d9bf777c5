"""Customer Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.customer import Customer


class CustomerRepository(ABC):
    @abstractmethod
    async def get_by_id(self, customer_id: int) -> Optional[Customer]:
        pass

    @abstractmethod
    async def list_by_workspace(self, workspace_id: int) -> List[Customer]:
        """
        Retrieve all customers of a workspace, ordered by ID

        Args:
            workspace_id: Workspace identifier

        Returns:
            List of customers
        """
        pass
