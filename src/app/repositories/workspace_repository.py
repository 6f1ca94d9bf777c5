"""Workspace Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.workspace import Workspace


class WorkspaceRepository(ABC):
    @abstractmethod
    async def get_by_id(self, workspace_id: int) -> Optional[Workspace]:
        pass

    @abstractmethod
    async def list_all(self) -> List[Workspace]:
        """
        Retrieve every workspace

        Used by the monthly invoicing job to process all tenants.
        """
        pass
