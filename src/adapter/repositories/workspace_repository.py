"""SQLAlchemy Workspace Repository Implementation"""

from typing import List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.workspace_repository import WorkspaceRepository
from src.domain.workspace import Workspace


class SqlAlchemyWorkspaceRepository(WorkspaceRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, workspace_id: int) -> Optional[Workspace]:
        result = await self.session.execute(select(Workspace).where(Workspace.id == workspace_id))
        return result.scalar_one_or_none()

    async def list_all(self) -> List[Workspace]:
        result = await self.session.execute(select(Workspace).order_by(Workspace.id))
        return list(result.scalars().all())
