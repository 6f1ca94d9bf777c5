"""SQLAlchemy Student Repository Implementation"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.student_repository import StudentRepository
from src.domain.student import Student


class SqlAlchemyStudentRepository(StudentRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, student_id: int) -> Optional[Student]:
        result = await self.session.execute(select(Student).where(Student.id == student_id))
        return result.scalar_one_or_none()
