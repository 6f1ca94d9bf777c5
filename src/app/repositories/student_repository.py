"""Student Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.student import Student


class StudentRepository(ABC):
    @abstractmethod
    async def get_by_id(self, student_id: int) -> Optional[Student]:
        pass
