"""Lesson Repository Interface

Defines the contract for lesson persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from src.domain.lesson import Lesson


class LessonRepository(ABC):
    """
    Repository interface for Lesson persistence

    Invoice linkage is written through assign_invoice(), which only claims
    lessons that are still un-invoiced. That guard is what keeps two
    overlapping generator runs from billing the same lesson twice.
    """

    @abstractmethod
    async def create(self, lesson: Lesson) -> Lesson:
        """
        Create a new lesson

        Args:
            lesson: Lesson entity to persist

        Returns:
            Created Lesson with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, lesson_id: int, for_update: bool = False) -> Optional[Lesson]:
        """
        Retrieve lesson by ID

        Args:
            lesson_id: Lesson ID
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            Lesson if found, None otherwise
        """
        pass

    @abstractmethod
    async def update(self, lesson: Lesson) -> Lesson:
        pass

    @abstractmethod
    async def delete(self, lesson: Lesson) -> None:
        pass

    @abstractmethod
    async def get_billable_uninvoiced(
        self, customer_id: int, period_start: datetime, period_end: datetime
    ) -> List[Lesson]:
        """
        Retrieve the lessons a customer can be invoiced for

        Args:
            customer_id: Customer identifier
            period_start: Inclusive lower bound on lesson start
            period_end: Inclusive upper bound on lesson start

        Returns:
            Billable lessons without invoice_id, ordered by start
        """
        pass

    @abstractmethod
    async def assign_invoice(self, lesson_ids: List[int], invoice_id: int) -> int:
        """
        Link lessons to an invoice

        Only lessons whose invoice_id is still empty are updated.

        Args:
            lesson_ids: Lessons to link
            invoice_id: Invoice they were billed on

        Returns:
            Number of lessons actually linked
        """
        pass

    @abstractmethod
    async def unlink_invoice(self, invoice_id: int) -> int:
        """
        Clear invoice_id on every lesson linked to an invoice

        Returns:
            Number of lessons unlinked
        """
        pass
