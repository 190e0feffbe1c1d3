"""
Professional Directory Port

Interface for reading professionals following Clean Architecture.
"""

from typing import Protocol, runtime_checkable

from care_scheduling.domains.assistance.domain.entities import Professional
from care_scheduling.domains.assistance.domain.value_objects import Specialty


@runtime_checkable
class IProfessionalDirectory(Protocol):
    """
    Professional directory interface.

    Professionals are owned by the directory; the scheduling engine only
    reads them.
    """

    async def find_by_id(self, professional_id: str) -> Professional | None:
        """
        Find professional by ID.

        Args:
            professional_id: Unique professional identifier

        Returns:
            Professional if found, None otherwise
        """
        ...

    async def find_by_specialty(self, specialty: Specialty) -> list[Professional]:
        """Find professionals of a specialty, in any status."""
        ...

    async def find_active(self) -> list[Professional]:
        """Find professionals currently accepting appointments."""
        ...
