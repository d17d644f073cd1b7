from abc import ABC, abstractmethod
from typing import Any


class ApplicationPort(ABC):
    @abstractmethod
    async def create_application(self, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert an application and return the created row.
        Raises DuplicateApplicationError if the applicant already applied.
        """
        ...

    @abstractmethod
    async def find_application(
        self, offering_id: str, applicant_id: str
    ) -> dict[str, Any] | None:
        """Find the application of one applicant to one offering."""
        ...

    @abstractmethod
    async def list_applications_for_offering(self, offering_id: str) -> list[dict[str, Any]]:
        """All applications to an offering, oldest first."""
        ...

    @abstractmethod
    async def delete_applications_for_offering(self, offering_id: str) -> None:
        """Remove every application attached to an offering."""
        ...
