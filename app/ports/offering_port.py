from abc import ABC, abstractmethod
from typing import Any


class OfferingPort(ABC):
    @abstractmethod
    async def list_offerings(self, requestor_id: str | None = None) -> list[dict[str, Any]]:
        """
        Return offerings in storage (creation) order.
        When ``requestor_id`` is given, only that user's offerings.
        """
        ...

    @abstractmethod
    async def create_offering(self, data: dict[str, Any]) -> dict[str, Any]:
        """Insert a new offering and return the created row."""
        ...

    @abstractmethod
    async def get_offering(self, offering_id: str) -> dict[str, Any] | None:
        """Fetch a single offering by ID."""
        ...

    @abstractmethod
    async def update_offering(
        self, offering_id: str, data: dict[str, Any]
    ) -> dict[str, Any] | None:
        """Partially update an offering; returns the new row, or None if missing."""
        ...

    @abstractmethod
    async def delete_offering(self, offering_id: str) -> bool:
        """Hard-delete an offering. Returns False if it did not exist."""
        ...

    @abstractmethod
    async def increment_applications(self, offering_id: str) -> None:
        """Add one to the offering's applications_count."""
        ...
