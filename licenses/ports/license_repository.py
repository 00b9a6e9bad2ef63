"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def add(self, license: License) -> License:
        """
        Insert a license whose key is not yet taken.

        Args:
            license: License entity to insert

        Returns:
            Inserted license entity

        Raises:
            LicenseKeyCollisionError: If the key already exists
        """
        pass

    @abstractmethod
    async def save(self, license: License) -> License:
        """
        Save a license entity, replacing the stored version.

        Args:
            license: License entity to save

        Returns:
            Saved license entity
        """
        pass

    @abstractmethod
    async def find_by_key(self, key: str) -> Optional[License]:
        """
        Find a license by its normalised key.

        Args:
            key: License key

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[License]:
        """Return all licenses, oldest first."""
        pass
