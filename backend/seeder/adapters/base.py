"""Base user rating store interface"""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List

from seeder.models.rating import RatingTriple
from seeder.models.user import SeedUser


class UserRatingStore(ABC):
    """Abstract base class for stores holding user rating documents"""

    @abstractmethod
    async def connect(self) -> None:
        """Establish the store connection"""
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the store connection. Safe to call when never connected."""
        pass

    @abstractmethod
    async def load_users(self) -> List[SeedUser]:
        """Return every user record"""
        pass

    @abstractmethod
    async def apply_ratings(
        self,
        user: SeedUser,
        ratings: Dict[str, RatingTriple],
        merge: bool = False,
    ) -> None:
        """Persist ratings onto the user's ranking field"""
        pass

    @asynccontextmanager
    async def session(self) -> AsyncIterator["UserRatingStore"]:
        """Hold the connection for the duration of the block"""
        try:
            await self.connect()
            yield self
        finally:
            await self.disconnect()
