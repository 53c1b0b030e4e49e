from seeder.adapters.base import UserRatingStore
from seeder.adapters.mongodb import MongoDBUserStore

__all__ = [
    "UserRatingStore",
    "MongoDBUserStore",
]
