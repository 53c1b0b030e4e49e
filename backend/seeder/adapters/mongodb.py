"""MongoDB user rating store"""

import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient
from pydantic import ValidationError
from pymongo.errors import ConnectionFailure, PyMongoError

from seeder.adapters.base import UserRatingStore
from seeder.core.config import Settings
from seeder.core.error_utils import truncate_error_message
from seeder.core.exceptions import (InvalidUserDocumentError,
                                    StoreConnectionError, StoreWriteError)
from seeder.models.rating import RatingTriple
from seeder.models.user import SeedUser

logger = logging.getLogger(__name__)

# Only the fields the seeder reads
USER_PROJECTION = {"_id": 1, "username": 1}


class MongoDBUserStore(UserRatingStore):
    """User rating store backed by a MongoDB collection"""

    def __init__(
        self,
        connection_string: str,
        database: str,
        collection: str = "users",
        server_selection_timeout_ms: int = 10000,
        connect_timeout_ms: int = 10000,
        socket_timeout_ms: int = 30000,
    ):
        self.connection_string = connection_string
        self.database_name = database
        self.collection_name = collection
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self.connect_timeout_ms = connect_timeout_ms
        self.socket_timeout_ms = socket_timeout_ms
        self.client: Optional[AsyncIOMotorClient] = None
        self.db = None
        # Raw _id values keyed by their string form, filled by load_users
        self._document_ids: Dict[str, Any] = {}

    @classmethod
    def from_settings(cls, config: Settings) -> "MongoDBUserStore":
        return cls(
            config.MONGODB_URL,
            config.MONGODB_DB_NAME,
            collection=config.USERS_COLLECTION,
            server_selection_timeout_ms=config.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
            connect_timeout_ms=config.MONGODB_CONNECT_TIMEOUT_MS,
            socket_timeout_ms=config.MONGODB_SOCKET_TIMEOUT_MS,
        )

    @property
    def users(self):
        return self.db[self.collection_name]

    async def connect(self) -> None:
        """Connect to MongoDB and verify the server answers a ping

        Raises:
            StoreConnectionError: If the server cannot be reached
        """
        self.client = AsyncIOMotorClient(
            self.connection_string,
            serverSelectionTimeoutMS=self.server_selection_timeout_ms,
            connectTimeoutMS=self.connect_timeout_ms,
            socketTimeoutMS=self.socket_timeout_ms,
            maxPoolSize=1,  # One sequential writer
        )
        self.db = self.client[self.database_name]

        try:
            await self.client.admin.command("ping")
        except PyMongoError as e:
            # The client never became usable, release it before reporting
            self.client.close()
            self.client = None
            self.db = None
            raise StoreConnectionError(
                f"Could not connect to MongoDB: {truncate_error_message(e)}"
            ) from e

        logger.info(f"Connected to MongoDB database '{self.database_name}'")

    async def disconnect(self) -> None:
        """Close MongoDB connection"""
        if self.client is None:
            return

        self.client.close()
        self.client = None
        self.db = None
        self._document_ids.clear()
        logger.info("Disconnected from MongoDB")

    async def load_users(self) -> List[SeedUser]:
        """Unfiltered scan of the users collection"""
        self._require_connection()
        try:
            docs = await self.users.find({}, USER_PROJECTION).to_list(length=None)
        except ConnectionFailure as e:
            raise StoreConnectionError(
                f"Lost connection while loading users: {truncate_error_message(e)}"
            ) from e
        except PyMongoError as e:
            raise StoreConnectionError(
                f"Failed to load users from '{self.collection_name}': {truncate_error_message(e)}"
            ) from e

        users = []
        for doc in docs:
            try:
                user = SeedUser.from_document(doc)
            except (KeyError, ValidationError) as e:
                raise InvalidUserDocumentError(
                    f"Malformed user document {doc.get('_id')!r} in '{self.collection_name}': "
                    f"{truncate_error_message(e)}"
                ) from e
            self._document_ids[user.id] = doc["_id"]
            users.append(user)
        return users

    async def apply_ratings(
        self,
        user: SeedUser,
        ratings: Dict[str, RatingTriple],
        merge: bool = False,
    ) -> None:
        """Set the user's ranking field

        Overwrite mode replaces ``ranking`` with ``ratings``; merge mode sets
        ``ranking.<variant>`` for each entry and leaves other variants alone.

        Raises:
            StoreConnectionError: On network failure
            StoreWriteError: If the update is rejected or matches no document
        """
        self._require_connection()

        if merge:
            if not ratings:
                return
            update = {
                f"ranking.{variant}": triple.model_dump()
                for variant, triple in ratings.items()
            }
        else:
            update = {
                "ranking": {
                    variant: triple.model_dump() for variant, triple in ratings.items()
                }
            }

        try:
            result = await self.users.update_one(
                {"_id": self._document_id(user)}, {"$set": update}
            )
        except ConnectionFailure as e:
            raise StoreConnectionError(
                f"Lost connection while updating user {user.id}: {truncate_error_message(e)}"
            ) from e
        except PyMongoError as e:
            raise StoreWriteError(
                f"Failed to update ranking for user {user.id}: {truncate_error_message(e)}",
                user_id=user.id,
            ) from e

        if result.matched_count == 0:
            raise StoreWriteError(
                f"User {user.id} no longer exists in '{self.collection_name}'",
                user_id=user.id,
            )

    def _document_id(self, user: SeedUser) -> Any:
        if user.id in self._document_ids:
            return self._document_ids[user.id]
        if ObjectId.is_valid(user.id):
            return ObjectId(user.id)
        return user.id

    def _require_connection(self) -> None:
        if self.db is None:
            raise StoreConnectionError("MongoDB store is not connected")
