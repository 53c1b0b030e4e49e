"""Seeder exception hierarchy."""

from typing import Optional


class SeederError(Exception):
    """Base class for errors raised while seeding ratings."""


class ConfigurationError(SeederError):
    """Settings are missing or malformed."""


class StoreConnectionError(SeederError):
    """The document store is unreachable or the connection dropped mid-run."""


class InvalidUserDocumentError(SeederError):
    """A stored user document can not be read as a user record."""


class StoreWriteError(SeederError):
    """A per-document update could not be committed."""

    def __init__(self, message: str, user_id: Optional[str] = None):
        super().__init__(message)
        self.user_id = user_id
