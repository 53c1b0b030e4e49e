"""User record as seen by the seeder."""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class SeedUser(BaseModel):
    """User document projected to the fields the seeder reads."""

    id: str
    username: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "SeedUser":
        """Convert a MongoDB user document.

        Raises:
            KeyError: If the document has no ``_id``
            pydantic.ValidationError: If ``username`` is not a string
        """
        return cls(
            id=str(doc["_id"]),
            username=doc.get("username") or None,
        )
