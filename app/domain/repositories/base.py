"""
Base Repository Interface.
Defines the standard contract for document access operations.
"""

from typing import Any, Dict, Optional, Protocol, TypeVar

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for single-document CRUD operations."""

    def get_by_id(self, id: str) -> Optional[T]:
        """Get a single entity by its string id, None when it does not resolve."""
        ...

    def create(self, obj_in: Dict[str, Any]) -> T:
        """Insert a new entity and return it with its assigned id."""
        ...

    def update(self, id: str, changes: Dict[str, Any]) -> Optional[T]:
        """Apply field changes atomically and return the updated entity."""
        ...
