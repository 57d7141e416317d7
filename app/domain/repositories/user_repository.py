"""
User Repository Interface.
Defines specific data access operations for Users.
"""

from typing import Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.user import User


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_phone(self, phone: str) -> Optional[User]:
        """Get the user registered with this phone number."""
        ...

    def update_role(self, id: str, role: Optional[str]) -> Optional[User]:
        """Set the role of a user, None when the id does not resolve."""
        ...
