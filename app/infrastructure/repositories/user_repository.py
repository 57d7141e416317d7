"""
pymongo implementation of the User Repository.
"""

from typing import Any, Dict, Optional

from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from app.core.exceptions import DuplicatePhoneException
from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.infrastructure.repositories.base_repository import MongoRepository


class MongoUserRepository(MongoRepository[User], UserRepository):
    """User repository backed by the 'users' collection."""

    def __init__(self, collection: Collection):
        super().__init__(collection, User.from_document)

    def get_by_phone(self, phone: str) -> Optional[User]:
        return self.find_one({"phone": phone})

    def create(self, obj_in: Dict[str, Any]) -> User:
        # The unique index catches a concurrent signup that slipped past the lookup
        try:
            return super().create(obj_in)
        except DuplicateKeyError:
            raise DuplicatePhoneException()

    def update_role(self, id: str, role: Optional[str]) -> Optional[User]:
        return self.update(id, {"role": role})
