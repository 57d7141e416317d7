"""User domain model — maps to documents in the 'users' collection."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from bson import ObjectId


class Role(str, Enum):
    FARMER = "FARMER"
    VENDOR = "VENDOR"
    COMMUNITY = "COMMUNITY"


@dataclass
class User:
    id: ObjectId
    phone: str
    password_hash: str
    name: Optional[str] = None
    role: Optional[str] = None  # None until onboarding picks a Role
    location: Optional[str] = None

    __collection__ = "users"

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "User":
        return cls(
            id=doc["_id"],
            phone=doc["phone"],
            password_hash=doc["password"],
            name=doc.get("name"),
            role=doc.get("role"),
            location=doc.get("location"),
        )

    def __repr__(self):
        return f"<User {self.phone}>"
