"""
pymongo implementation of the Base Repository.
"""

from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.collection import Collection

from app.domain.repositories.base import BaseRepository

ModelType = TypeVar("ModelType")


def parse_object_id(id: str) -> Optional[ObjectId]:
    """Return the ObjectId for a string id, None for anything malformed."""
    if isinstance(id, ObjectId):
        return id
    try:
        return ObjectId(id)
    except (InvalidId, TypeError):
        return None


class MongoRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository over a single collection."""

    def __init__(self, collection: Collection, from_document: Callable[[Dict[str, Any]], ModelType]):
        self.collection = collection
        self.from_document = from_document

    def find_one(self, query: Dict[str, Any]) -> Optional[ModelType]:
        doc = self.collection.find_one(query)
        return self.from_document(doc) if doc else None

    def get_by_id(self, id: str) -> Optional[ModelType]:
        oid = parse_object_id(id)
        if oid is None:
            return None
        return self.find_one({"_id": oid})

    def create(self, obj_in: Dict[str, Any]) -> ModelType:
        doc = dict(obj_in)
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return self.from_document(doc)

    def update(self, id: str, changes: Dict[str, Any]) -> Optional[ModelType]:
        oid = parse_object_id(id)
        if oid is None:
            return None
        doc = self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        return self.from_document(doc) if doc else None
