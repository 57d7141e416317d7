"""FastAPI dependencies — store, repositories and the Gemini client."""

from fastapi import Depends, Request

from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.infrastructure.database import MongoStore
from app.infrastructure.gemini_client import GeminiClient
from app.infrastructure.repositories.user_repository import MongoUserRepository


def get_store(request: Request) -> MongoStore:
    """Store handle opened by the application lifespan."""
    return request.app.state.store


def get_user_repository(store: MongoStore = Depends(get_store)) -> UserRepository:
    return MongoUserRepository(store.collection(User.__collection__))


def get_gemini_client(request: Request) -> GeminiClient:
    return request.app.state.gemini
