import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")

import mongomock  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from langchain_core.messages import AIMessage  # noqa: E402

from app.infrastructure.database import MongoStore  # noqa: E402
from app.infrastructure.gemini_client import GeminiClient  # noqa: E402
from app.infrastructure.repositories.user_repository import MongoUserRepository  # noqa: E402


class FakeChatModel:
    """Stands in for ChatGoogleGenerativeAI: replays queued replies, records prompts."""

    def __init__(self):
        self.replies = []
        self.calls = []

    def queue(self, *replies):
        self.replies.extend(replies)

    def invoke(self, messages):
        self.calls.append(messages)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return AIMessage(content=reply)


class FakeChatModelFactory:
    def __init__(self, llm: FakeChatModel):
        self.llm = llm
        self.created = []

    def __call__(self, **kwargs):
        self.created.append(kwargs)
        return self.llm


@pytest.fixture
def store():
    store = MongoStore(db_name="agro_test", client=mongomock.MongoClient()).connect()
    store.ensure_indexes()
    yield store
    store.close()


@pytest.fixture
def repo(store):
    return MongoUserRepository(store.collection("users"))


@pytest.fixture
def fake_llm():
    return FakeChatModel()


@pytest.fixture
def llm_factory(fake_llm):
    return FakeChatModelFactory(fake_llm)


@pytest.fixture
def gemini(llm_factory):
    return GeminiClient(
        api_key="test-key",
        stable_model="stable-model",
        preview_model="preview-model",
        chat_model_factory=llm_factory,
    )


@pytest.fixture
def gemini_without_key(llm_factory):
    return GeminiClient(
        api_key="",
        stable_model="stable-model",
        preview_model="preview-model",
        chat_model_factory=llm_factory,
    )


@pytest.fixture
def app(store, gemini):
    from app.main import create_app

    app = create_app()
    app.state.store = store
    app.state.gemini = gemini
    return app


@pytest.fixture
def client(app):
    # No lifespan: state is injected above
    return TestClient(app, raise_server_exceptions=False)
