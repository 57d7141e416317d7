from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from app.interfaces.api.deps import get_store, get_user_repository


def _signup(client, phone="9876543210", password="s3cret", name="Asha"):
    return client.post("/api/auth/signup", json={"name": name, "phone": phone, "password": password})


def test_signup_returns_user_without_password_hash(client) -> None:
    response = _signup(client)

    assert response.status_code == 200
    user = response.json()["user"]
    assert ObjectId.is_valid(user["_id"])
    assert user["name"] == "Asha"
    assert user["phone"] == "9876543210"
    assert user["role"] is None
    assert "password" not in user
    assert "password_hash" not in user


def test_signup_duplicate_phone_is_400(client) -> None:
    _signup(client)

    response = _signup(client, name="Other")

    assert response.status_code == 400
    body = response.json()
    assert body["error"] is True
    assert body["message"] == "Phone already exists"
    assert body["code"] == "DuplicatePhoneException"


def test_signup_missing_password_is_400(client) -> None:
    response = client.post("/api/auth/signup", json={"name": "Asha", "phone": "123"})

    assert response.status_code == 400
    assert response.json()["code"] == "ValidationError"


def test_login_round_trip(client) -> None:
    created = _signup(client).json()["user"]

    response = client.post("/api/auth/login", json={"phone": "9876543210", "password": "s3cret"})

    assert response.status_code == 200
    assert response.json()["user"]["_id"] == created["_id"]
    assert response.json()["user"]["role"] is None


def test_login_unknown_phone_is_400(client) -> None:
    response = client.post("/api/auth/login", json={"phone": "000", "password": "x"})

    assert response.status_code == 400
    assert response.json()["message"] == "User not found"


def test_login_wrong_password_is_400_invalid_password(client) -> None:
    _signup(client)

    response = client.post("/api/auth/login", json={"phone": "9876543210", "password": "nope"})

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid password"


def test_update_role_sets_role(client) -> None:
    user = _signup(client).json()["user"]

    response = client.put("/api/auth/update-role", json={"userId": user["_id"], "role": "VENDOR"})

    assert response.status_code == 200
    assert response.json()["user"]["role"] == "VENDOR"

    again = client.put("/api/auth/update-role", json={"userId": user["_id"], "role": "VENDOR"})
    assert again.json() == response.json()


def test_update_role_unknown_user_is_404(client) -> None:
    response = client.put("/api/auth/update-role", json={"userId": str(ObjectId()), "role": "FARMER"})

    assert response.status_code == 404
    assert response.json()["message"] == "User not found"


def test_update_role_rejects_unknown_role(client, store) -> None:
    user = _signup(client).json()["user"]

    response = client.put("/api/auth/update-role", json={"userId": user["_id"], "role": "ADMIN"})

    assert response.status_code == 400
    assert store.collection("users").find_one({"_id": ObjectId(user["_id"])})["role"] is None


def test_store_failure_is_500(app, client) -> None:
    class BrokenRepository:
        def get_by_phone(self, phone):
            raise RuntimeError("connection refused")

    app.dependency_overrides[get_user_repository] = lambda: BrokenRepository()

    response = client.post("/api/auth/login", json={"phone": "1", "password": "x"})

    assert response.status_code == 500
    assert response.json()["error"] is True
    assert response.json()["message"] == "connection refused"


def test_update_role_without_role_field_keeps_current_role(client) -> None:
    user = _signup(client).json()["user"]
    client.put("/api/auth/update-role", json={"userId": user["_id"], "role": "FARMER"})

    response = client.put("/api/auth/update-role", json={"userId": user["_id"]})

    assert response.status_code == 200
    assert response.json()["user"]["role"] == "FARMER"


def test_update_role_with_explicit_null_clears_role(client) -> None:
    user = _signup(client).json()["user"]
    client.put("/api/auth/update-role", json={"userId": user["_id"], "role": "FARMER"})

    response = client.put("/api/auth/update-role", json={"userId": user["_id"], "role": None})

    assert response.status_code == 200
    assert response.json()["user"]["role"] is None


def test_update_role_without_role_field_unknown_user_is_404(client) -> None:
    response = client.put("/api/auth/update-role", json={"userId": str(ObjectId())})

    assert response.status_code == 404


def test_login_returns_legacy_role_as_stored(client, store) -> None:
    user = _signup(client).json()["user"]
    store.collection("users").update_one({"_id": ObjectId(user["_id"])}, {"$set": {"role": "ADMIN"}})

    response = client.post("/api/auth/login", json={"phone": "9876543210", "password": "s3cret"})

    assert response.status_code == 200
    assert response.json()["user"]["role"] == "ADMIN"


def test_signup_blank_phone_is_400(client) -> None:
    response = client.post("/api/auth/signup", json={"phone": "   ", "password": "x"})

    assert response.status_code == 400


def test_health_reports_database_up(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "up"}


def test_health_reports_database_down(app, client) -> None:
    class DownStore:
        def ping(self):
            raise ServerSelectionTimeoutError("no servers available")

    app.dependency_overrides[get_store] = lambda: DownStore()

    response = client.get("/health")

    assert response.status_code == 503
    assert response.json() == {"status": "unhealthy", "database": "down"}
