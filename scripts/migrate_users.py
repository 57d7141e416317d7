
import sys
import os

# Add parent dir to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pymongo.errors import PyMongoError

from app.domain.models.user import Role
from app.infrastructure.database import MongoStore


def migrate(store):
    """Create the unique phone index and reset roles outside FARMER/VENDOR/COMMUNITY to null."""
    users = store.collection("users")

    print("Ensuring unique index on users.phone...")
    store.ensure_indexes()

    valid_roles = [role.value for role in Role] + [None]
    result = users.update_many({"role": {"$nin": valid_roles}}, {"$set": {"role": None}})
    print(f"Reset {result.modified_count} invalid role(s) to null.")
    return result.modified_count


if __name__ == "__main__":
    store = MongoStore().connect()
    try:
        migrate(store)
    except PyMongoError as e:
        print(f"Migration failed: {e}")
        sys.exit(1)
    finally:
        store.close()
