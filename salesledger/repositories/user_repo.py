from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId
from bson.errors import InvalidId
from datetime import datetime, timezone
from pymongo import ReturnDocument
from salesledger.models.user import UserCreate, UserInDB, UserPreferences
from salesledger.core.security import hash_password

class UserRepository:
    """User database operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["users"]

    async def create_user(self, user_data: UserCreate) -> UserInDB:
        """Create a new user."""
        now = datetime.now(timezone.utc)
        user_dict = {
            "name": user_data.name,
            "email": user_data.email.lower(),
            "password_hash": hash_password(user_data.password),
            "preferences": UserPreferences().model_dump(),
            "created_at": now,
            "updated_at": now
        }

        result = await self.collection.insert_one(user_dict)
        user_dict["_id"] = result.inserted_id
        return UserInDB(**user_dict)

    async def get_user_by_email(self, email: str) -> UserInDB | None:
        """Get user by email."""
        user = await self.collection.find_one({"email": email.lower()})
        if user:
            return UserInDB(**user)
        return None

    async def get_user_by_id(self, user_id: str) -> UserInDB | None:
        """Get user by ID."""
        try:
            oid = ObjectId(user_id)
        except (InvalidId, TypeError):
            return None
        user = await self.collection.find_one({"_id": oid})
        if user:
            return UserInDB(**user)
        return None

    async def get_preferences(self, user_id: str) -> UserPreferences | None:
        """Load stored preferences, falling back to defaults for older accounts."""
        user = await self.get_user_by_id(user_id)
        if user is None:
            return None
        return user.preferences

    async def save_preferences(self, user_id: str, preferences: UserPreferences) -> UserPreferences | None:
        """Replace the user's preferences document."""
        try:
            oid = ObjectId(user_id)
        except (InvalidId, TypeError):
            return None
        result = await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": {
                "preferences": preferences.model_dump(),
                "updated_at": datetime.now(timezone.utc)
            }},
            return_document=ReturnDocument.AFTER
        )
        if result:
            return UserPreferences(**result.get("preferences", {}))
        return None
