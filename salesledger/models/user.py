from pydantic import BaseModel, EmailStr, Field, ConfigDict
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional
from bson import ObjectId


class UserPreferences(BaseModel):
    """Per-user display preferences kept alongside the account."""
    dark_mode: bool = False

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True
    )


class UserBase(BaseModel):
    """Base user schema."""
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr

class UserCreate(UserBase):
    """User creation schema."""
    password: str = Field(..., min_length=6, max_length=100)

class UserResponse(UserBase):
    """User response schema."""
    id: str = Field(validation_alias="_id", serialization_alias="id")
    created_at: Optional[datetime] = None

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True
    )

class UserInDB(BaseModel):
    """User database schema."""
    id: ObjectId = Field(alias="_id")
    name: str
    email: str
    password_hash: str
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        arbitrary_types_allowed=True
    )

    def to_response(self) -> UserResponse:
        return UserResponse(
            id=str(self.id),
            name=self.name,
            email=self.email,
            created_at=self.created_at
        )
