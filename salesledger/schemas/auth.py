from pydantic import BaseModel, EmailStr, Field
from salesledger.models.user import UserResponse


class UserLogin(BaseModel):
    """Schema for user login"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Schema for authentication token response"""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class TokenData(BaseModel):
    """Identity carried by a verified access token"""
    user_id: str
    email: str
