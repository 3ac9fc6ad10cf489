from fastapi import APIRouter, Depends, HTTPException, status

from salesledger.core.auth import get_current_user
from salesledger.db.mongo import get_db
from salesledger.models.user import UserPreferences, UserResponse
from salesledger.repositories.user_repo import UserRepository

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me/preferences", response_model=UserPreferences)
async def get_my_preferences(
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Load the current user's display preferences."""
    repo = UserRepository(db)
    preferences = await repo.get_preferences(current_user.id)
    if preferences is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return preferences


@router.put("/me/preferences", response_model=UserPreferences)
async def save_my_preferences(
    preferences: UserPreferences,
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Save the current user's display preferences."""
    repo = UserRepository(db)
    saved = await repo.save_preferences(current_user.id, preferences)
    if saved is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return saved
