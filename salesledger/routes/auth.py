import logging

from fastapi import APIRouter, HTTPException, status, Depends
from pymongo.errors import DuplicateKeyError
from salesledger.models.user import UserCreate, UserResponse
from salesledger.schemas.auth import UserLogin, TokenResponse
from salesledger.db.mongo import get_db
from salesledger.repositories.user_repo import UserRepository
from salesledger.core.auth import create_access_token, get_current_user
from salesledger.core.security import verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, db = Depends(get_db)):
    """Create a new user account."""
    user_repo = UserRepository(db)

    # Check if email already exists
    existing_user = await user_repo.get_user_by_email(user_data.email)
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    try:
        user = await user_repo.create_user(user_data)
    except DuplicateKeyError:
        # Lost a race with a concurrent registration
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    logger.info("Registered user %s", user.id)
    access_token = create_access_token(str(user.id), user.email)

    return TokenResponse(access_token=access_token, user=user.to_response())

@router.post("/login", response_model=TokenResponse)
async def login(credentials: UserLogin, db = Depends(get_db)):
    """Login with email and password."""
    user_repo = UserRepository(db)

    user = await user_repo.get_user_by_email(credentials.email)
    if not user or not verify_password(credentials.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    access_token = create_access_token(str(user.id), user.email)

    return TokenResponse(access_token=access_token, user=user.to_response())

@router.get("/me", response_model=UserResponse)
async def get_me(current_user: UserResponse = Depends(get_current_user)):
    """Get current user details."""
    return current_user
