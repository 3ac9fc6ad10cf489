from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from salesledger.core.config import settings
from salesledger.db.mongo import get_db
from salesledger.repositories.user_repo import UserRepository
from salesledger.models.user import UserResponse
from salesledger.schemas.auth import TokenData

security = HTTPBearer(auto_error=False)

def create_access_token(user_id: str, email: str, expires_delta: timedelta | None = None) -> str:
    """Create JWT access token."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)

    now = datetime.now(timezone.utc)
    expire = now + expires_delta

    payload = {
        "sub": user_id,
        "email": email,
        "exp": int(expire.timestamp()),
        "iat": int(now.timestamp())
    }

    encoded_jwt = jwt.encode(
        payload,
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM
    )
    return encoded_jwt

def decode_access_token(token: str) -> TokenData | None:
    """Verify a token and return its identity, or None if invalid or expired."""
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError:
        return None

    user_id = payload.get("sub")
    email = payload.get("email")
    if not user_id or not email:
        return None
    return TokenData(user_id=user_id, email=email)

def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"}
    )

async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db = Depends(get_db)
) -> UserResponse:
    """Get current user from JWT token."""
    if credentials is None:
        raise _unauthorized("Not authenticated")

    token_data = decode_access_token(credentials.credentials)
    if token_data is None:
        raise _unauthorized("Invalid or expired token")

    user_repo = UserRepository(db)
    user = await user_repo.get_user_by_id(token_data.user_id)

    if user is None:
        raise _unauthorized("User not found")

    return user.to_response()
