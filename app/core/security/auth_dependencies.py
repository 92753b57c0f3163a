from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.core.config import settings
from app.core.security.jwt_auth import token_data_from_claims, verify_token
from app.models.models import TokenData, UserRole
import logging

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme
security = HTTPBearer()

async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)) -> TokenData:
    """Get current authenticated user from JWT token"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    claims = verify_token(credentials.credentials)
    if claims is None:
        raise credentials_exception

    current_user = token_data_from_claims(claims)
    if current_user is None:
        logger.error("Authentication error: token is missing user_id or email")
        raise credentials_exception
    return current_user

async def get_current_mentor_user(current_user: TokenData = Depends(get_current_user)) -> TokenData:
    """Get current user and verify they are an allowed mentor"""
    if current_user.role != UserRole.MENTOR.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Mentor role required."
        )
    allowlist = settings.mentor_email_allowlist
    if allowlist and current_user.email.lower() not in allowlist:
        logger.warning(f"Mentor {current_user.user_id} is not on the mentor allowlist")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized as a valid mentor"
        )
    return current_user

async def get_current_admin_user(current_user: TokenData = Depends(get_current_user)) -> TokenData:
    """Get current user and verify they are an admin"""
    if current_user.role != UserRole.ADMIN.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Admin role required."
        )
    return current_user
