"""
Bearer tokens identifying mentees, mentors and admins
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from app.core.config import settings
from app.models.models import TokenData
import logging

logger = logging.getLogger(__name__)

def create_access_token(claims: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Sign claims with the configured secret, expiring after JWT_ACCESS_TOKEN_EXPIRE_MINUTES unless told otherwise"""
    lifetime = expires_delta or timedelta(minutes=settings.jwt_access_token_expire_minutes)
    payload = {**claims, "exp": datetime.now(timezone.utc) + lifetime}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """Return the claims of a valid token, None for a bad signature or an expired token"""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        return None

def create_user_token(user_id: str, email: str, name: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    # sub mirrors user_id for clients that only read the standard claim
    return create_access_token({
        "sub": user_id,
        "user_id": user_id,
        "email": email,
        "name": name,
        "role": role,
    }, expires_delta)

def token_data_from_claims(claims: Dict[str, Any]) -> Optional[TokenData]:
    """Caller identity from verified claims, or None when the user id or email is missing"""
    user_id = claims.get("user_id") or claims.get("sub")
    email = claims.get("email")
    if not user_id or not email:
        return None
    return TokenData(user_id=user_id, email=email, name=claims.get("name"), role=claims.get("role"))
