from .jwt_auth import create_access_token, create_user_token, token_data_from_claims, verify_token
from .auth_dependencies import get_current_user, get_current_mentor_user, get_current_admin_user

__all__ = [
    "create_access_token",
    "create_user_token",
    "token_data_from_claims",
    "verify_token",
    "get_current_user",
    "get_current_mentor_user",
    "get_current_admin_user"
]
