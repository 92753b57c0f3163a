from typing import Optional, List
from supabase import Client
from app.models.models import UserSummary, UserRole
import logging

logger = logging.getLogger(__name__)


class UserService:
    """Read-only access to the users table"""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    async def get_user_by_id(self, user_id: str) -> Optional[UserSummary]:
        """Get user by user ID"""
        try:
            result = self.supabase.table("users").select("user_id, full_name, email, role").eq("user_id", user_id).execute()

            if result.data:
                return UserSummary.model_validate(result.data[0])
            return None

        except Exception as e:
            logger.error(f"Error getting user by ID: {e}")
            raise

    async def get_users_by_role(self, role: UserRole) -> List[UserSummary]:
        """Get all users with the given role"""
        try:
            result = self.supabase.table("users").select("user_id, full_name, email, role").eq("role", role.value).order("full_name").execute()
            return [UserSummary.model_validate(row) for row in result.data]

        except Exception as e:
            logger.error(f"Error getting users with role {role.value}: {e}")
            raise
