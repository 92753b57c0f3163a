from supabase import create_client, Client
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)

def get_supabase() -> Client:
    """Create and return a Supabase client for regular operations on demand.

    Also used as the FastAPI dependency handed to every service, so tests can
    override it with an in-memory client.
    """
    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logger.error(f"Failed to create Supabase client: {e}")
        raise
