from supabase import create_client, Client
from app.core import config
from typing import Optional

# Global client instance (lazy initialization)
_supabase_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Get Supabase client instance built from the public anon key.

    The portal only ever holds the public key, so every table and bucket the
    client reaches is reachable by any other holder of that key.
    """
    if config.settings is None:
        raise RuntimeError(
            "Settings not initialized. Ensure environment variables are set before using Supabase clients."
        )
    return create_client(config.settings.SUPABASE_URL, config.settings.SUPABASE_KEY)


def _ensure_supabase() -> Client:
    """Lazy initialization helper for supabase client"""
    global _supabase_client
    if _supabase_client is None:
        _supabase_client = get_supabase_client()
    return _supabase_client


# Lazy client wrapper class to support "from module import name" syntax
class _LazyClient:
    """Wrapper to provide lazy-loaded client that works with import syntax"""
    def __init__(self, getter_func):
        self._getter = getter_func
        self._client: Optional[Client] = None

    def _ensure_client(self) -> Client:
        if self._client is None:
            self._client = self._getter()
        return self._client

    def __getattr__(self, name):
        """Delegate all attribute access to the actual client"""
        return getattr(self._ensure_client(), name)


supabase = _LazyClient(_ensure_supabase)
