"""Identity provider clients"""

from .gotrue_client import SupabaseAuthClient

__all__ = ["SupabaseAuthClient"]
