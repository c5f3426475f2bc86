"""Infrastructure client adapters."""

from fleetdash.infra.clients.supabase_backend import SupabaseBackend, create_supabase_backend

__all__ = ["SupabaseBackend", "create_supabase_backend"]
