"""
Dependency Injection container.

Wires abstract ports → concrete adapters. To swap the data store
(e.g., in-memory → Supabase), change STORAGE_BACKEND or the adapter
instantiation here. Nothing else in the codebase changes.
"""

import logging
from functools import lru_cache

from fastapi import Depends

from app.adapters.memory_adapter import InMemoryAdapter
from app.config import settings
from app.ports.database_port import DatabasePort

logger = logging.getLogger(__name__)


# ── Singletons (cached) ──────────────────────────────────────


@lru_cache(maxsize=1)
def _get_supabase_client():
    from supabase import create_client

    # Use service role key — bypasses RLS for server-side operations
    return create_client(settings.supabase_url, settings.supabase_service_role_key)


@lru_cache(maxsize=1)
def _get_supabase_adapter() -> DatabasePort:
    from app.adapters.supabase_adapter import SupabaseAdapter

    return SupabaseAdapter(client=_get_supabase_client())


@lru_cache(maxsize=1)
def _get_memory_adapter() -> InMemoryAdapter:
    return InMemoryAdapter()


_BACKENDS = {
    "memory": _get_memory_adapter,
    "supabase": _get_supabase_adapter,
}


# ── FastAPI Dependencies (return abstract types) ──────────────


def get_db() -> DatabasePort:
    """Inject the database adapter selected by STORAGE_BACKEND."""
    factory = _BACKENDS.get(settings.storage_backend.lower())
    if not factory:
        raise ValueError(
            f"Unknown storage backend: {settings.storage_backend}. "
            f"Available: {', '.join(_BACKENDS.keys())}"
        )
    return factory()


# ── Domain Services ───────────────────────────────────────────

from app.services.application_service import ApplicationService  # noqa: E402
from app.services.offering_service import OfferingService  # noqa: E402
from app.services.user_service import UserService  # noqa: E402


def get_offering_service(db: DatabasePort = Depends(get_db)) -> OfferingService:
    """Injects the DB adapter into the offering service."""
    return OfferingService(db=db)


def get_application_service(db: DatabasePort = Depends(get_db)) -> ApplicationService:
    """Injects the DB adapter into the application service."""
    return ApplicationService(db=db)


def get_user_service(db: DatabasePort = Depends(get_db)) -> UserService:
    """Injects the DB adapter into the user service."""
    return UserService(db=db)
