"""
FastAPI Dependency Providers for the IronMatch Arena API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with in-memory fakes.

Architecture:
- Settings are cached per-process (lru_cache)
- The Supabase client is created in the app lifespan and read from app.state
- Repository and service providers create new instances per-request
- Auth providers wrap backend.auth

Usage in routers:
    from api.deps import get_current_user, get_duel_service
    from backend.core.duel_service import DuelService

    @router.get("/duels")
    def list_duels(
        user_id: str = Depends(get_current_user),
        duel_service: DuelService = Depends(get_duel_service),
    ):
        return duel_service.list_for_user(user_id)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_duel_repo] = lambda: FakeDuelRepository()
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException, Request
from supabase import Client

# Protocol types (interfaces)
from application.ports import (
    Clock,
    DuelRepository,
    GymWarRepository,
    ProfileRepository,
    QuestProgressRepository,
)

# Concrete implementations
from infrastructure import (
    SystemClock,
    SupabaseDuelRepository,
    SupabaseGymWarRepository,
    SupabaseProfileRepository,
    SupabaseQuestProgressRepository,
)

# Services
from backend.core.cosmetic_service import CosmeticService
from backend.core.duel_service import DuelService
from backend.core.profile_service import ProfileService
from backend.core.quest_service import QuestService

from backend.settings import Settings, get_settings as _get_settings

# Auth from existing module (wrap to maintain single source of truth)
from backend.auth import get_current_user as _get_current_user


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings(request: Request) -> Settings:
    """
    Get application settings.

    Returns the Settings the app was created with, falling back to the
    cached instance from backend.settings.

    Returns:
        Settings: Application settings instance
    """
    return getattr(request.app.state, "settings", None) or _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


def get_supabase_client(request: Request) -> Optional[Client]:
    """
    Get the Supabase client created in the application lifespan.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    return getattr(request.app.state, "supabase", None)


def get_supabase_client_required(
    client: Optional[Client] = Depends(get_supabase_client),
) -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_profile_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ProfileRepository:
    """
    Get ProfileRepository implementation.

    Returns a SupabaseProfileRepository instance with injected client.
    The return type is the Protocol to enable easy faking.
    """
    return SupabaseProfileRepository(client)


def get_quest_progress_repo(
    client: Client = Depends(get_supabase_client_required),
) -> QuestProgressRepository:
    """Get QuestProgressRepository implementation."""
    return SupabaseQuestProgressRepository(client)


def get_duel_repo(
    client: Client = Depends(get_supabase_client_required),
) -> DuelRepository:
    """Get DuelRepository implementation."""
    return SupabaseDuelRepository(client)


def get_gym_war_repo(
    client: Client = Depends(get_supabase_client_required),
) -> GymWarRepository:
    """Get GymWarRepository implementation."""
    return SupabaseGymWarRepository(client)


def get_clock() -> Clock:
    """Get the Clock used for duel deadlines and weekly rotation."""
    return SystemClock()


# =============================================================================
# Service Providers
# =============================================================================


def get_profile_service(
    profile_repo: ProfileRepository = Depends(get_profile_repo),
) -> ProfileService:
    return ProfileService(profile_repo)


def get_quest_service(
    progress_repo: QuestProgressRepository = Depends(get_quest_progress_repo),
    profile_repo: ProfileRepository = Depends(get_profile_repo),
    clock: Clock = Depends(get_clock),
) -> QuestService:
    return QuestService(progress_repo, profile_repo, clock)


def get_duel_service(
    duel_repo: DuelRepository = Depends(get_duel_repo),
    profile_repo: ProfileRepository = Depends(get_profile_repo),
    clock: Clock = Depends(get_clock),
) -> DuelService:
    """
    Get DuelService with injected repositories and clock.

    Args:
        duel_repo: Duel persistence (injected)
        profile_repo: Profiles for names, lifts and XP (injected)
        clock: Time source (injected)
    """
    return DuelService(duel_repo, profile_repo, clock)


def get_cosmetic_service(
    profile_repo: ProfileRepository = Depends(get_profile_repo),
) -> CosmeticService:
    return CosmeticService(profile_repo)


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
    x_test_auth: Optional[str] = Header(None, alias="X-Test-Auth"),
    x_test_user_id: Optional[str] = Header(None, alias="X-Test-User-Id"),
) -> str:
    """
    Get the current authenticated user ID.

    Wraps backend.auth.get_current_user for dependency injection.
    Supports multiple auth methods:
    - Supabase JWT (HS256)
    - API key authentication
    - Test bypass (non-production only)

    Returns:
        str: User ID from authentication

    Raises:
        HTTPException: 401 if authentication fails
    """
    return await _get_current_user(
        request=request,
        authorization=authorization,
        x_api_key=x_api_key,
        x_test_auth=x_test_auth,
        x_test_user_id=x_test_user_id,
    )


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_profile_repo",
    "get_quest_progress_repo",
    "get_duel_repo",
    "get_gym_war_repo",
    "get_clock",
    # Services
    "get_profile_service",
    "get_quest_service",
    "get_duel_service",
    "get_cosmetic_service",
    # Authentication
    "get_current_user",
]
