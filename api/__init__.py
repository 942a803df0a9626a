"""
API package for the IronMatch Arena API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- errors.py: domain error to HTTP status mapping
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    get_profile_repo,
    get_quest_progress_repo,
    get_duel_repo,
    get_gym_war_repo,
    get_clock,
    get_current_user,
)

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
    # Authentication
    "get_current_user",
]
