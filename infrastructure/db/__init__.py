"""
Infrastructure Database Layer.

Supabase-backed implementations of the repository interfaces defined in
application.ports. Each repository receives the Supabase client by
injection; the client itself is created once in the application lifespan.

Usage:
    from supabase import create_client
    from infrastructure.db import SupabaseDuelRepository, SupabaseProfileRepository

    client = create_client(SUPABASE_URL, SUPABASE_KEY)
    profile_repo = SupabaseProfileRepository(client)
    duel_repo = SupabaseDuelRepository(client)
"""

from infrastructure.db.profile_repository import SupabaseProfileRepository
from infrastructure.db.quest_progress_repository import SupabaseQuestProgressRepository
from infrastructure.db.duel_repository import SupabaseDuelRepository
from infrastructure.db.gym_war_repository import SupabaseGymWarRepository

__all__ = [
    # Lifts, XP and cosmetics
    "SupabaseProfileRepository",

    # Quest progress and hidden quest reveals
    "SupabaseQuestProgressRepository",

    # Duel lifecycle
    "SupabaseDuelRepository",

    # Gym Wars leaderboard
    "SupabaseGymWarRepository",
]
