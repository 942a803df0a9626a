"""
Supabase Profile Repository Implementation.

Implements the ProfileRepository protocol on the ``profiles`` table. The
gamification columns are: xp, bench, squat, deadlift, ohp, lift_unit,
bodyweight_kg, height_cm, unlocked_cosmetics (text[]), active_cosmetics
(jsonb, category -> item id).
"""
from typing import Any, Dict, List, Optional
import logging

from supabase import Client

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = (
    "id, display_name, avatar_url, home_gym_id, xp, "
    "bench, squat, deadlift, ohp, lift_unit, bodyweight_kg, height_cm, "
    "unlocked_cosmetics, active_cosmetics"
)


class SupabaseProfileRepository:
    """
    Supabase implementation of ProfileRepository.

    Reads return None on failure; writes log and re-raise.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def get_profile(
        self,
        user_id: str,
    ) -> Optional[Dict[str, Any]]:
        """Get the gamification fields of a profile."""
        try:
            result = self._client.table("profiles") \
                .select(PROFILE_COLUMNS) \
                .eq("id", user_id) \
                .limit(1) \
                .execute()

            if result.data:
                return result.data[0]
            return None

        except Exception as e:
            logger.error(f"Error fetching profile for {user_id}: {e}")
            return None

    def _update(self, user_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        result = self._client.table("profiles") \
            .update(fields) \
            .eq("id", user_id) \
            .execute()
        return result.data[0] if result.data else None

    def update_lifts(
        self,
        user_id: str,
        lifts: Dict[str, float],
        unit: str,
    ) -> Optional[Dict[str, Any]]:
        """Replace the stored Big 4 maxima and their unit."""
        fields = {name: lifts[name] for name in ("bench", "squat", "deadlift", "ohp") if name in lifts}
        fields["lift_unit"] = unit
        try:
            return self._update(user_id, fields)
        except Exception:
            logger.exception(f"Error updating lifts for {user_id}")
            raise

    def add_xp(
        self,
        user_id: str,
        amount: int,
    ) -> int:
        """Add XP to the balance and return the new balance."""
        try:
            profile = self.get_profile(user_id) or {}
            balance = int(profile.get("xp") or 0) + int(amount)
            self._update(user_id, {"xp": balance})
            return balance
        except Exception:
            logger.exception(f"Error adding {amount} XP for {user_id}")
            raise

    def add_unlocked_cosmetic(
        self,
        user_id: str,
        item_id: str,
    ) -> List[str]:
        """Append an item to unlocked_cosmetics if it is not there yet."""
        try:
            profile = self.get_profile(user_id) or {}
            unlocked = list(profile.get("unlocked_cosmetics") or [])
            if item_id not in unlocked:
                unlocked.append(item_id)
                self._update(user_id, {"unlocked_cosmetics": unlocked})
            return unlocked
        except Exception:
            logger.exception(f"Error unlocking cosmetic {item_id} for {user_id}")
            raise

    def set_active_cosmetic(
        self,
        user_id: str,
        category: str,
        item_id: str,
    ) -> Dict[str, str]:
        """Set the active item of a cosmetic category."""
        try:
            profile = self.get_profile(user_id) or {}
            active = dict(profile.get("active_cosmetics") or {})
            active[category] = item_id
            self._update(user_id, {"active_cosmetics": active})
            return active
        except Exception:
            logger.exception(f"Error equipping cosmetic {item_id} for {user_id}")
            raise
