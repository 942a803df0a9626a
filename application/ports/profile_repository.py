"""
Profile Repository Interface (Port).

Defines the contract for reading and updating the gamification fields of a
user profile: Big 4 lifts, body metrics, XP balance and cosmetics.
"""
from typing import Any, Dict, List, Optional, Protocol


class ProfileRepository(Protocol):
    """
    Abstract interface for user profile data access.

    Profiles are returned as dicts with the keys:
        id, display_name, avatar_url, home_gym_id, xp,
        bench, squat, deadlift, ohp, lift_unit,
        bodyweight_kg, height_cm,
        unlocked_cosmetics (list of item ids),
        active_cosmetics (dict category -> item id)
    """

    def get_profile(
        self,
        user_id: str,
    ) -> Optional[Dict[str, Any]]:
        """
        Get a profile by user ID.

        Args:
            user_id: User ID (Supabase auth user ID)

        Returns:
            Profile dict, or None if not found
        """
        ...

    def update_lifts(
        self,
        user_id: str,
        lifts: Dict[str, float],
        unit: str,
    ) -> Optional[Dict[str, Any]]:
        """
        Replace the stored Big 4 maxima.

        Args:
            user_id: User ID
            lifts: Mapping of bench/squat/deadlift/ohp to values
            unit: "lb" or "kg"

        Returns:
            Updated profile dict, or None if the profile does not exist
        """
        ...

    def add_xp(
        self,
        user_id: str,
        amount: int,
    ) -> int:
        """
        Add XP to the user's balance.

        Args:
            user_id: User ID
            amount: XP to add (non-negative)

        Returns:
            The new XP balance
        """
        ...

    def add_unlocked_cosmetic(
        self,
        user_id: str,
        item_id: str,
    ) -> List[str]:
        """
        Add an item to the unlocked set. Adding an existing item is a no-op.

        Returns:
            The unlocked item ids after the update
        """
        ...

    def set_active_cosmetic(
        self,
        user_id: str,
        category: str,
        item_id: str,
    ) -> Dict[str, str]:
        """
        Make ``item_id`` the active item of ``category``.

        Returns:
            The active selections after the update (category -> item id)
        """
        ...
