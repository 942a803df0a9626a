"""
Duel Repository Interface (Port).

Defines the contract for duel persistence. Duels are stored as dicts that
mirror the Duel domain model (datetimes as ISO strings, proofs as nested
dicts).
"""
from typing import Any, Dict, List, Optional, Protocol


class DuelRepository(Protocol):
    """Abstract interface for duel persistence."""

    def create(
        self,
        duel: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Insert a new duel.

        Args:
            duel: Duel data without an id

        Returns:
            The stored duel including its generated id
        """
        ...

    def get(
        self,
        duel_id: str,
    ) -> Optional[Dict[str, Any]]:
        """Get a duel by ID, or None if not found."""
        ...

    def update(
        self,
        duel_id: str,
        fields: Dict[str, Any],
        *,
        expected_status: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Update selected fields of a duel.

        Args:
            duel_id: Duel ID
            fields: Columns to write
            expected_status: Only write if the stored status still equals
                this value (compare-and-set)

        Returns:
            The updated duel, or None if not found or the status no longer
            matches
        """
        ...

    def list_for_user(
        self,
        user_id: str,
        *,
        statuses: Optional[List[str]] = None,
        limit: int = 50,
    ) -> List[Dict[str, Any]]:
        """
        List duels where the user is challenger or opponent.

        Args:
            user_id: User ID
            statuses: Restrict to these statuses, or None for all
            limit: Maximum duels to return

        Returns:
            Duels ordered by created_at descending
        """
        ...
