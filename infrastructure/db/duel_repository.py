"""
Supabase Duel Repository Implementation.

Implements the DuelRepository protocol on the ``duels`` table. Proof
columns (challenger_proof, opponent_proof) are jsonb.
"""
from typing import Any, Dict, List, Optional
import logging

from supabase import Client

logger = logging.getLogger(__name__)


class SupabaseDuelRepository:
    """Supabase implementation of DuelRepository."""

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def create(
        self,
        duel: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Insert a duel; the database generates the id."""
        try:
            result = self._client.table("duels") \
                .insert(duel) \
                .execute()
            if not result.data:
                raise RuntimeError("Duel insert returned no rows")
            logger.info(f"Duel saved: {result.data[0]['id']}")
            return result.data[0]
        except Exception:
            logger.exception("Error creating duel")
            raise

    def get(
        self,
        duel_id: str,
    ) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("duels") \
                .select("*") \
                .eq("id", duel_id) \
                .limit(1) \
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.error(f"Error fetching duel {duel_id}: {e}")
            return None

    def update(
        self,
        duel_id: str,
        fields: Dict[str, Any],
        *,
        expected_status: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """Update a duel; with expected_status the write is conditional on the stored status."""
        try:
            query = self._client.table("duels") \
                .update(fields) \
                .eq("id", duel_id)

            if expected_status is not None:
                query = query.eq("status", expected_status)

            result = query.execute()
            return result.data[0] if result.data else None
        except Exception:
            logger.exception(f"Error updating duel {duel_id}")
            raise

    def list_for_user(
        self,
        user_id: str,
        *,
        statuses: Optional[List[str]] = None,
        limit: int = 50,
    ) -> List[Dict[str, Any]]:
        """Duels where the user is either side, newest first."""
        try:
            query = self._client.table("duels") \
                .select("*") \
                .or_(f"challenger_id.eq.{user_id},opponent_id.eq.{user_id}")

            if statuses:
                query = query.in_("status", statuses)

            result = query \
                .order("created_at", desc=True) \
                .limit(limit) \
                .execute()
            return result.data or []
        except Exception as e:
            logger.error(f"Error listing duels for {user_id}: {e}")
            return []
