"""Gym Wars weekly leaderboard."""
from typing import Any, Dict, Iterable, List

from domain.models import GymWarEntry


def rank_gyms(entries: Iterable[GymWarEntry]) -> List[GymWarEntry]:
    """
    Order gyms for the weekly leaderboard and assign positions.

    Most workouts first, then most XP, then gym name. Positions start at 1.
    """
    ordered = sorted(entries, key=lambda e: (-e.total_workouts, -e.total_xp, e.gym_name))
    return [entry.model_copy(update={"position": i}) for i, entry in enumerate(ordered, start=1)]


def entries_from_rows(rows: Iterable[Dict[str, Any]]) -> List[GymWarEntry]:
    """Build leaderboard entries from repository rows, ignoring unknown keys."""
    fields = GymWarEntry.model_fields
    return [GymWarEntry(**{k: v for k, v in row.items() if k in fields}) for row in rows]
