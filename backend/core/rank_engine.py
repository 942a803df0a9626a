"""
Rank Engine.

Maps a lifter's Big 4 total to a rank on the catalog ladder and reports
progress toward the next rank. Everything here is a pure function of the
LiftProfile; degenerate or zero profiles map to the floor rank.
"""
from typing import Optional, Sequence

from backend.core.catalog import RANKS
from domain.models import TIER_ORDER, LiftProfile, Rank, RankTier


def get_rank(profile: LiftProfile, ranks: Sequence[Rank] = RANKS) -> Rank:
    """
    Return the highest rank whose threshold is at or below the profile total.

    Scans from the highest threshold down. The catalog always starts with a
    zero-threshold floor, so a rank is always found.

    Args:
        profile: The lifter's Big 4 maxima
        ranks: Rank catalog in ascending threshold order

    Returns:
        The matching Rank
    """
    total = profile.total_lb()
    for rank in reversed(ranks):
        if total >= rank.min_total_lb:
            return rank
    return ranks[0]


def get_next_rank(profile: LiftProfile, ranks: Sequence[Rank] = RANKS) -> Optional[Rank]:
    """Return the rank after the current one, or None at the top of the ladder."""
    current = get_rank(profile, ranks)
    idx = list(ranks).index(current)
    return ranks[idx + 1] if idx < len(ranks) - 1 else None


def get_progress_percent(profile: LiftProfile, ranks: Sequence[Rank] = RANKS) -> float:
    """
    Linear progress from the current rank's threshold to the next one.

    Returns 100 when already at the top rank. The value restarts from 0
    at every rank boundary.

    Returns:
        Progress percentage clamped to [0, 100]
    """
    current = get_rank(profile, ranks)
    nxt = get_next_rank(profile, ranks)
    if nxt is None:
        return 100.0

    span = nxt.min_total_lb - current.min_total_lb
    percent = (profile.total_lb() - current.min_total_lb) / span * 100
    return max(0.0, min(100.0, percent))


def tier_index(tier: RankTier) -> int:
    """Position of a tier in catalog order (0 = lowest)."""
    return TIER_ORDER.index(RankTier(tier))


def tier_at_least(tier: RankTier, minimum: RankTier) -> bool:
    """True when ``tier`` is the same as or above ``minimum``."""
    return tier_index(tier) >= tier_index(minimum)
