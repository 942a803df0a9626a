"""
Static catalogs: ranks, quests, cosmetics and duel templates.

Quests, cosmetics and duel templates are loaded from the YAML files in
shared/catalogs and validated into domain models once per process. The
rank ladder is small and tied to the engine's thresholds, so it lives here
as code.
"""
import logging
import pathlib
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

import yaml

from domain.models import (
    CosmeticItem,
    DuelTemplate,
    Quest,
    Rank,
    RankTier,
)

logger = logging.getLogger(__name__)

ROOT = pathlib.Path(__file__).resolve().parents[2]
CATALOG_DIR = ROOT / "shared" / "catalogs"


# Ascending by threshold; the first entry is the zero-threshold floor.
RANKS: Tuple[Rank, ...] = (
    Rank(name="Newcomer", tier=RankTier.BELOW_AVERAGE, icon="🌱", color="#9CA3AF", min_total_lb=0,
         description="Everyone starts somewhere. Log your Big 4 to climb."),
    Rank(name="Novice", tier=RankTier.BELOW_AVERAGE, icon="🥉", color="#A8A29E", min_total_lb=200,
         description="The bar is moving. Keep showing up."),
    Rank(name="Apprentice", tier=RankTier.BELOW_AVERAGE, icon="🔨", color="#6B7280", min_total_lb=400,
         description="Technique is clicking and the plates are adding up."),
    Rank(name="Contender", tier=RankTier.AVERAGE, icon="🥈", color="#3B82F6", min_total_lb=600,
         description="Solid, balanced strength across the Big 4."),
    Rank(name="Athlete", tier=RankTier.AVERAGE, icon="🏋️", color="#0EA5E9", min_total_lb=800,
         description="Stronger than most people in the gym."),
    Rank(name="Competitor", tier=RankTier.AVERAGE, icon="⚔️", color="#8B5CF6", min_total_lb=1000,
         description="Meet-ready numbers on every lift."),
    Rank(name="Elite", tier=RankTier.ABOVE_AVERAGE, icon="🥇", color="#F59E0B", min_total_lb=1200,
         description="Years of consistent, heavy training show."),
    Rank(name="Master", tier=RankTier.ABOVE_AVERAGE, icon="💎", color="#EC4899", min_total_lb=1400,
         description="Strength that turns heads."),
    Rank(name="Titan", tier=RankTier.ABOVE_AVERAGE, icon="👑", color="#EF4444", min_total_lb=1600,
         description="Among the strongest lifters anywhere."),
    Rank(name="Legend", tier=RankTier.ABOVE_AVERAGE, icon="🔥", color="#DC2626", min_total_lb=2000,
         description="A 2000 lb total. The top of the ladder."),
)


def _load_yaml(name: str):
    path = CATALOG_DIR / name
    logger.debug("Loading catalog %s", path)
    return yaml.safe_load(path.read_text(encoding="utf-8"))


@lru_cache
def load_quests() -> Tuple[Tuple[Quest, ...], Tuple[Quest, ...]]:
    """
    Load the quest catalog.

    Returns:
        (public_pool, hidden_pool), both in file order.

    Raises:
        ValueError: if a quest id is duplicated across the pools
    """
    raw = _load_yaml("quests.yaml")
    public = tuple(Quest(**item) for item in raw.get("public", []))
    hidden = tuple(Quest(hidden=True, **item) for item in raw.get("hidden", []))

    seen = set()
    for quest in public + hidden:
        if quest.id in seen:
            raise ValueError(f"Duplicate quest id in catalog: {quest.id}")
        seen.add(quest.id)

    logger.info("Loaded quest catalog: %d public, %d hidden", len(public), len(hidden))
    return public, hidden


def public_quests() -> Tuple[Quest, ...]:
    return load_quests()[0]


def hidden_quests() -> Tuple[Quest, ...]:
    return load_quests()[1]


@lru_cache
def quest_index() -> Dict[str, Quest]:
    """All quests keyed by id."""
    public, hidden = load_quests()
    return {quest.id: quest for quest in public + hidden}


def get_quest(quest_id: str) -> Optional[Quest]:
    return quest_index().get(quest_id)


@lru_cache
def load_cosmetics() -> Tuple[CosmeticItem, ...]:
    """Load the cosmetic catalog in file order."""
    items = tuple(CosmeticItem(**item) for item in _load_yaml("cosmetics.yaml"))
    logger.info("Loaded cosmetic catalog: %d items", len(items))
    return items


def get_cosmetic(item_id: str) -> Optional[CosmeticItem]:
    return next((item for item in load_cosmetics() if item.id == item_id), None)


@lru_cache
def load_duel_templates() -> Tuple[DuelTemplate, ...]:
    """Load the duel template catalog in file order."""
    return tuple(DuelTemplate(**item) for item in _load_yaml("duel_templates.yaml"))


def get_duel_template(template_id: str) -> Optional[DuelTemplate]:
    return next((t for t in load_duel_templates() if t.id == template_id), None)


def all_ranks() -> List[Rank]:
    return list(RANKS)
