import pytest

from backend.core import catalog
from domain.models import DuelType, QuestTrigger


@pytest.mark.unit
class TestCatalog:
    """Tests for the static catalogs."""

    def test_ranks_ascending_from_zero(self):
        thresholds = [r.min_total_lb for r in catalog.RANKS]
        assert thresholds[0] == 0
        assert thresholds == sorted(thresholds)
        assert len(set(thresholds)) == len(thresholds)

    def test_quest_pools_are_disjoint(self):
        public, hidden = catalog.load_quests()
        assert public and hidden
        assert not {q.id for q in public} & {q.id for q in hidden}
        assert all(not q.hidden for q in public)
        assert all(q.hidden for q in hidden)

    def test_quest_ids_unique(self):
        ids = [q.id for q in catalog.public_quests() + catalog.hidden_quests()]
        assert len(ids) == len(set(ids))

    def test_public_pool_fills_a_week(self):
        assert len(catalog.public_quests()) >= 5

    def test_every_trigger_reveals_something(self):
        triggers = {q.trigger for q in catalog.hidden_quests()}
        assert triggers == set(QuestTrigger)

    def test_get_quest(self):
        assert catalog.get_quest("first-blood").trigger == QuestTrigger.DUEL
        assert catalog.get_quest("nope") is None

    def test_cosmetics(self):
        items = catalog.load_cosmetics()
        assert len({i.id for i in items}) == len(items)
        assert catalog.get_cosmetic("golden-champion").xp_cost == 10000
        assert catalog.get_cosmetic("nope") is None

    def test_duel_templates(self):
        templates = catalog.load_duel_templates()
        assert {t.type for t in templates} >= {DuelType.REPS, DuelType.WEIGHT}
        assert all(t.lift is not None for t in templates if t.type == DuelType.WEIGHT)
        assert catalog.get_duel_template("bench-1rm").lift.value == "bench"
