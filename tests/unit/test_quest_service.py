"""
Unit tests for the quest rotation and QuestService.

Tests cover:
- Week index boundaries (Monday 00:00 UTC)
- Deterministic weekly selection
- Progress, completion and the single XP grant
- Hidden quest reveal via achievement triggers
"""
from datetime import datetime, timedelta, timezone

import pytest

from application.exceptions import InvalidInput, NotFound
from backend.core import catalog
from backend.core.quest_service import (
    WEEKLY_QUEST_COUNT,
    get_active_weekly_quests,
    rotation_key,
    week_index,
)
from domain.models import HIDDEN_PLACEHOLDER, QuestTrigger

pytestmark = pytest.mark.unit

USER = "alice"


# =============================================================================
# Rotation
# =============================================================================


class TestWeekIndex:

    def test_epoch_is_week_zero(self):
        assert week_index(datetime(1970, 1, 5, tzinfo=timezone.utc)) == 0

    def test_sunday_night_is_same_week(self):
        assert week_index(datetime(1970, 1, 11, 23, 59, 59, tzinfo=timezone.utc)) == 0

    def test_monday_midnight_rolls_over(self):
        assert week_index(datetime(1970, 1, 12, tzinfo=timezone.utc)) == 1

    def test_naive_datetime_is_utc(self):
        assert week_index(datetime(1970, 1, 12)) == 1

    def test_other_timezones_are_normalized(self):
        # Monday 01:00 at UTC+2 is still Sunday 23:00 UTC
        plus_two = timezone(timedelta(hours=2))
        assert week_index(datetime(1970, 1, 12, 1, 0, tzinfo=plus_two)) == 0


class TestWeeklyQuests:

    NOW = datetime(2025, 3, 5, 15, 30, tzinfo=timezone.utc)

    def test_returns_five_distinct_public_quests(self):
        quests = get_active_weekly_quests(self.NOW)
        assert len(quests) == WEEKLY_QUEST_COUNT
        assert len({q.id for q in quests}) == WEEKLY_QUEST_COUNT
        assert all(not q.hidden for q in quests)

    def test_same_selection_within_a_week(self):
        monday = datetime(2025, 3, 3, tzinfo=timezone.utc)
        sunday = datetime(2025, 3, 9, 23, 59, tzinfo=timezone.utc)
        assert get_active_weekly_quests(monday) == get_active_weekly_quests(sunday)

    def test_repeated_calls_agree(self):
        assert get_active_weekly_quests(self.NOW) == get_active_weekly_quests(self.NOW)

    def test_selection_changes_across_weeks(self):
        selections = {
            tuple(q.id for q in get_active_weekly_quests(self.NOW + timedelta(weeks=w)))
            for w in range(8)
        }
        assert len(selections) > 1

    def test_order_follows_rotation_key(self):
        week = week_index(self.NOW)
        keys = [(rotation_key(week, q.id), q.id) for q in get_active_weekly_quests(self.NOW)]
        assert keys == sorted(keys)

    def test_rotation_key_is_stable(self):
        assert rotation_key(2826, "iron-arms") == rotation_key(2826, "iron-arms")
        assert rotation_key(2826, "iron-arms") != rotation_key(2827, "iron-arms")

    def test_small_pool_returns_everything(self):
        pool = catalog.public_quests()[:3]
        assert len(get_active_weekly_quests(self.NOW, pool=pool)) == 3


# =============================================================================
# Progress and completion
# =============================================================================


class TestIncrementProgress:

    def test_partial_progress_grants_nothing(self, quest_service, profile_repo):
        result = quest_service.increment_progress(USER, "leg-day-conqueror", 1)
        assert result.progress == 1
        assert not result.completed
        assert result.xp_awarded == 0
        assert profile_repo.xp_of(USER) == 0

    def test_reaching_target_grants_xp(self, quest_service, profile_repo):
        quest_service.increment_progress(USER, "leg-day-conqueror", 2)
        result = quest_service.increment_progress(USER, "leg-day-conqueror", 1)
        assert result.completed
        assert result.xp_awarded == 75
        assert profile_repo.xp_of(USER) == 75

    def test_xp_granted_only_once(self, quest_service, profile_repo):
        quest_service.increment_progress(USER, "leg-day-conqueror", 3)
        again = quest_service.increment_progress(USER, "leg-day-conqueror", 5)
        assert again.completed
        assert again.xp_awarded == 0
        assert profile_repo.xp_of(USER) == 75

    def test_evaluate_completion_is_idempotent(self, quest_service, quest_repo, profile_repo):
        quest_repo.seed_progress(USER, {"iron-arms": 3})
        assert quest_service.evaluate_completion(USER, "iron-arms") == 75
        assert quest_service.evaluate_completion(USER, "iron-arms") == 0
        assert profile_repo.xp_of(USER) == 75

    @pytest.mark.parametrize("amount", [0, -1, float("nan"), True])
    def test_non_positive_amount_rejected(self, quest_service, amount):
        with pytest.raises(InvalidInput):
            quest_service.increment_progress(USER, "iron-arms", amount)

    def test_unknown_quest(self, quest_service):
        with pytest.raises(NotFound):
            quest_service.increment_progress(USER, "no-such-quest", 1)

    def test_unrevealed_hidden_quest_rejected(self, quest_service):
        with pytest.raises(InvalidInput):
            quest_service.increment_progress(USER, "first-blood", 1)

    def test_revealed_hidden_quest_accepts_progress(self, quest_service, profile_repo):
        quest_service.reveal_hidden_quest(USER, "first-blood")
        result = quest_service.increment_progress(USER, "first-blood", 1)
        assert result.completed
        assert profile_repo.xp_of(USER) == catalog.get_quest("first-blood").xp_reward


# =============================================================================
# Hidden quests
# =============================================================================


class TestHiddenQuests:

    def test_reveal_is_one_way(self, quest_service):
        assert quest_service.reveal_hidden_quest(USER, "war-hero") is True
        assert quest_service.reveal_hidden_quest(USER, "war-hero") is False

    def test_reveal_is_stamped_with_clock_time(self, quest_service, quest_repo, clock):
        quest_service.reveal_hidden_quest(USER, "war-hero")
        assert quest_repo.revealed_at[USER]["war-hero"] == clock.now()

    def test_public_quest_cannot_be_revealed(self, quest_service):
        with pytest.raises(InvalidInput):
            quest_service.reveal_hidden_quest(USER, "iron-arms")

    def test_achievement_reveals_matching_trigger(self, quest_service):
        revealed = quest_service.handle_achievement(USER, "duel")
        expected = {q.id for q in catalog.hidden_quests() if q.trigger == QuestTrigger.DUEL}
        assert {q.id for q in revealed} == expected
        assert quest_service.handle_achievement(USER, "duel") == []

    def test_unknown_trigger(self, quest_service):
        with pytest.raises(InvalidInput):
            quest_service.handle_achievement(USER, "lottery")

    def test_board_shows_placeholder_until_revealed(self, quest_service):
        now = datetime(2025, 3, 5, tzinfo=timezone.utc)
        board = quest_service.get_user_quests(USER, now)
        war_hero = next(v for v in board.hidden if v.quest.id == "war-hero")
        assert war_hero.display == HIDDEN_PLACEHOLDER
        assert not war_hero.revealed

        quest_service.handle_achievement(USER, "gym_war")
        board = quest_service.get_user_quests(USER, now)
        war_hero = next(v for v in board.hidden if v.quest.id == "war-hero")
        assert war_hero.revealed
        assert war_hero.display.title == "War Hero"

    def test_board_reports_weekly_progress(self, quest_service):
        now = datetime(2025, 3, 5, tzinfo=timezone.utc)
        weekly_id = get_active_weekly_quests(now)[0].id
        quest_service.increment_progress(USER, weekly_id, 1)

        board = quest_service.get_user_quests(USER, now)
        assert board.week == week_index(now)
        assert [v.quest.id for v in board.weekly] == [q.id for q in get_active_weekly_quests(now)]
        assert board.weekly[0].progress == 1
        assert len(board.hidden) == len(catalog.hidden_quests())
