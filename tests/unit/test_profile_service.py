"""
Unit tests for ProfileService: lift edits, rank summary and personal records.
"""
import pytest

from application.exceptions import InvalidInput, NotFound
from domain.models import LiftName, WeightUnit

pytestmark = pytest.mark.unit

USER = "alice"  # 185/225/275/95 lb


class TestRankSummary:

    def test_summary(self, profile_service, profile_repo):
        profile_repo.add_xp(USER, 750)
        summary = profile_service.get_rank_summary(USER)

        assert summary.rank.name == "Contender"
        assert summary.next_rank.name == "Athlete"
        assert summary.progress_percent == pytest.approx(90.0)
        assert summary.total_lb == 780
        assert summary.xp == 750
        assert summary.level.name == "Iron"
        assert summary.next_level.name == "Steel"
        assert summary.level_progress_percent == pytest.approx(25.0)

    def test_unknown_user(self, profile_service):
        with pytest.raises(NotFound):
            profile_service.get_rank_summary("nobody")


class TestUpdateLifts:

    def test_partial_update_keeps_other_lifts(self, profile_service):
        profile = profile_service.update_lifts(USER, {"bench": 175})
        assert profile.bench == 175
        assert profile.squat == 225
        assert profile.deadlift == 275

    def test_values_may_decrease(self, profile_service):
        assert profile_service.update_lifts(USER, {"deadlift": 0}).deadlift == 0

    def test_unit_change_converts_omitted_lifts(self, profile_service):
        profile = profile_service.update_lifts(USER, {"bench": 90}, unit="kg")
        assert profile.unit == WeightUnit.KG
        assert profile.bench == 90
        assert profile.squat == pytest.approx(102.1)

    @pytest.mark.parametrize("lifts", [{"bench": -1}, {"bench": "heavy"}, {"curl": 50}, {"ohp": True}])
    def test_rejects_bad_input(self, profile_service, lifts):
        with pytest.raises(InvalidInput):
            profile_service.update_lifts(USER, lifts)

    def test_rejects_unknown_unit(self, profile_service):
        with pytest.raises(InvalidInput):
            profile_service.update_lifts(USER, {"bench": 100}, unit="stone")


class TestPersonalRecord:

    def test_new_pr_is_stored_and_rewarded(self, profile_service, profile_repo):
        result = profile_service.record_personal_record(USER, "bench", 200)

        assert result.is_pr
        assert result.lift == LiftName.BENCH
        assert result.previous_value == 185
        assert result.new_value == 200
        assert result.xp_awarded == 500
        assert not result.ranked_up
        assert profile_service.get_lift_profile(USER).bench == 200
        assert profile_repo.xp_of(USER) == 500

    def test_not_a_pr(self, profile_service, profile_repo):
        result = profile_service.record_personal_record(USER, "squat", 225)
        assert not result.is_pr
        assert result.xp_awarded == 0
        assert profile_repo.xp_of(USER) == 0

    def test_pr_can_rank_up(self, profile_service):
        """780 + 25 lb on deadlift crosses the 800 lb Athlete threshold."""
        result = profile_service.record_personal_record(USER, "deadlift", 300)
        assert result.rank_before.name == "Contender"
        assert result.rank_after.name == "Athlete"
        assert result.ranked_up

    def test_reported_in_other_unit(self, profile_service):
        result = profile_service.record_personal_record(USER, "bench", 100, unit="kg")
        assert result.unit == WeightUnit.LB
        assert result.new_value == pytest.approx(220.5)

    def test_invalid_value(self, profile_service):
        with pytest.raises(InvalidInput):
            profile_service.record_personal_record(USER, "bench", -10)
