"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of the application
ports for fast, isolated testing. No database or external dependencies
required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeProfileRepository, create_profile_repo

    # Direct instantiation
    repo = FakeProfileRepository()
    repo.seed([make_profile("alice", bench=185)])

    # Factory function with pre-populated data
    repo = create_profile_repo(alice={"bench": 185, "bodyweight_kg": 80})
"""
from typing import Any, Dict

from tests.fakes.clock import DEFAULT_NOW, FakeClock
from tests.fakes.duel_repository import FakeDuelRepository
from tests.fakes.gym_war_repository import FakeGymWarRepository
from tests.fakes.profile_repository import FakeProfileRepository, make_profile
from tests.fakes.quest_progress_repository import FakeQuestProgressRepository


# =============================================================================
# Factory Functions
# =============================================================================


def create_profile_repo(**profiles: Dict[str, Any]) -> FakeProfileRepository:
    """
    Create a FakeProfileRepository with one profile per keyword argument.

    Args:
        **profiles: user_id -> make_profile() keyword arguments

    Returns:
        Pre-populated FakeProfileRepository
    """
    repo = FakeProfileRepository()
    repo.seed([make_profile(user_id, **fields) for user_id, fields in profiles.items()])
    return repo


def create_gym_war_repo(week_index: int, num_gyms: int = 3) -> FakeGymWarRepository:
    """Create a FakeGymWarRepository with ``num_gyms`` gyms for one week."""
    repo = FakeGymWarRepository()
    repo.seed(week_index, [
        {
            "gym_id": f"gym-{i}",
            "gym_name": f"Gym {i}",
            "location": "Testville",
            "total_workouts": 10 * i,
            "total_xp": 1000 * i,
            "member_count": i + 1,
            "streak": i,
        }
        for i in range(1, num_gyms + 1)
    ])
    return repo


__all__ = [
    # Fakes
    "FakeProfileRepository",
    "FakeQuestProgressRepository",
    "FakeDuelRepository",
    "FakeGymWarRepository",
    "FakeClock",
    # Helpers
    "DEFAULT_NOW",
    "make_profile",
    "create_profile_repo",
    "create_gym_war_repo",
]
