"""
Shared fixtures: in-memory fakes, services wired to them, and an API client
whose repository, clock and auth dependencies are overridden with the fakes.
"""
import pytest
from fastapi.testclient import TestClient

from api import deps
from backend.core.cosmetic_service import CosmeticService
from backend.core.duel_service import DuelService
from backend.core.profile_service import ProfileService
from backend.core.quest_service import QuestService
from backend.main import create_app
from backend.settings import Settings
from tests.fakes import (
    FakeClock,
    FakeDuelRepository,
    FakeGymWarRepository,
    FakeProfileRepository,
    FakeQuestProgressRepository,
    make_profile,
)

TEST_USER_ID = "alice"
OPPONENT_ID = "bob"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def profile_repo() -> FakeProfileRepository:
    repo = FakeProfileRepository()
    repo.seed([
        make_profile(TEST_USER_ID, display_name="Alice", bench=185, squat=225, deadlift=275, ohp=95,
                     bodyweight_kg=80),
        make_profile(OPPONENT_ID, display_name="Bob", bench=225, squat=315, deadlift=405, ohp=135,
                     bodyweight_kg=95),
    ])
    return repo


@pytest.fixture
def quest_repo() -> FakeQuestProgressRepository:
    return FakeQuestProgressRepository()


@pytest.fixture
def duel_repo() -> FakeDuelRepository:
    return FakeDuelRepository()


@pytest.fixture
def gym_war_repo() -> FakeGymWarRepository:
    return FakeGymWarRepository()


@pytest.fixture
def profile_service(profile_repo) -> ProfileService:
    return ProfileService(profile_repo)


@pytest.fixture
def quest_service(quest_repo, profile_repo, clock) -> QuestService:
    return QuestService(quest_repo, profile_repo, clock)


@pytest.fixture
def duel_service(duel_repo, profile_repo, clock) -> DuelService:
    return DuelService(duel_repo, profile_repo, clock)


@pytest.fixture
def cosmetic_service(profile_repo) -> CosmeticService:
    return CosmeticService(profile_repo)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(environment="test", _env_file=None)


@pytest.fixture
def app(test_settings, profile_repo, quest_repo, duel_repo, gym_war_repo, clock):
    """App with every port overridden by a fake and auth fixed to TEST_USER_ID."""
    app = create_app(settings=test_settings)

    async def _current_user() -> str:
        return TEST_USER_ID

    app.dependency_overrides[deps.get_current_user] = _current_user
    app.dependency_overrides[deps.get_profile_repo] = lambda: profile_repo
    app.dependency_overrides[deps.get_quest_progress_repo] = lambda: quest_repo
    app.dependency_overrides[deps.get_duel_repo] = lambda: duel_repo
    app.dependency_overrides[deps.get_gym_war_repo] = lambda: gym_war_repo
    app.dependency_overrides[deps.get_clock] = lambda: clock
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def as_user(app):
    """Switch the authenticated user for subsequent requests."""
    def _switch(user_id: str) -> None:
        async def _current_user() -> str:
            return user_id
        app.dependency_overrides[deps.get_current_user] = _current_user
    return _switch
