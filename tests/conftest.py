"""Shared test fixtures."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from itertools import count

import pytest

from burnfit.config import Settings
from burnfit.containers import AppContainer
from burnfit.domain.auth import AuthMethod
from burnfit.domain.coach import ChatMessage
from burnfit.domain.ledger import LedgerEntry
from burnfit.domain.profile import DietaryPreference, Goal, Profile
from burnfit.services.admin import AdminService
from burnfit.services.auth import AuthService
from burnfit.services.coach import CoachClient, CoachSession
from burnfit.services.estimator import EstimatorClient, TextEstimatorService
from burnfit.services.intake import IntakeService
from burnfit.services.ledger import LedgerService
from burnfit.services.profiles import ProfileService
from burnfit.services.storage import StateStore
from burnfit.services.vision import VisionClient, VisionService


@dataclass
class FakeClock:
    """Clock returning a settable instant."""

    now: datetime = field(default_factory=lambda: datetime(2025, 3, 14, 12, tzinfo=UTC))

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@dataclass
class InMemoryStateStore(StateStore):
    """In-memory state store for tests."""

    profile: Profile | None = None
    ledger: list[LedgerEntry] = field(default_factory=list)
    auth: AuthMethod | None = None
    is_admin: bool = False
    ledger_saves: int = 0
    profile_saves: int = 0
    clears: int = 0

    def load_profile(self) -> Profile | None:
        return self.profile

    def save_profile(self, profile: Profile) -> None:
        self.profile_saves += 1
        self.profile = profile

    def load_ledger(self) -> list[LedgerEntry]:
        return list(self.ledger)

    def save_ledger(self, entries: list[LedgerEntry]) -> None:
        self.ledger_saves += 1
        self.ledger = list(entries)

    def load_auth(self) -> AuthMethod | None:
        return self.auth

    def save_auth(self, method: AuthMethod) -> None:
        self.auth = method

    def load_is_admin(self) -> bool:
        return self.is_admin

    def save_is_admin(self, is_admin: bool) -> None:
        self.is_admin = is_admin

    def clear_all(self) -> None:
        self.clears += 1
        self.profile = None
        self.ledger = []
        self.auth = None
        self.is_admin = False


@dataclass
class FailingStateStore(InMemoryStateStore):
    """State store whose writes always fail."""

    def save_profile(self, profile: Profile) -> None:
        raise OSError("disk full")

    def save_ledger(self, entries: list[LedgerEntry]) -> None:
        raise OSError("disk full")


@dataclass
class FakeCoachClient(CoachClient):
    """Fake coach client that records calls and returns a fixed reply."""

    text: str = "Drink some water and go for a walk."
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def reply(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        history: list[ChatMessage],
        message: str,
    ) -> str:
        self.calls.append(
            {
                "model": model,
                "instructions": instructions,
                "history": list(history),
                "message": message,
            }
        )
        if self.error is not None:
            raise self.error
        return self.text


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed payload."""

    payload: object = field(
        default_factory=lambda: {"foodName": "Paneer Tikka", "estimatedCalories": 320}
    )
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)
    image_urls: list[str] = field(default_factory=list)

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        self.image_urls.append(image_data_url)
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FakeEstimatorClient(EstimatorClient):
    """Fake text estimator client returning a fixed payload."""

    payload: object = field(
        default_factory=lambda: {
            "estimatedCalories": 245.5,
            "confirmedFoodName": "Oatmeal with banana",
        }
    )
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def estimate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.payload


def sequential_ids() -> Callable[[], str]:
    """Return an id factory producing entry-1, entry-2, ..."""
    counter = count(1)
    return lambda: f"entry-{next(counter)}"


def make_profile(**overrides: object) -> Profile:
    """Return a completed profile for a 25 year old, 175cm, 70kg user."""
    values: dict[str, object] = {
        "age": 25,
        "height_cm": 175,
        "weight_kg": 70,
        "goal": Goal.MAINTAIN,
        "dietary_preference": DietaryPreference.VEGETARIAN,
        "daily_target_kcal": 2009,
        "setup_complete": True,
    }
    values.update(overrides)
    return Profile(**values)


def build_vision_service(client: VisionClient | None = None) -> VisionService:
    return VisionService(
        client=client or FakeVisionClient(),
        model="gpt-5-mini",
        reasoning_effort="low",
        store=False,
    )


def build_estimator_service(
    client: EstimatorClient | None = None,
) -> TextEstimatorService:
    return TextEstimatorService(
        client=client or FakeEstimatorClient(),
        model="gpt-5-mini",
        reasoning_effort="low",
        store=False,
    )


@pytest.fixture(autouse=True)
def _propagate_burnfit_logs() -> None:
    logging.getLogger("burnfit").propagate = True


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        openai_api_key="openai-key",
        admin_token="admin-token",
        state_dir=str(tmp_path / "state"),
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def state_store() -> InMemoryStateStore:
    return InMemoryStateStore()


@pytest.fixture
def coach_client() -> FakeCoachClient:
    return FakeCoachClient()


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def estimator_client() -> FakeEstimatorClient:
    return FakeEstimatorClient()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    state_store: InMemoryStateStore,
    clock: FakeClock,
    coach_client: FakeCoachClient,
    vision_client: FakeVisionClient,
    estimator_client: FakeEstimatorClient,
) -> AppContainer:
    profile_service = ProfileService(state_store)
    ledger_service = LedgerService(state_store, clock=clock)
    coach_session = CoachSession(
        client=coach_client,
        profiles=profile_service,
        ledger=ledger_service,
        model=settings.openai_model,
        quick_model=settings.openai_fast_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )
    vision_service = build_vision_service(vision_client)
    estimator_service = build_estimator_service(estimator_client)
    intake_service = IntakeService(
        ledger=ledger_service,
        profiles=profile_service,
        vision=vision_service,
        estimator=estimator_service,
    )
    auth_service = AuthService(
        store=state_store,
        profiles=profile_service,
        ledger=ledger_service,
        coach=coach_session,
        admin_token=settings.admin_token,
    )
    admin_service = AdminService(
        profiles=profile_service,
        ledger=ledger_service,
        auth=auth_service,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        state_store=state_store,
        profile_service=profile_service,
        ledger_service=ledger_service,
        coach_session=coach_session,
        vision_service=vision_service,
        estimator_service=estimator_service,
        intake_service=intake_service,
        auth_service=auth_service,
        admin_service=admin_service,
        close_resources=close_resources,
    )
