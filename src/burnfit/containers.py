"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

import httpx
from openai import AsyncOpenAI
from supabase import create_client

from burnfit.adapters.json_file_state_store import JsonFileStateStore
from burnfit.adapters.openai_coach_client import OpenAICoachClient
from burnfit.adapters.openai_estimator_client import OpenAIEstimatorClient
from burnfit.adapters.openai_vision_client import OpenAIVisionClient
from burnfit.adapters.supabase_state_store import SupabaseStateStore
from burnfit.config import Settings, parse_state_backend
from burnfit.services.admin import AdminService
from burnfit.services.auth import AuthService
from burnfit.services.clock import make_clock
from burnfit.services.coach import CoachSession
from burnfit.services.estimator import TextEstimatorService
from burnfit.services.intake import IntakeService
from burnfit.services.ledger import LedgerService
from burnfit.services.profiles import ProfileService
from burnfit.services.storage import StateStore
from burnfit.services.vision import VisionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    state_store: StateStore
    profile_service: ProfileService
    ledger_service: LedgerService
    coach_session: CoachSession
    vision_service: VisionService
    estimator_service: TextEstimatorService
    intake_service: IntakeService
    auth_service: AuthService
    admin_service: AdminService
    close_resources: Callable[[], Awaitable[None]]


def build_state_store(settings: Settings) -> StateStore:
    """Create the configured state store adapter."""
    backend = parse_state_backend(settings.state_backend)
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase backend needs SUPABASE_URL and key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseStateStore(client=client, owner_id=settings.state_owner_id)
    return JsonFileStateStore(directory=Path(settings.state_dir))


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    state_store = build_state_store(resolved_settings)
    clock = make_clock(resolved_settings.timezone)

    http_client = httpx.AsyncClient(timeout=resolved_settings.openai_timeout_seconds)
    openai_client = AsyncOpenAI(
        api_key=resolved_settings.openai_api_key, http_client=http_client
    )

    profile_service = ProfileService(state_store)
    ledger_service = LedgerService(state_store, clock=clock)
    coach_session = CoachSession(
        client=OpenAICoachClient(openai_client),
        profiles=profile_service,
        ledger=ledger_service,
        model=resolved_settings.openai_model,
        quick_model=resolved_settings.openai_fast_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    vision_service = VisionService(
        client=OpenAIVisionClient(openai_client),
        model=resolved_settings.openai_fast_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    estimator_service = TextEstimatorService(
        client=OpenAIEstimatorClient(openai_client),
        model=resolved_settings.openai_fast_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
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
        admin_token=resolved_settings.admin_token,
    )
    admin_service = AdminService(
        profiles=profile_service,
        ledger=ledger_service,
        auth=auth_service,
    )

    async def close_resources() -> None:
        await http_client.aclose()

    return AppContainer(
        settings=resolved_settings,
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
