"""FastAPI application factory."""

import base64
import binascii
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from burnfit.api.admin import router as admin_router
from burnfit.api.models import (
    AdminElevationRequest,
    ChatMessageRequest,
    ChatMessageResponse,
    DailySummaryResponse,
    EntryResponse,
    ExerciseRequest,
    IntakeDraftResponse,
    IntakeRequest,
    PhotoEstimateRequest,
    ProfileResponse,
    ProfileSetupRequest,
    ProfileUpdateRequest,
    SignInRequest,
    TextEstimateRequest,
    WorkoutResponse,
)
from burnfit.app_logging import configure_logging
from burnfit.containers import AppContainer
from burnfit.domain.errors import InvalidInputError, ProfileNotReadyError
from burnfit.domain.profile import Profile
from burnfit.services.ledger import MICRO_WORKOUTS

_UNPROCESSABLE = 422


def _get_container(request: Request) -> AppContainer:
    return request.app.state.container


def require_profile(container: AppContainer = Depends(_get_container)) -> Profile:
    """Return the completed profile that gates the main application."""
    return container.profile_service.require_ready()


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "BurnFit API starting: state_backend=%s",
            app.state.container.settings.state_backend,
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(
        request: Request, exc: InvalidInputError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=_UNPROCESSABLE,
            content={"detail": str(exc)},
        )

    @app.exception_handler(ProfileNotReadyError)
    async def profile_not_ready_handler(
        request: Request, exc: ProfileNotReadyError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/auth/sign-in")
    async def sign_in(
        payload: SignInRequest, state: AppContainer = Depends(_get_container)
    ) -> dict[str, str]:
        """Start a Google or guest session."""
        method = state.auth_service.sign_in(payload.method)
        return {"auth": str(method)}

    @app.post("/auth/sign-out")
    async def sign_out(state: AppContainer = Depends(_get_container)) -> dict[str, str]:
        """Forget the session and every stored record."""
        state.auth_service.sign_out()
        return {"status": "ok"}

    @app.post("/auth/admin")
    async def elevate_admin(
        payload: AdminElevationRequest, state: AppContainer = Depends(_get_container)
    ) -> dict[str, bool]:
        """Elevate the session to admin when the token matches."""
        if not state.auth_service.elevate(payload.token):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail="Invalid admin token"
            )
        return {"is_admin": True}

    @app.get("/profile")
    async def get_profile(
        state: AppContainer = Depends(_get_container),
    ) -> ProfileResponse:
        """Return the stored profile."""
        profile = state.profile_service.get()
        if profile is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="No profile yet"
            )
        return ProfileResponse.from_domain(profile)

    @app.put("/profile")
    async def setup_profile(
        payload: ProfileSetupRequest, state: AppContainer = Depends(_get_container)
    ) -> ProfileResponse:
        """Complete setup and derive the daily target."""
        profile = state.profile_service.complete_setup(
            age=payload.age,
            height_cm=payload.height_cm,
            weight_kg=payload.weight_kg,
            goal=payload.goal,
            dietary_preference=payload.dietary_preference,
            email=payload.email,
            phone_number=payload.phone_number,
        )
        state.coach_session.restart(profile.dietary_preference)
        return ProfileResponse.from_domain(profile)

    @app.patch("/profile")
    async def update_profile(
        payload: ProfileUpdateRequest, state: AppContainer = Depends(_get_container)
    ) -> ProfileResponse:
        """Edit profile fields; the daily target stays as set up."""
        changes = payload.model_dump(exclude_unset=True)
        profile = state.profile_service.update(**changes)
        return ProfileResponse.from_domain(profile)

    @app.get("/entries", dependencies=[Depends(require_profile)])
    async def list_entries(
        state: AppContainer = Depends(_get_container),
    ) -> list[EntryResponse]:
        """Return the ledger, newest first."""
        return [
            EntryResponse.from_domain(entry)
            for entry in state.ledger_service.entries()
        ]

    @app.post(
        "/entries/intake",
        status_code=status.HTTP_201_CREATED,
        dependencies=[Depends(require_profile)],
    )
    async def add_intake(
        payload: IntakeRequest, state: AppContainer = Depends(_get_container)
    ) -> EntryResponse:
        """Log a confirmed meal."""
        entry = state.intake_service.submit(payload.description, payload.calories)
        return EntryResponse.from_domain(entry)

    @app.post(
        "/entries/exercise",
        status_code=status.HTTP_201_CREATED,
        dependencies=[Depends(require_profile)],
    )
    async def add_exercise(
        payload: ExerciseRequest, state: AppContainer = Depends(_get_container)
    ) -> EntryResponse:
        """Log an exercise session by duration."""
        entry = state.ledger_service.log_activity(payload.minutes, payload.description)
        return EntryResponse.from_domain(entry)

    @app.get("/workouts")
    async def list_workouts() -> list[WorkoutResponse]:
        """Return the preset micro workouts."""
        return [WorkoutResponse.from_domain(workout) for workout in MICRO_WORKOUTS]

    @app.post(
        "/entries/workouts/{workout_id}",
        status_code=status.HTTP_201_CREATED,
        dependencies=[Depends(require_profile)],
    )
    async def add_workout(
        workout_id: int, state: AppContainer = Depends(_get_container)
    ) -> EntryResponse:
        """Log a preset micro workout."""
        entry = state.ledger_service.log_micro_workout(workout_id)
        return EntryResponse.from_domain(entry)

    @app.delete("/entries", dependencies=[Depends(require_profile)])
    async def reset_entries(
        state: AppContainer = Depends(_get_container),
    ) -> dict[str, str]:
        """Delete the whole ledger."""
        state.ledger_service.reset()
        return {"status": "ok"}

    @app.get("/stats/today")
    async def today_stats(
        profile: Profile = Depends(require_profile),
        state: AppContainer = Depends(_get_container),
    ) -> DailySummaryResponse:
        """Return today's totals against the daily target."""
        summary = state.ledger_service.today_summary(profile.daily_target_kcal)
        return DailySummaryResponse.from_domain(summary)

    @app.post("/intake/photo", dependencies=[Depends(require_profile)])
    async def estimate_photo(
        payload: PhotoEstimateRequest, state: AppContainer = Depends(_get_container)
    ) -> IntakeDraftResponse:
        """Suggest a meal entry from a photo."""
        try:
            image_bytes = base64.b64decode(payload.image_base64, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise HTTPException(
                status_code=_UNPROCESSABLE,
                detail="image_base64 is not valid base64",
            ) from exc
        if not image_bytes:
            raise HTTPException(
                status_code=_UNPROCESSABLE,
                detail="image_base64 is empty",
            )
        draft = await state.intake_service.draft_from_photo(
            image_bytes, mime_type=payload.mime_type
        )
        return IntakeDraftResponse.from_domain(draft)

    @app.post("/intake/estimate", dependencies=[Depends(require_profile)])
    async def estimate_text(
        payload: TextEstimateRequest, state: AppContainer = Depends(_get_container)
    ) -> IntakeDraftResponse:
        """Suggest calories for a described meal."""
        draft = await state.intake_service.draft_from_text(payload.description)
        return IntakeDraftResponse.from_domain(draft)

    @app.get("/coach/messages")
    async def coach_history(
        state: AppContainer = Depends(_get_container),
    ) -> list[ChatMessageResponse]:
        """Return the session's conversation."""
        return [
            ChatMessageResponse.from_domain(message)
            for message in state.coach_session.history()
        ]

    @app.post("/coach/messages")
    async def coach_send(
        payload: ChatMessageRequest, state: AppContainer = Depends(_get_container)
    ) -> ChatMessageResponse:
        """Send a message to the coach and return its reply."""
        reply = await state.coach_session.send(payload.text)
        return ChatMessageResponse.from_domain(reply)

    @app.post("/coach/fix-my-day")
    async def coach_fix_my_day(
        state: AppContainer = Depends(_get_container),
    ) -> ChatMessageResponse:
        """Return one quick suggestion for the rest of the day."""
        reply = await state.coach_session.fix_my_day()
        return ChatMessageResponse.from_domain(reply)

    return app
