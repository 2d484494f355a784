"""Pydantic models for the HTTP API."""

from pydantic import BaseModel, Field

from burnfit.domain.auth import AuthMethod
from burnfit.domain.coach import ChatMessage, ChatRole
from burnfit.domain.ledger import DailySummary, EntryKind, LedgerEntry, MicroWorkout
from burnfit.domain.profile import DietaryPreference, Goal, Profile
from burnfit.services.intake import IntakeDraft


class SignInRequest(BaseModel):
    """Start a session as a Google or guest user."""

    method: AuthMethod


class AdminElevationRequest(BaseModel):
    """Admin token presented to elevate the session."""

    token: str


class ProfileSetupRequest(BaseModel):
    """Setup form payload."""

    age: int = Field(gt=0)
    height_cm: float = Field(gt=0)
    weight_kg: float = Field(gt=0)
    goal: Goal = Goal.MAINTAIN
    dietary_preference: DietaryPreference = DietaryPreference.NONE
    email: str | None = None
    phone_number: str | None = None


class ProfileUpdateRequest(BaseModel):
    """Partial profile edit. The daily target is not recomputed."""

    age: int | None = Field(default=None, gt=0)
    height_cm: float | None = Field(default=None, gt=0)
    weight_kg: float | None = Field(default=None, gt=0)
    goal: Goal | None = None
    dietary_preference: DietaryPreference | None = None
    email: str | None = None
    phone_number: str | None = None


class ProfileResponse(BaseModel):
    """Profile as returned to clients."""

    age: int
    height_cm: float
    weight_kg: float
    goal: Goal
    dietary_preference: DietaryPreference
    daily_target_kcal: int
    setup_complete: bool
    email: str | None
    phone_number: str | None
    search_history: list[str]

    @classmethod
    def from_domain(cls, profile: Profile) -> "ProfileResponse":
        return cls(
            age=profile.age,
            height_cm=profile.height_cm,
            weight_kg=profile.weight_kg,
            goal=profile.goal,
            dietary_preference=profile.dietary_preference,
            daily_target_kcal=profile.daily_target_kcal,
            setup_complete=profile.setup_complete,
            email=profile.email,
            phone_number=profile.phone_number,
            search_history=list(profile.search_history),
        )


class IntakeRequest(BaseModel):
    """Confirmed meal to add to the ledger."""

    description: str = ""
    calories: int | None = None


class ExerciseRequest(BaseModel):
    """Exercise session logged by duration."""

    minutes: int
    description: str = ""


class EntryResponse(BaseModel):
    """Ledger entry as returned to clients."""

    id: str
    kind: EntryKind
    calories: int
    timestamp_ms: int
    description: str

    @classmethod
    def from_domain(cls, entry: LedgerEntry) -> "EntryResponse":
        return cls(
            id=entry.id,
            kind=entry.kind,
            calories=entry.calories,
            timestamp_ms=entry.timestamp_ms,
            description=entry.description,
        )


class WorkoutResponse(BaseModel):
    """Preset micro workout."""

    id: int
    title: str
    icon: str
    calories: int

    @classmethod
    def from_domain(cls, workout: MicroWorkout) -> "WorkoutResponse":
        return cls(
            id=workout.id,
            title=workout.title,
            icon=workout.icon,
            calories=workout.calories,
        )


class DailySummaryResponse(BaseModel):
    """Today's totals against the target."""

    date: str
    intake: int
    burned: int
    net: int
    target: int
    remaining: int
    progress_percent: int
    over_target: bool
    burn_score: int

    @classmethod
    def from_domain(cls, summary: DailySummary) -> "DailySummaryResponse":
        return cls(
            date=summary.date.isoformat(),
            intake=summary.intake,
            burned=summary.burned,
            net=summary.net,
            target=summary.target,
            remaining=summary.remaining,
            progress_percent=summary.progress_percent,
            over_target=summary.over_target,
            burn_score=summary.burn_score,
        )


class PhotoEstimateRequest(BaseModel):
    """Base64-encoded meal photo."""

    image_base64: str
    mime_type: str | None = None


class TextEstimateRequest(BaseModel):
    """Free-text meal description."""

    description: str


class IntakeDraftResponse(BaseModel):
    """Suggested intake entry the client may edit before submitting."""

    description: str
    calories: int | None
    source: str

    @classmethod
    def from_domain(cls, draft: IntakeDraft) -> "IntakeDraftResponse":
        return cls(
            description=draft.description,
            calories=draft.calories,
            source=draft.source,
        )


class ChatMessageRequest(BaseModel):
    """User message to the coach."""

    text: str


class ChatMessageResponse(BaseModel):
    """Single coach conversation turn."""

    role: ChatRole
    text: str

    @classmethod
    def from_domain(cls, message: ChatMessage) -> "ChatMessageResponse":
        return cls(role=message.role, text=message.text)
