"""Coach conversation session backed by an LLM."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from burnfit.domain.coach import ChatMessage, ChatRole
from burnfit.domain.errors import InvalidInputError
from burnfit.domain.ledger import DailyStats
from burnfit.domain.profile import DietaryPreference, Profile
from burnfit.services.ledger import LedgerService
from burnfit.services.profiles import ProfileService

_logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Hey there! I'm your BurnFit Coach. Ready to smash some goals today?"
EMPTY_REPLY = "I've looked over your day and I'm ready to help! Let's stay active."
FALLBACK_REPLY = (
    "I'm having a bit of trouble connecting right now. "
    "Let's try again in a second!"
)
FIX_MY_DAY_FALLBACK = "Take a 5-minute breather and a walk around the block!"


class CoachClient(Protocol):
    """Interface for LLM coaching replies."""

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
        """Return the assistant reply text."""


@dataclass
class CoachSession:
    """Session-scoped conversation with the AI coach.

    History lives in memory only. Every reply is computed against freshly
    aggregated daily stats. Client failures never escape ``send``: the user
    turn stays in history and a fixed fallback reply is appended instead.
    """

    client: CoachClient
    profiles: ProfileService
    ledger: LedgerService
    model: str
    quick_model: str
    reasoning_effort: str | None
    store: bool
    _history: list[ChatMessage] = field(init=False, default_factory=list)
    _generation: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        self._history = [ChatMessage(ChatRole.ASSISTANT, WELCOME_MESSAGE)]

    def history(self) -> list[ChatMessage]:
        """Return a copy of the conversation so far."""
        return list(self._history)

    def restart(self, dietary_preference: DietaryPreference) -> None:
        """Start a new conversation after profile setup."""
        self._generation += 1
        self._history = [
            ChatMessage(
                ChatRole.ASSISTANT,
                f"Profile synced! I've noted your preference for a "
                f"{dietary_preference} diet. Let's start your journey today!",
            )
        ]

    def reset(self) -> None:
        """Forget the conversation after sign-out; in-flight replies are dropped."""
        self._generation += 1
        self._history = [ChatMessage(ChatRole.ASSISTANT, WELCOME_MESSAGE)]

    async def send(self, text: str) -> ChatMessage:
        """Send a user message and return the assistant turn appended for it."""
        self.profiles.require_ready()
        message = text.strip()
        if not message:
            raise InvalidInputError("Message must not be empty")

        prior = list(self._history)
        self._history.append(ChatMessage(ChatRole.USER, message))
        profile = self.profiles.record_search(message)
        stats = self.ledger.today_stats()
        generation = self._generation

        try:
            reply = await self.client.reply(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                instructions=_coach_instructions(profile, stats),
                history=prior,
                message=message,
            )
            reply_text = reply.strip() or EMPTY_REPLY
        except Exception:
            _logger.exception("Coach reply failed")
            reply_text = FALLBACK_REPLY
        return self._append_reply(reply_text, generation)

    async def fix_my_day(self) -> ChatMessage:
        """Ask for a single quick suggestion based on today's numbers."""
        profile = self.profiles.require_ready()
        stats = self.ledger.today_stats()
        generation = self._generation
        prompt = (
            f"Based on my {profile.dietary_preference} dietary preference: "
            f"Intake {stats.intake}, Burned {stats.burned}, "
            f"Goal {profile.daily_target_kcal}. "
            "Give me one simple action or meal suggestion."
        )
        try:
            reply = await self.client.reply(
                model=self.quick_model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                instructions=_fix_my_day_instructions(profile),
                history=[],
                message=prompt,
            )
            reply_text = reply.strip() or FIX_MY_DAY_FALLBACK
        except Exception:
            _logger.exception("Fix-my-day suggestion failed")
            reply_text = FIX_MY_DAY_FALLBACK
        return self._append_reply(reply_text, generation)

    def _append_reply(self, text: str, generation: int) -> ChatMessage:
        reply = ChatMessage(ChatRole.ASSISTANT, text)
        if generation != self._generation:
            _logger.info("Dropping coach reply for a restarted conversation")
            return reply
        self._history.append(reply)
        return reply


def diet_guidance(preference: DietaryPreference) -> str:
    """Describe which meal suggestions suit the dietary preference."""
    if preference == DietaryPreference.VEGETARIAN:
        return "vegetarian (no meat or fish)"
    if preference == DietaryPreference.NON_VEGETARIAN:
        return "protein-rich (can include meat or fish)"
    return "balanced (no dietary restrictions)"


def _coach_instructions(profile: Profile, stats: DailyStats) -> str:
    return (
        "You are BurnFit AI Coach.\n"
        f"The user is {profile.age} years old, {profile.height_cm:g}cm, "
        f"{profile.weight_kg:g}kg, with a goal to {profile.goal} weight.\n"
        f"DIETARY PREFERENCE: {profile.dietary_preference}. "
        f"Only suggest {diet_guidance(profile.dietary_preference)} meal options "
        "if food is mentioned.\n"
        f"Today: Eaten {stats.intake} kcal, Burned {stats.burned} kcal. "
        f"Target: {profile.daily_target_kcal} kcal.\n"
        f"Recent questions: {'; '.join(profile.search_history[:5]) or 'none'}.\n"
        "Personality:\n"
        "- Supportive, expert and motivational.\n"
        "- Keep responses short and actionable (max 3 sentences)."
    )


def _fix_my_day_instructions(profile: Profile) -> str:
    guidance = diet_guidance(profile.dietary_preference)
    return (
        "You are BurnFit Coach. "
        f"If suggesting food, it MUST be {guidance}. "
        "Provide exactly one supportive, brief activity or meal suggestion."
    )
