"""Ledger service for intake and exercise events."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import uuid4

from burnfit.domain.errors import InvalidInputError
from burnfit.domain.ledger import (
    DailyStats,
    DailySummary,
    EntryKind,
    LedgerEntry,
    MicroWorkout,
)
from burnfit.services.clock import Clock, make_clock, to_timestamp_ms
from burnfit.services.stats import get_today_stats, summarize_day
from burnfit.services.storage import StateStore

_logger = logging.getLogger(__name__)

KCAL_PER_ACTIVITY_MINUTE = 7
DEFAULT_ACTIVITY_DESCRIPTION = "Activity"

MICRO_WORKOUTS: tuple[MicroWorkout, ...] = (
    MicroWorkout(id=1, title="5-minute brisk walk", icon="🚶"),
    MicroWorkout(id=2, title="7-minute home stretching", icon="🧘"),
    MicroWorkout(id=3, title="10-minute core workout", icon="💪"),
    MicroWorkout(id=4, title="5-minute desk yoga", icon="✨"),
)


def _new_entry_id() -> str:
    return str(uuid4())


@dataclass
class LedgerService:
    """Holds the in-memory ledger and mirrors it to the store."""

    store: StateStore
    clock: Clock = field(default_factory=make_clock)
    id_factory: Callable[[], str] = _new_entry_id
    _entries: list[LedgerEntry] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        self._entries = list(self.store.load_ledger())

    def entries(self) -> list[LedgerEntry]:
        """Return the ledger, newest first."""
        return list(self._entries)

    def add_entry(
        self, kind: EntryKind, calories: int, description: str
    ) -> LedgerEntry:
        """Prepend a new entry stamped with the current time and persist."""
        entry = LedgerEntry(
            id=self.id_factory(),
            kind=EntryKind(kind),
            calories=calories,
            timestamp_ms=to_timestamp_ms(self.clock()),
            description=description,
        )
        self._entries = [entry, *self._entries]
        self._persist()
        return entry

    def log_activity(self, minutes: int, description: str = "") -> LedgerEntry:
        """Log an exercise session worth a fixed burn per minute."""
        if minutes <= 0:
            raise InvalidInputError("Duration must be a positive number of minutes")
        return self.add_entry(
            EntryKind.EXERCISE,
            minutes * KCAL_PER_ACTIVITY_MINUTE,
            description.strip() or DEFAULT_ACTIVITY_DESCRIPTION,
        )

    def log_micro_workout(self, workout_id: int) -> LedgerEntry:
        """Log one of the preset micro workouts."""
        workout = get_micro_workout(workout_id)
        if workout is None:
            raise InvalidInputError(f"Unknown workout: {workout_id}")
        return self.add_entry(EntryKind.EXERCISE, workout.calories, workout.title)

    def today_stats(self) -> DailyStats:
        """Return today's totals recomputed from the whole ledger."""
        return get_today_stats(self._entries, self.clock())

    def today_summary(self, daily_target_kcal: int) -> DailySummary:
        """Return today's totals measured against the target."""
        return summarize_day(self.today_stats(), daily_target_kcal)

    def reset(self) -> None:
        """Drop every entry."""
        self._entries = []
        self._persist()

    def forget(self) -> None:
        """Drop the in-memory ledger after the store was cleared."""
        self._entries = []

    def _persist(self) -> None:
        try:
            self.store.save_ledger(self.entries())
        except Exception:
            _logger.exception(
                "Failed to persist ledger (%s entries)", len(self._entries)
            )


def get_micro_workout(workout_id: int) -> MicroWorkout | None:
    """Return the preset workout with the given id."""
    for workout in MICRO_WORKOUTS:
        if workout.id == workout_id:
            return workout
    return None
