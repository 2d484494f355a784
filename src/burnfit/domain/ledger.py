"""Domain models for the calorie ledger."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class EntryKind(StrEnum):
    """Kind of ledger event."""

    INTAKE = "intake"
    EXERCISE = "exercise"


@dataclass(frozen=True)
class LedgerEntry:
    """One logged intake or exercise event.

    Calories are stored as a positive magnitude for both kinds.
    """

    id: str
    kind: EntryKind
    calories: int
    timestamp_ms: int
    description: str


@dataclass(frozen=True)
class DailyStats:
    """Intake and burned totals for one local calendar date."""

    date: date
    intake: int
    burned: int


@dataclass(frozen=True)
class DailySummary:
    """Daily stats combined with the profile target."""

    date: date
    intake: int
    burned: int
    net: int
    target: int
    remaining: int
    progress_percent: int
    over_target: bool
    burn_score: int


@dataclass(frozen=True)
class MicroWorkout:
    """Preset short workout that can be logged in one tap."""

    id: int
    title: str
    icon: str

    @property
    def calories(self) -> int:
        return self.id * 20 + 30
