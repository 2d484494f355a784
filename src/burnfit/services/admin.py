"""Admin service for inspecting stored state."""

from dataclasses import dataclass

from burnfit.domain.ledger import DailySummary, LedgerEntry
from burnfit.domain.profile import Profile
from burnfit.services.auth import AuthService
from burnfit.services.ledger import LedgerService
from burnfit.services.profiles import ProfileService


@dataclass
class AdminService:
    """Read-only snapshot of the session for admins."""

    profiles: ProfileService
    ledger: LedgerService
    auth: AuthService

    def snapshot(self, recent_limit: int = 10) -> dict[str, object]:
        """Return profile, ledger size, recent entries and today's summary."""
        profile = self.profiles.get()
        entries = self.ledger.entries()
        today = None
        if profile is not None and profile.setup_complete:
            today = _serialize_summary(
                self.ledger.today_summary(profile.daily_target_kcal)
            )
        auth = self.auth.current_method()
        return {
            "auth": str(auth) if auth else None,
            "is_admin": self.auth.is_admin(),
            "profile": _serialize_profile(profile) if profile else None,
            "entry_count": len(entries),
            "recent_entries": [_serialize_entry(e) for e in entries[:recent_limit]],
            "today": today,
        }


def _serialize_profile(profile: Profile) -> dict[str, object]:
    return {
        "age": profile.age,
        "height_cm": profile.height_cm,
        "weight_kg": profile.weight_kg,
        "goal": str(profile.goal),
        "dietary_preference": str(profile.dietary_preference),
        "daily_target_kcal": profile.daily_target_kcal,
        "setup_complete": profile.setup_complete,
        "search_history_size": len(profile.search_history),
    }


def _serialize_entry(entry: LedgerEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "kind": str(entry.kind),
        "calories": entry.calories,
        "timestamp_ms": entry.timestamp_ms,
        "description": entry.description,
    }


def _serialize_summary(summary: DailySummary) -> dict[str, object]:
    return {
        "date": summary.date.isoformat(),
        "intake": summary.intake,
        "burned": summary.burned,
        "net": summary.net,
        "remaining": summary.remaining,
        "progress_percent": summary.progress_percent,
    }
