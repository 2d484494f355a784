"""JSON record codec shared by the state store adapters.

Records use the camelCase layout the BurnFit web client stores, so existing
exports load unchanged.
"""

from burnfit.domain.ledger import EntryKind, LedgerEntry
from burnfit.domain.profile import (
    SEARCH_HISTORY_LIMIT,
    DietaryPreference,
    Goal,
    Profile,
)


def profile_to_record(profile: Profile) -> dict[str, object]:
    """Serialize a profile to a JSON-ready dict."""
    return {
        "age": profile.age,
        "height": profile.height_cm,
        "weight": profile.weight_kg,
        "goal": str(profile.goal),
        "dietaryPreference": str(profile.dietary_preference),
        "dailyTarget": profile.daily_target_kcal,
        "setupComplete": profile.setup_complete,
        "email": profile.email,
        "phoneNumber": profile.phone_number,
        "searchHistory": list(profile.search_history),
    }


def profile_from_record(record: dict[str, object]) -> Profile:
    """Parse a stored profile record."""
    history = record.get("searchHistory") or []
    return Profile(
        age=int(record["age"]),
        height_cm=float(record["height"]),
        weight_kg=float(record["weight"]),
        goal=Goal(record["goal"]),
        dietary_preference=DietaryPreference(
            record.get("dietaryPreference") or DietaryPreference.NONE
        ),
        daily_target_kcal=int(record["dailyTarget"]),
        setup_complete=bool(record.get("setupComplete", False)),
        email=record.get("email"),
        phone_number=record.get("phoneNumber"),
        search_history=tuple(str(item) for item in history)[:SEARCH_HISTORY_LIMIT],
    )


def entry_to_record(entry: LedgerEntry) -> dict[str, object]:
    """Serialize a ledger entry to a JSON-ready dict."""
    return {
        "id": entry.id,
        "type": str(entry.kind),
        "calories": entry.calories,
        "timestamp": entry.timestamp_ms,
        "description": entry.description,
    }


def entry_from_record(record: dict[str, object]) -> LedgerEntry:
    """Parse a stored ledger entry record."""
    return LedgerEntry(
        id=str(record["id"]),
        kind=EntryKind(record["type"]),
        calories=int(record["calories"]),
        timestamp_ms=int(record["timestamp"]),
        description=str(record.get("description", "")),
    )


def ledger_to_records(entries: list[LedgerEntry]) -> list[dict[str, object]]:
    """Serialize a ledger collection."""
    return [entry_to_record(entry) for entry in entries]


def ledger_from_records(records: list[dict[str, object]]) -> list[LedgerEntry]:
    """Parse a stored ledger collection."""
    return [entry_from_record(record) for record in records]
