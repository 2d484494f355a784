"""Supabase repository for user state."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TypeVar

from supabase import Client

from burnfit.adapters.records import (
    ledger_from_records,
    ledger_to_records,
    profile_from_record,
    profile_to_record,
)
from burnfit.domain.auth import AuthMethod
from burnfit.domain.ledger import LedgerEntry
from burnfit.domain.profile import Profile
from burnfit.services.storage import (
    AUTH_KEY,
    ENTRIES_KEY,
    IS_ADMIN_KEY,
    PROFILE_KEY,
    StateStore,
)

_logger = logging.getLogger(__name__)

T = TypeVar("T")

STATE_TABLE = "app_state"


@dataclass
class SupabaseStateStore(StateStore):
    """Supabase implementation storing one JSON row per (owner, key)."""

    client: Client
    owner_id: str

    def load_profile(self) -> Profile | None:
        """Return the stored profile."""
        return self._load(PROFILE_KEY, profile_from_record)

    def save_profile(self, profile: Profile) -> None:
        """Overwrite the stored profile."""
        self._upsert(PROFILE_KEY, profile_to_record(profile))

    def load_ledger(self) -> list[LedgerEntry]:
        """Return the stored ledger."""
        return self._load(ENTRIES_KEY, ledger_from_records) or []

    def save_ledger(self, entries: list[LedgerEntry]) -> None:
        """Overwrite the stored ledger."""
        self._upsert(ENTRIES_KEY, ledger_to_records(entries))

    def load_auth(self) -> AuthMethod | None:
        """Return the stored sign-in method."""
        return self._load(AUTH_KEY, AuthMethod)

    def save_auth(self, method: AuthMethod) -> None:
        """Persist the sign-in method."""
        self._upsert(AUTH_KEY, str(method))

    def load_is_admin(self) -> bool:
        """Return the stored admin flag."""
        return self._load(IS_ADMIN_KEY, lambda value: value is True) or False

    def save_is_admin(self, is_admin: bool) -> None:
        """Persist the admin flag."""
        self._upsert(IS_ADMIN_KEY, is_admin)

    def clear_all(self) -> None:
        """Delete every row owned by this user."""
        self.client.table(STATE_TABLE).delete().eq("owner_id", self.owner_id).execute()

    def _load(self, key: str, parse: Callable[[object], T]) -> T | None:
        response = (
            self.client.table(STATE_TABLE)
            .select("value")
            .eq("owner_id", self.owner_id)
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("value")
        if value is None:
            return None
        try:
            return parse(value)
        except (ValueError, KeyError, TypeError, AttributeError):
            _logger.exception(
                "Unreadable state row: owner_id=%s key=%s", self.owner_id, key
            )
            return None

    def _upsert(self, key: str, value: object) -> None:
        self.client.table(STATE_TABLE).upsert(
            {
                "owner_id": self.owner_id,
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="owner_id,key",
        ).execute()
