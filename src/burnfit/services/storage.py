"""Persistence interface for profile, ledger and session flags."""

from typing import Protocol

from burnfit.domain.auth import AuthMethod
from burnfit.domain.ledger import LedgerEntry
from burnfit.domain.profile import Profile

PROFILE_KEY = "profile"
ENTRIES_KEY = "entries"
AUTH_KEY = "auth"
IS_ADMIN_KEY = "isAdmin"
STATE_KEYS = (PROFILE_KEY, ENTRIES_KEY, AUTH_KEY, IS_ADMIN_KEY)


class StateStore(Protocol):
    """Durable key-value storage for one user.

    Every save overwrites the whole record or collection. There is no
    transaction spanning the profile and the ledger.
    """

    def load_profile(self) -> Profile | None:
        """Return the stored profile, if any."""

    def save_profile(self, profile: Profile) -> None:
        """Overwrite the stored profile."""

    def load_ledger(self) -> list[LedgerEntry]:
        """Return the stored ledger, newest first."""

    def save_ledger(self, entries: list[LedgerEntry]) -> None:
        """Overwrite the stored ledger."""

    def load_auth(self) -> AuthMethod | None:
        """Return how the session was signed in, if it was."""

    def save_auth(self, method: AuthMethod) -> None:
        """Persist the sign-in method."""

    def load_is_admin(self) -> bool:
        """Return True when the session was elevated to admin."""

    def save_is_admin(self, is_admin: bool) -> None:
        """Persist the admin elevation flag."""

    def clear_all(self) -> None:
        """Remove every stored key. Safe to call when nothing is stored."""
