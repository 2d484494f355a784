"""Sign-in, sign-out and admin elevation."""

import logging
import secrets
from dataclasses import dataclass

from burnfit.domain.auth import AuthMethod
from burnfit.domain.errors import InvalidInputError
from burnfit.services.coach import CoachSession
from burnfit.services.ledger import LedgerService
from burnfit.services.profiles import ProfileService
from burnfit.services.storage import StateStore

_logger = logging.getLogger(__name__)


@dataclass
class AuthService:
    """Session flags kept next to the profile in the state store."""

    store: StateStore
    profiles: ProfileService
    ledger: LedgerService
    coach: CoachSession
    admin_token: str

    def sign_in(self, method: AuthMethod | str) -> AuthMethod:
        """Record how the user started the session."""
        try:
            resolved = AuthMethod(method)
        except ValueError as exc:
            raise InvalidInputError(f"Unsupported sign-in method: {method}") from exc
        self.store.save_auth(resolved)
        _logger.info("Signed in: method=%s", resolved)
        return resolved

    def current_method(self) -> AuthMethod | None:
        """Return the sign-in method, or None when signed out."""
        return self.store.load_auth()

    def sign_out(self) -> None:
        """Remove every persisted key for this user."""
        self.store.clear_all()
        self.profiles.forget()
        self.ledger.forget()
        self.coach.reset()
        _logger.info("Signed out and cleared local state")

    def elevate(self, token: str) -> bool:
        """Grant admin for this session when the token matches."""
        if not token or not secrets.compare_digest(
            token.encode("utf-8"), self.admin_token.encode("utf-8")
        ):
            _logger.warning("Rejected admin elevation attempt")
            return False
        self.store.save_is_admin(True)
        return True

    def is_admin(self) -> bool:
        """Return True when this session was elevated."""
        return self.store.load_is_admin()
