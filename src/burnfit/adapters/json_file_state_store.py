"""State store backed by one JSON document per key."""

import json
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

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
    STATE_KEYS,
    StateStore,
)

_logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class JsonFileStateStore(StateStore):
    """File implementation of the state store.

    Writes go to a temporary file that replaces the document, so a crash
    mid-write leaves the previous version in place. A document that cannot
    be parsed is renamed to ``<key>.json.corrupt`` instead of being
    overwritten by the next save.
    """

    directory: Path

    def load_profile(self) -> Profile | None:
        """Return the stored profile."""
        return self._load(PROFILE_KEY, profile_from_record)

    def save_profile(self, profile: Profile) -> None:
        """Overwrite the stored profile."""
        self._write(PROFILE_KEY, profile_to_record(profile))

    def load_ledger(self) -> list[LedgerEntry]:
        """Return the stored ledger."""
        return self._load(ENTRIES_KEY, ledger_from_records) or []

    def save_ledger(self, entries: list[LedgerEntry]) -> None:
        """Overwrite the stored ledger."""
        self._write(ENTRIES_KEY, ledger_to_records(entries))

    def load_auth(self) -> AuthMethod | None:
        """Return the stored sign-in method."""
        return self._load(AUTH_KEY, AuthMethod)

    def save_auth(self, method: AuthMethod) -> None:
        """Persist the sign-in method."""
        self._write(AUTH_KEY, str(method))

    def load_is_admin(self) -> bool:
        """Return the stored admin flag."""
        return self._load(IS_ADMIN_KEY, lambda value: value is True) or False

    def save_is_admin(self, is_admin: bool) -> None:
        """Persist the admin flag."""
        self._write(IS_ADMIN_KEY, is_admin)

    def clear_all(self) -> None:
        """Delete every state document."""
        for key in STATE_KEYS:
            self._path(key).unlink(missing_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def _load(self, key: str, parse: Callable[[object], T]) -> T | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return parse(json.loads(path.read_text(encoding="utf-8")))
        except (ValueError, KeyError, TypeError, AttributeError):
            _logger.exception("Unreadable state document %s", path)
            self._quarantine(path)
            return None

    def _write(self, key: str, value: object) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_name(f"{path.name}.tmp")
        tmp_path.write_text(json.dumps(value, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, path)

    def _quarantine(self, path: Path) -> None:
        try:
            os.replace(path, path.with_name(f"{path.name}.corrupt"))
        except OSError:
            _logger.exception("Failed to move aside %s", path)
