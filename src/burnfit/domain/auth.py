"""Domain models for sign-in state."""

from enum import StrEnum


class AuthMethod(StrEnum):
    """How the current session was started."""

    GOOGLE = "google"
    GUEST = "guest"
