"""Errors raised at the service boundary."""


class InvalidInputError(ValueError):
    """User input rejected before it reaches the profile or ledger."""


class ProfileNotReadyError(RuntimeError):
    """Operation needs a profile whose setup is complete."""
