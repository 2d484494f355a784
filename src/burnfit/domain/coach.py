"""Domain models for coach conversations."""

from dataclasses import dataclass
from enum import StrEnum


class ChatRole(StrEnum):
    """Author of a chat turn."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    """Single conversation turn."""

    role: ChatRole
    text: str
