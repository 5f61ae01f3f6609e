"""
Conversation Message Model

A single recorded message in a session's history.
History is an append-only sequence ordered by insertion.

PRIVACY: Message text may contain sensitive information.
Never log it directly.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence


@dataclass(frozen=True)
class ConversationMessage:
    """
    Immutable conversation message.

    Attributes:
        text: Message text
        is_user: True for user messages, False for assistant replies
        timestamp: When the message was recorded
    """

    text: str
    is_user: bool
    timestamp: datetime = field(default_factory=datetime.utcnow)

    @property
    def role(self) -> str:
        """Chat role for this message."""
        return "user" if self.is_user else "assistant"

    def to_dict(self) -> dict:
        """Serialize message to dictionary."""
        return {
            "text": self.text,
            "is_user": self.is_user,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ConversationMessage":
        """Create message from dictionary."""
        return cls(
            text=data.get("text", ""),
            is_user=bool(data.get("is_user", True)),
            timestamp=datetime.fromisoformat(data["timestamp"]) if "timestamp" in data else datetime.utcnow(),
        )


def user_messages(history: Sequence[ConversationMessage]) -> list[ConversationMessage]:
    """Return the user-authored messages of a history, in order."""
    return [msg for msg in history if msg.is_user]
