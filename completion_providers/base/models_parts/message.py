"""
Message DTO used across backends.

Defines the `Message` dataclass and the `Role` literal representing the sender
role of one conversation turn.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal


# Message roles accepted on the unified contract.
Role = Literal["system", "user", "assistant"]


@dataclass
class Message:
    """A single conversation turn.

    Attributes:
        role: The role of the message author (``"system"``, ``"user"`` or
            ``"assistant"``). Backends with a narrower role vocabulary remap it.
        content: Plain text content of the turn.
    """

    role: str
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role, "content": self.content}


__all__ = [
    "Message",
    "Role",
]
