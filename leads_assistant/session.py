# leads_assistant/session.py

"""Conversation transcript owned by a single interactive session."""

from dataclasses import dataclass, field
from typing import Dict, List

from .schema import SYSTEM_PROMPT

ROLES = ("system", "user", "assistant")


@dataclass(frozen=True)
class Message:
    role: str
    content: str

    def as_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class ConversationSession:
    """Append-only, ordered transcript. The first message is always the system prompt."""

    system_prompt: str = SYSTEM_PROMPT
    _messages: List[Message] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self._messages.append(Message("system", self.system_prompt))

    def append(self, role: str, content: str) -> Message:
        if role not in ROLES:
            raise ValueError(f"unknown message role: {role}")
        message = Message(role, content)
        self._messages.append(message)
        return message

    @property
    def messages(self) -> List[Dict[str, str]]:
        """Provider-ready copy of the transcript."""
        return [m.as_dict() for m in self._messages]

    @property
    def last(self) -> Message:
        return self._messages[-1]

    def __len__(self) -> int:
        return len(self._messages)
