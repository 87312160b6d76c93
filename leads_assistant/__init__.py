# leads_assistant/__init__.py

"""Conversational SQL assistant for the car service leads table.

Automatically loads a sibling `.env` file (if present) to simplify local
development. In production, prefer environment variables / secret stores.
"""

from pathlib import Path
from dotenv import load_dotenv  # type: ignore

# Attempt to load ../.env (one level above this package directory)
_env_path = Path(__file__).resolve().parent.parent / ".env"
if _env_path.exists():  # pragma: no cover - convenience side effect
	load_dotenv(dotenv_path=_env_path, override=False)

from .orchestrator import LeadsAssistant  # noqa: E402,F401  (import after dotenv load)
from .session import ConversationSession  # noqa: E402,F401

__all__ = ["LeadsAssistant", "ConversationSession"]
