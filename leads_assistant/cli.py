# leads_assistant/cli.py

"""Console entry point for the leads assistant."""

from __future__ import annotations

import os
import sys
import asyncio
import logging

from .completion import get_completion_client_from_env
from .orchestrator import LeadsAssistant
from .query_execution import get_query_agent_from_env

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.WARNING,
        stream=sys.stdout,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.getLogger("leads_assistant").setLevel(level)


def build_assistant() -> LeadsAssistant:
    return LeadsAssistant(get_completion_client_from_env(), get_query_agent_from_env())


def main() -> int:
    configure_logging()
    try:
        assistant = build_assistant()
    except ValueError as e:
        print(f"Configuration error: {e}")
        return 1
    asyncio.run(assistant.run())
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
