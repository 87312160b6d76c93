"""Interactive conversation loop for the leads assistant.

Turn flow:
  1. Append the user message to the session transcript.
  2. Request a completion with the transcript and the `execute_sql` tool.
  3. Either use the direct reply, or dispatch the tool call:
       a. Unknown tool / missing `sql_query` -> fixed apology.
       b. Query error -> explanatory sentence carrying the error text.
       c. Rows -> formatted report -> streamed natural language narration.
  4. Append the assistant reply and prompt again.

Streamed narration is echoed while it arrives, so that path does not print the
reply a second time.
"""

from __future__ import annotations

import sys
import asyncio
import logging
from typing import Callable, Optional, TextIO, Tuple

from .completion import CompletionClient, ToolCall
from .query_execution import QueryExecutionAgent, format_results
from .schema import EXECUTE_SQL
from .session import ConversationSession

logger = logging.getLogger(__name__)

WELCOME = "Welcome to the Car Service Agency AI Assistant!"
UNAVAILABLE_REPLY = "Sorry, I'm experiencing some issues right now. Please try again later."
UNKNOWN_TOOL_REPLY = "I'm sorry, I don't know how to help with that."
MISSING_SQL_REPLY = "I'm sorry, I couldn't identify the SQL query to execute."
QUERY_ERROR_TEMPLATE = "An error occurred while executing the query: {error}"
EXIT_COMMAND = "exit"


class LeadsAssistant:
    """Main conversation entrypoint."""

    def __init__(
        self,
        completion: CompletionClient,
        query_exec: QueryExecutionAgent,
        session: Optional[ConversationSession] = None,
        out: Optional[TextIO] = None,
        input_func: Callable[[str], str] = input,
    ) -> None:
        self.completion = completion
        self.query_exec = query_exec
        self.session = session or ConversationSession()
        self._out = out
        self.input_func = input_func
        self.closed = False

    @property
    def out(self) -> TextIO:
        return self._out or sys.stdout

    def _say(self, text: str) -> None:
        print(text, file=self.out)

    # ---- Public API ----
    async def run(self) -> None:
        """Prompt until the user types `exit` (or input ends)."""
        self._say(WELCOME)
        self._say("Type 'exit' to quit.\n")
        while not self.closed:
            try:
                user_input = await asyncio.to_thread(self.input_func, "You: ")
            except (EOFError, KeyboardInterrupt):
                self._say("")
                user_input = EXIT_COMMAND
            if user_input.strip().lower() == EXIT_COMMAND:
                self._say("Goodbye!")
                self.closed = True
                break
            if not user_input.strip():
                continue
            await self.handle_turn(user_input)

    async def handle_turn(self, user_input: str) -> Optional[str]:
        """Run one user turn; returns the assistant reply, or None if the provider failed."""
        self.session.append("user", user_input)

        result = await self.completion.request_completion(self.session.messages)
        if result is None:
            self._say(f"Assistant: {UNAVAILABLE_REPLY}\n")
            return None

        streamed = False
        if result.tool_call is not None:
            reply, streamed = await self.invoke_tool(result.tool_call)
        else:
            reply = result.content or ""

        self.session.append("assistant", reply)
        if streamed:
            return reply
        self._say(f"Assistant: {reply}\n")
        return reply

    # ---- Internals ----
    async def invoke_tool(self, call: ToolCall) -> Tuple[str, bool]:
        """Dispatch a tool call. Returns (reply, already_streamed)."""
        if call.name != EXECUTE_SQL:
            logger.warning("Unsupported tool requested: %s", call.name)
            return UNKNOWN_TOOL_REPLY, False

        sql_query = call.arguments.get("sql_query")
        if not isinstance(sql_query, str) or not sql_query.strip():
            logger.warning("No SQL query provided in function call.")
            return MISSING_SQL_REPLY, False

        self._say(f"\nExecuting SQL Query: {sql_query}\n")
        results = await self.query_exec.run_query(sql_query)
        if isinstance(results, dict) and "error" in results:
            return QUERY_ERROR_TEMPLATE.format(error=results["error"]), False

        formatted = format_results(results)
        logger.debug("Formatted results:\n%s", formatted)
        return await self.completion.summarize(formatted, out=self.out)


__all__ = ["LeadsAssistant"]
