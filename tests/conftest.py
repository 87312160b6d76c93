"""Shared fakes for the provider and warehouse clients (no network)."""

import io
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest

from leads_assistant.completion import CompletionClient
from leads_assistant.query_execution import QueryExecutionAgent


def text_response(content: Optional[str]):
    message = SimpleNamespace(content=content, tool_calls=None)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def tool_response(name: str, arguments: str):
    call = SimpleNamespace(id="call_1", type="function", function=SimpleNamespace(name=name, arguments=arguments))
    message = SimpleNamespace(content=None, tool_calls=[call])
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeCompletions:
    def __init__(self):
        self.responses: List[Any] = []
        self.stream_chunks: List[str] = []
        self.error: Optional[Exception] = None
        self.stream_error: Optional[Exception] = None
        self.stream_break: Optional[Exception] = None
        self.echo: Optional[io.StringIO] = None
        self.calls: List[Dict[str, Any]] = []

    @property
    def stream_calls(self) -> List[Dict[str, Any]]:
        return [c for c in self.calls if c.get("stream")]

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if kwargs.get("stream"):
            if self.stream_error:
                raise self.stream_error
            return self._stream(list(self.stream_chunks))
        if self.error:
            raise self.error
        return self.responses.pop(0)

    def _assert_echoed(self, piece):
        # the consumer must write a chunk before asking for the next one
        if self.echo is not None and piece is not None:
            assert self.echo.getvalue().endswith(piece)

    async def _stream(self, pieces):
        previous = None
        for piece in pieces:
            self._assert_echoed(previous)
            yield SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=piece))])
            previous = piece
        self._assert_echoed(previous)
        if self.stream_break:
            raise self.stream_break
        yield SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=None))])
        # usage-only chunk with no choices, as the API may send at the end
        yield SimpleNamespace(choices=[])


class FakeJob:
    def __init__(self, rows=None, error=None):
        self._rows = rows or []
        self._error = error

    def result(self):
        if self._error:
            raise self._error
        return iter(self._rows)


class FakeBigQuery:
    def __init__(self):
        self.rows: List[Dict[str, Any]] = []
        self.error: Optional[Exception] = None
        self.queries: List[str] = []

    def query(self, sql):
        self.queries.append(sql)
        return FakeJob(self.rows, self.error)


@pytest.fixture
def completions():
    return FakeCompletions()


@pytest.fixture
def completion_client(completions):
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return CompletionClient(model="test-model", max_tokens=256, client=client)


@pytest.fixture
def bigquery():
    return FakeBigQuery()


@pytest.fixture
def query_exec(bigquery):
    return QueryExecutionAgent(client=bigquery)


@pytest.fixture
def out():
    return io.StringIO()


def scripted_input(*lines):
    """input() replacement that yields `lines` then signals end of input."""
    remaining = list(lines)

    def _input(prompt):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return _input
