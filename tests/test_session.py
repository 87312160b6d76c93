import pytest

from leads_assistant import ConversationSession
from leads_assistant.schema import EXECUTE_SQL_TOOL, LEADS_COLUMNS, SYSTEM_PROMPT


def test_first_message_is_system_prompt():
    session = ConversationSession()
    assert session.messages == [{"role": "system", "content": SYSTEM_PROMPT}]


def test_append_preserves_order_and_returns_copies():
    session = ConversationSession()
    session.append("user", "hi")
    session.append("assistant", "hello")
    snapshot = session.messages
    snapshot.append({"role": "user", "content": "tampered"})
    assert [m["role"] for m in session.messages] == ["system", "user", "assistant"]
    assert session.last.content == "hello"
    assert len(session) == 3


def test_unknown_role_rejected():
    with pytest.raises(ValueError):
        ConversationSession().append("tool", "x")


def test_system_prompt_lists_every_column():
    for name, ctype in LEADS_COLUMNS:
        assert f"{name} ({ctype})" in SYSTEM_PROMPT
    assert "'car_service_leads' dataset" in SYSTEM_PROMPT


def test_tool_schema_requires_sql_query():
    fn = EXECUTE_SQL_TOOL["function"]
    assert fn["name"] == "execute_sql"
    assert fn["parameters"]["required"] == ["sql_query"]
    assert fn["parameters"]["properties"]["sql_query"]["type"] == "string"
