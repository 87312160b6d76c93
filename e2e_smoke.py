#!/usr/bin/env python
"""End-to-end smoke test for the leads assistant against live services.

Requirements:
  Environment variables (or a .env file next to the package):
    OPENAI_API_KEY, OPENAI_MODEL
    GOOGLE_PROJECT_ID, GOOGLE_CLIENT_EMAIL, GOOGLE_PRIVATE_KEY,
    GOOGLE_PRIVATE_KEY_ID, GOOGLE_CLIENT_ID

Tests performed:
  1. Service-account configuration loads (private key newlines normalized)
  2. BigQuery reachable: SELECT 1
  3. Leads table readable: COUNT(*) on car_service_leads.leads
  4. Completion endpoint answers a direct question
  5. One full assistant turn appends exactly one assistant message (non-mandatory,
     the model decides whether to call the tool)

Exit code: 0 if all mandatory tests pass, 1 otherwise.

Note: This is a lightweight diagnostic, not a full test harness.
"""
from __future__ import annotations
import io
import sys
import asyncio
from typing import List, Dict, Any

from leads_assistant import LeadsAssistant
from leads_assistant.completion import CompletionClient
from leads_assistant.query_execution import QueryExecutionAgent, load_service_account_info
from leads_assistant.schema import DATASET, TABLE

results: List[Dict[str, Any]] = []

def record(name: str, ok: bool, detail: str = "", mandatory: bool = True):
    results.append({"test": name, "ok": ok, "detail": detail, "mandatory": mandatory})
    status = "PASS" if ok else ("SKIP" if not mandatory else "FAIL")
    print(f"[{status}] {name} - {detail}")


async def run_checks() -> None:
    # 1. configuration
    try:
        info = load_service_account_info()
        ok = "\\n" not in info["private_key"] and info["private_key"].startswith("-----BEGIN")
        record("service_account_config", ok, f"project={info['project_id']} email={info['client_email']}")
    except Exception as e:  # noqa: BLE001
        record("service_account_config", False, f"Exception: {e}")

    # 2-3. warehouse
    query_exec = None
    try:
        query_exec = QueryExecutionAgent()
        rows = await asyncio.to_thread(query_exec.execute_sql, "SELECT 1 AS ok")
        record("bigquery_select_1", rows == [{"ok": 1}], f"rows={rows}")
    except Exception as e:  # noqa: BLE001
        record("bigquery_select_1", False, f"Exception: {e}")

    if query_exec:
        res = await query_exec.run_query(f"SELECT COUNT(*) AS n FROM `{DATASET}.{TABLE}`")
        if isinstance(res, dict):
            record("leads_table_count", False, res.get("error", ""))
        else:
            record("leads_table_count", True, f"n={res[0]['n'] if res else '?'}")
    else:
        record("leads_table_count", False, "Prereq missing (BigQuery client)")

    # 4. completion
    completion = None
    try:
        completion = CompletionClient()
        reply = await completion.request_completion([{"role": "user", "content": "Reply with the word pong."}])
        ok = reply is not None and (bool(reply.content) or reply.tool_call is not None)
        record("completion_endpoint", ok, f"model={completion.model} reply={reply}")
    except Exception as e:  # noqa: BLE001
        record("completion_endpoint", False, f"Exception: {e}")

    # 5. full turn
    if completion and query_exec:
        out = io.StringIO()
        assistant = LeadsAssistant(completion, query_exec, out=out)
        before = len(assistant.session)
        reply = await assistant.handle_turn("How many leads are there in total?")
        ok = reply is not None and len(assistant.session) == before + 2 and assistant.session.last.role == "assistant"
        snippet = (reply or "")[:120].replace("\n", " ")
        record("assistant_turn", ok, f"reply={snippet}", mandatory=False)
    else:
        record("assistant_turn", False, "Prereq missing (completion or BigQuery)", mandatory=False)


asyncio.run(run_checks())

# Summary
mandatory_failures = [r for r in results if r['mandatory'] and not r['ok']]
print("\n=== SUMMARY ===")
for r in results:
    print(f"{r['test']}: {'PASS' if r['ok'] else 'FAIL'} - {r['detail']}")

if mandatory_failures:
    print(f"\n[RESULT] FAIL: {len(mandatory_failures)} mandatory test(s) failed.")
    sys.exit(1)
print("\n[RESULT] PASS: All mandatory tests succeeded.")
