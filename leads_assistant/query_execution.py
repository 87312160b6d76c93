# leads_assistant/query_execution.py

"""
Query Execution Agent: BigQuery execution and plain-text result formatting.
"""


import os
import asyncio
import logging
from typing import Any, Dict, List, Optional, Union

from google.cloud import bigquery
from google.oauth2 import service_account

logger = logging.getLogger(__name__)

Row = Dict[str, Any]
QueryResult = Union[List[Row], Dict[str, str]]

NO_RESULTS = "The query returned no results."

_REQUIRED_ENV = {
    "project_id": "GOOGLE_PROJECT_ID",
    "client_email": "GOOGLE_CLIENT_EMAIL",
    "private_key": "GOOGLE_PRIVATE_KEY",
    "private_key_id": "GOOGLE_PRIVATE_KEY_ID",
    "client_id": "GOOGLE_CLIENT_ID",
}


def load_service_account_info() -> Dict[str, str]:
    """Build service-account info from GOOGLE_* environment variables.

    Private keys stored in env files usually carry escaped newlines; these are
    converted back to real newlines before the key is handed to google-auth.
    """
    values = {key: os.getenv(var) for key, var in _REQUIRED_ENV.items()}
    missing = [_REQUIRED_ENV[k] for k, v in values.items() if not v]
    if missing:
        raise ValueError("Missing BigQuery configuration: " + ", ".join(missing))
    info = {
        "type": "service_account",
        "token_uri": "https://oauth2.googleapis.com/token",
        **values,
    }
    info["private_key"] = info["private_key"].replace("\\n", "\n")
    return info


def format_results(rows: List[Row]) -> str:
    if not rows:
        return NO_RESULTS
    lines = ["Here are the results:\n"]
    for index, row in enumerate(rows, start=1):
        row_info = " | ".join(f"{key}: {value}" for key, value in row.items())
        lines.append(f"{index}. {row_info}\n")
    return "".join(lines)


class QueryExecutionAgent:
    def __init__(self, client: Optional[Any] = None):
        if client is None:
            info = load_service_account_info()
            credentials = service_account.Credentials.from_service_account_info(info)
            client = bigquery.Client(project=info["project_id"], credentials=credentials)
        self.client = client

    def execute_sql(self, sql_query: str) -> List[Row]:
        """Execute SQL query and return rows as plain dicts."""
        rows = self.client.query(sql_query).result()
        return [dict(row.items()) for row in rows]

    async def run_query(self, sql_query: str) -> QueryResult:
        """Run the query off the event loop; failures come back as {"error": message}."""
        logger.info("Starting execution of SQL query")
        try:
            rows = await asyncio.to_thread(self.execute_sql, sql_query)
            logger.info("Query executed successfully. Retrieved %d rows.", len(rows))
            logger.debug("Rows: %s", rows)
            return rows
        except Exception as e:  # noqa: BLE001
            logger.warning("Error executing SQL query: %s", e)
            # google.api_core exceptions carry the server text in .message
            return {"error": getattr(e, "message", None) or str(e)}
        finally:
            logger.info("SQL query execution process completed")


# Convenience factory using environment variables
def get_query_agent_from_env() -> QueryExecutionAgent:
    return QueryExecutionAgent()
