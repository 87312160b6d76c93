# leads_assistant/schema.py

"""
Fixed warehouse schema, system prompt and the single tool exposed to the model.
"""

from typing import Any, Dict, List, Tuple


DATASET = "car_service_leads"
TABLE = "leads"

# (column, BigQuery type) in table order
LEADS_COLUMNS: List[Tuple[str, str]] = [
    ("lead_id", "STRING"),
    ("full_name", "STRING"),
    ("email", "STRING"),
    ("phone_number", "STRING"),
    ("car_make", "STRING"),
    ("car_model", "STRING"),
    ("car_year", "INTEGER"),
    ("service_type", "STRING"),
    ("preferred_date", "DATE"),
    ("created_at", "TIMESTAMP"),
]

EXECUTE_SQL = "execute_sql"


def build_system_prompt() -> str:
    """Render the system message describing the assistant role and table schema."""
    cols = [f"{name} ({ctype})" for name, ctype in LEADS_COLUMNS]
    column_text = ", ".join(cols[:-1]) + f", and {cols[-1]}"
    return (
        "You are a helpful AI assistant for a car service agency. "
        "You can execute SQL queries on a BigQuery database and provide natural language responses based on the data. "
        f"The database schema includes a '{DATASET}' dataset with a '{TABLE}' table. "
        f"The '{TABLE}' table has the following columns: {column_text}. "
        "This table contains information about potential customers and their service requests."
    )


SYSTEM_PROMPT = build_system_prompt()

EXECUTE_SQL_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": EXECUTE_SQL,
        "description": "Executes a SQL query on Google BigQuery and returns the results.",
        "parameters": {
            "type": "object",
            "properties": {
                "sql_query": {
                    "type": "string",
                    "description": "The SQL query to execute on BigQuery.",
                }
            },
            "required": ["sql_query"],
        },
    },
}

TOOLS: List[Dict[str, Any]] = [EXECUTE_SQL_TOOL]
