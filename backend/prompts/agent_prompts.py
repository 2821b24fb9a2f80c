"""
LangChain prompt templates for the search and database agents.
Request text always comes first so a short echo of the prompt still
contains it.
"""
from langchain_core.prompts import PromptTemplate

# ── Search ────────────────────────────────────────────────────────────────────

SEARCH_SUMMARY_TEMPLATE = """\
Based on these search results, answer the question:

Question: {query}

Results: {results}"""

search_summary_prompt = PromptTemplate(
    input_variables=["query", "results"],
    template=SEARCH_SUMMARY_TEMPLATE,
)

# ── Database parameter extraction ────────────────────────────────────────────

EXTRACT_DATABASE_NAME_TEMPLATE = """\
Extract database name from: {request}
Respond with ONLY the database name."""

EXTRACT_TABLE_TEMPLATE = """\
Extract table name and columns from: {request}
Respond EXACTLY in this format: <table_name>|<column definitions>
Example: Customers|Id INT PRIMARY KEY, Name NVARCHAR(100)"""

EXTRACT_SQL_TEMPLATE = """\
Extract SQL query from: {request}
Return ONLY the raw SQL with no markdown, no backticks, no explanation."""

extract_database_name_prompt = PromptTemplate(
    input_variables=["request"],
    template=EXTRACT_DATABASE_NAME_TEMPLATE,
)
extract_table_prompt = PromptTemplate(
    input_variables=["request"],
    template=EXTRACT_TABLE_TEMPLATE,
)
extract_sql_prompt = PromptTemplate(
    input_variables=["request"],
    template=EXTRACT_SQL_TEMPLATE,
)

FRIENDLY_RESULT_TEMPLATE = """\
Present this result in a clear and friendly way:

{result}"""

friendly_result_prompt = PromptTemplate(
    input_variables=["result"],
    template=FRIENDLY_RESULT_TEMPLATE,
)

# ── Coordinator routing ───────────────────────────────────────────────────────

ROUTE_CLASSIFICATION_TEMPLATE = """\
Request: {request}

Classify the request above into one of three categories:
- "search": the user wants information from the internet.
- "database": the user wants to list, create or query databases and tables.
- "both": the request needs an internet search and a database operation.

Respond with ONLY one word: search, database, or both.
"""

route_prompt = PromptTemplate(
    input_variables=["request"],
    template=ROUTE_CLASSIFICATION_TEMPLATE,
)
