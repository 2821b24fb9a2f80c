from core.errors import AgentError, InvalidRequestError  # noqa: F401
from core.db_connector import DatabaseClient  # noqa: F401
