from models.chat import ChatMessage, Route  # noqa: F401
from models.requests import SearchRequest, DatabaseRequest, AgentRequest, ResultResponse, ErrorResponse, HealthResponse  # noqa: F401
