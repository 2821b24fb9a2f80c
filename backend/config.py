"""Application settings loaded from .env file."""
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    SERVICE_NAME: str = "MCP Multi-Agent POC"

    # Search (DuckDuckGo Instant Answer API)
    SEARCH_BASE_URL: str = "https://api.duckduckgo.com"
    SEARCH_USER_AGENT: str = "MCP-Search-Agent/1.0"
    SEARCH_TIMEOUT_SECONDS: int = 30

    # Database
    DATABASE_URL: str = (
        "mssql+pyodbc://localhost/TestDB"
        "?driver=ODBC+Driver+18+for+SQL+Server&trusted_connection=yes&TrustServerCertificate=yes"
    )
    QUERY_TIMEOUT_SECONDS: int = 30
    MAX_QUERY_ROWS: int = 100

    # Language model
    LLM_PROVIDER: Literal["mock", "ollama"] = "mock"
    OLLAMA_HOST: str = "http://localhost:11434"
    OLLAMA_MODEL: str = "qwen2.5-coder:3b"
    OLLAMA_TIMEOUT_SECONDS: int = 120
    OLLAMA_MAX_RETRIES: int = 1

    # Agents
    ROUTING_MODE: Literal["keyword", "llm"] = "keyword"
    DATABASE_REFORMAT_RESULTS: bool = False

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    CORS_ORIGINS: str = "http://localhost:5173"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
