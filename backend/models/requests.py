"""Pydantic schemas for the agent HTTP API."""
from datetime import datetime
from pydantic import BaseModel, Field


class SearchRequest(BaseModel):
    query: str = Field(..., description="Question to search the internet for")


class DatabaseRequest(BaseModel):
    request: str = Field(..., description="Natural-language database operation")


class AgentRequest(BaseModel):
    request: str = Field(..., description="Free-text request routed by the coordinator")


class ResultResponse(BaseModel):
    result: str


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    service: str
