"""POST /api/database — natural-language database management."""
from fastapi import APIRouter, Depends

from api.dependencies import get_database_agent
from core.database_agent import DatabaseAgent
from models.requests import DatabaseRequest, ResultResponse, ErrorResponse

router = APIRouter()


@router.post(
    "/database",
    response_model=ResultResponse,
    responses={400: {"model": ErrorResponse}},
    description="Execute database operations",
)
async def database(req: DatabaseRequest, agent: DatabaseAgent = Depends(get_database_agent)):
    result = await agent.handle(req.request)
    return ResultResponse(result=result)
