"""POST /api/search — DuckDuckGo search summarised by the language model."""
from fastapi import APIRouter, Depends

from api.dependencies import get_search_agent
from core.search_agent import SearchAgent
from models.requests import SearchRequest, ResultResponse, ErrorResponse

router = APIRouter()


@router.post(
    "/search",
    response_model=ResultResponse,
    responses={400: {"model": ErrorResponse}},
    description="Search the internet using DuckDuckGo and get AI-summarized results",
)
async def search(req: SearchRequest, agent: SearchAgent = Depends(get_search_agent)):
    result = await agent.handle(req.query)
    return ResultResponse(result=result)
