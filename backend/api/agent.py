"""POST /api/agent — requests routed by the multi-agent coordinator."""
from fastapi import APIRouter, Depends

from api.dependencies import get_coordinator
from core.coordinator import MultiAgentCoordinator
from models.requests import AgentRequest, ResultResponse, ErrorResponse

router = APIRouter()


@router.post(
    "/agent",
    response_model=ResultResponse,
    responses={400: {"model": ErrorResponse}},
    description="Process requests using the multi-agent coordinator",
)
async def agent(req: AgentRequest, coordinator: MultiAgentCoordinator = Depends(get_coordinator)):
    result = await coordinator.dispatch(req.request)
    return ResultResponse(result=result)
