"""
MCP Multi-Agent POC — search and database agents behind one coordinator.
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import agent, database, health, search
from api.dependencies import get_chat_client, shutdown
from config import settings
from core.errors import AgentError

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger("multi_agent")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("%s starting up (llm=%s, routing=%s)…", settings.SERVICE_NAME, get_chat_client().name, settings.ROUTING_MODE)
    yield
    shutdown()
    logger.info("%s shutting down.", settings.SERVICE_NAME)


# ── App ───────────────────────────────────────────────────────────────────────
app = FastAPI(
    title=settings.SERVICE_NAME,
    description="Coordinator routing requests to an internet-search agent and a database agent.",
    version="1.0.0",
    lifespan=lifespan,
)

# ── CORS ──────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Errors ────────────────────────────────────────────────────────────────────
# Every agent fault reaches the caller as 400 {"error": message}
@app.exception_handler(AgentError)
async def agent_error_handler(request: Request, exc: AgentError):
    logger.info("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=400, content={"error": str(exc)})


# ── Routers ───────────────────────────────────────────────────────────────────
app.include_router(health.router,   prefix="/api")
app.include_router(search.router,   prefix="/api")
app.include_router(database.router, prefix="/api")
app.include_router(agent.router,    prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.API_HOST, port=settings.API_PORT)
