"""
FastAPI application for the School Agent chat.

Endpoints:
- GET / - Static chat page
- POST /api/chat - Non-streaming chat endpoint
- POST /api/chat/stream - SSE streaming endpoint
- GET /health - Health check
"""
import asyncio
import json
import uuid
from contextlib import aclosing, asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel
from sse_starlette.sse import EventSourceResponse

from school_agent.config import get_settings
from school_agent.data import EXAMPLE_USER_CONTEXT
from school_agent.agent import InputError, RoutingAgent, Session, create_session, validate_utterance
from school_agent.agent.logging import log_error
from school_agent.agent.session import default_router


STATIC_DIR = Path(__file__).parent / "static"

MODEL_UNAVAILABLE = "Model not available. Please check your AGENT_MODEL environment variable or API key permissions."
NOT_CONFIGURED = "The AI service is not configured. Please check your ANTHROPIC_API_KEY environment variable."
GENERIC_ERROR = "An error occurred while processing your request"


# Request/Response models
class ChatRequest(BaseModel):
    """Chat request body. `message` is validated by the route for a uniform 400."""
    message: Any = None
    session_id: str | None = None


class ChatResponse(BaseModel):
    """Chat response body."""
    response: str
    success: bool = True
    session_id: str
    capability: str | None = None


# In-memory session storage, one lock per session to serialize turns
sessions: dict[str, Session] = {}
session_locks: dict[str, asyncio.Lock] = {}


def get_router() -> RoutingAgent:
    """Routing agent dependency (overridable in tests)."""
    return default_router()


def get_or_create_session(session_id: str | None, router: RoutingAgent) -> tuple[str, Session]:
    """Get existing session or create new one seeded with the example guardian."""
    if session_id and session_id in sessions:
        return session_id, sessions[session_id]

    new_id = session_id or uuid.uuid4().hex
    sessions[new_id] = create_session(EXAMPLE_USER_CONTEXT, router=router, session_id=new_id)
    session_locks[new_id] = asyncio.Lock()
    return new_id, sessions[new_id]


def describe_error(error: BaseException) -> tuple[int, str]:
    """
    Map a failed turn to (status_code, user-facing message).

    Provider failures are recognized by their message text and rewritten.
    """
    if isinstance(error, InputError):
        return 400, str(error)

    message = str(error) or GENERIC_ERROR
    lowered = message.lower()

    if "model" in lowered and ("404" in lowered or "not_found" in lowered):
        return 503, MODEL_UNAVAILABLE
    if "api_key" in lowered or "api key" in lowered or "authentication" in lowered:
        return 503, NOT_CONFIGURED

    return 500, message


def error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "success": False})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    missing = settings.validate()
    if missing:
        print(f"WARNING: Missing environment variables: {missing}")
        print("The agent will not be able to answer without these.")
    else:
        print("Configuration validated successfully")

    print(f"🚀 School Agent running on http://localhost:{settings.PORT}")
    print(f"📝 Chat API available at http://localhost:{settings.PORT}/api/chat")
    print(f"🔧 Using model: {settings.AGENT_MODEL}")

    yield

    # Shutdown
    sessions.clear()
    session_locks.clear()


app = FastAPI(
    title="School Agent",
    description="Multi-agent chat for Sparkyville High School guardians",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies get the same 400 as a missing message."""
    return error_response(400, "Message is required")


@app.get("/")
async def index():
    """Serve the static chat page."""
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    settings = get_settings()
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "model": settings.AGENT_MODEL,
        "missing_config": settings.validate(),
    }


@app.post("/api/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, router: RoutingAgent = Depends(get_router)):
    """
    Non-streaming chat endpoint.

    Returns the complete answer once the turn is assembled.
    """
    try:
        message = validate_utterance(request.message)
    except InputError as e:
        return error_response(400, str(e))

    session_id, session = get_or_create_session(request.session_id, router)

    try:
        async with session_locks[session_id]:
            response = await session.send_turn(message)
    except Exception as e:
        log_error("Chat error", e)
        status_code, error = describe_error(e)
        return error_response(status_code, error)

    return ChatResponse(
        response=response,
        session_id=session_id,
        capability=session.last_capability,
    )


async def generate_sse_events(
    message: str,
    session: Session,
    session_id: str,
) -> AsyncGenerator[dict, None]:
    """Generate SSE events for one streamed turn."""
    try:
        async with session_locks[session_id]:
            full_response = ""
            async with aclosing(session.stream_turn(message)) as tokens:
                async for token in tokens:
                    full_response += token
                    yield {
                        "event": "token",
                        "data": json.dumps({"token": token}),
                    }

            yield {
                "event": "done",
                "data": json.dumps({
                    "response": full_response,
                    "success": True,
                    "session_id": session_id,
                    "capability": session.last_capability,
                }),
            }

    except Exception as e:
        log_error("Chat stream error", e)
        _, error = describe_error(e)
        yield {
            "event": "error",
            "data": json.dumps({"error": error, "success": False}),
        }


@app.post("/api/chat/stream")
async def chat_stream(request: ChatRequest, router: RoutingAgent = Depends(get_router)):
    """
    SSE streaming chat endpoint.

    Events:
    - token: {"token": "..."}
    - done: {"response": "...", "success": true, "session_id": "...", "capability": "..."}
    - error: {"error": "...", "success": false}
    """
    try:
        message = validate_utterance(request.message)
    except InputError as e:
        return error_response(400, str(e))

    session_id, session = get_or_create_session(request.session_id, router)

    return EventSourceResponse(generate_sse_events(message, session, session_id))


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "school_agent.main:app",
        host=settings.API_HOST,
        port=settings.PORT,
    )
