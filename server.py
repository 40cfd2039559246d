# server.py
"""HTTP API for the virtual patient simulator.

Routes are thin: every operation delegates to ``ConsultationService``, and
domain errors are translated to HTTP status codes here and nowhere else.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Annotated, Any, cast

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field

from virtual_patient import __version__
from virtual_patient.agents import PatientAgent, ReportAgent
from virtual_patient.config import LLMBackend, Settings, get_settings
from virtual_patient.domain.entities import SessionReport
from virtual_patient.domain.exceptions import (
    ConversationNotFoundError,
    DomainError,
    GenerationError,
    ValidationError,
)
from virtual_patient.domain.value_objects import PatientProfile
from virtual_patient.infrastructure.llm import create_llm_client
from virtual_patient.infrastructure.logging import get_logger, setup_logging
from virtual_patient.services import InMemoryConversationStore, render_report_text, report_filename
from virtual_patient.services.consultation import ConsultationService

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle resources."""
    settings = get_settings()
    setup_logging(settings.logging)

    llm_client = create_llm_client(settings)
    timeout_seconds = (
        settings.openai.timeout_seconds
        if settings.backend.backend == LLMBackend.OPENAI
        else settings.ollama.timeout_seconds
    )
    try:
        app.state.settings = settings
        app.state.llm_client = llm_client
        app.state.consultation_service = ConsultationService(
            store=InMemoryConversationStore(),
            patient_agent=PatientAgent(
                llm_client=llm_client,
                model_settings=settings.model,
                timeout_seconds=timeout_seconds,
            ),
            report_agent=ReportAgent(
                llm_client=llm_client,
                model_settings=settings.model,
                timeout_seconds=timeout_seconds,
            ),
            settings=settings.session,
        )
        logger.info("API started", backend=settings.backend.backend.value)
        yield
    finally:
        await llm_client.close()


app = FastAPI(
    title="Virtual Patient",
    version=__version__,
    description="Simulated psychological patients for consultation practice",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().api.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Dependency Injection ---
def get_consultation_service(request: Request) -> ConsultationService:
    """Get initialized ConsultationService."""
    service = getattr(request.app.state, "consultation_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Consultation service not initialized")
    return cast("ConsultationService", service)


def get_app_settings(request: Request) -> Settings:
    """Get initialized Settings."""
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise HTTPException(status_code=503, detail="Settings not initialized")
    return cast("Settings", settings)


ServiceDep = Annotated[ConsultationService, Depends(get_consultation_service)]


# --- Request Models ---
class CreateConversationRequest(BaseModel):
    """New conversation, optionally with a fixed patient profile."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    patient_info: dict[str, Any] | None = Field(default=None, alias="patientInfo")


class ChatRequestBody(BaseModel):
    """Doctor message; omit ``conversationId`` to start a new conversation."""

    model_config = ConfigDict(populate_by_name=True)

    conversation_id: str | None = Field(default=None, alias="conversationId")
    message: str = ""
    patient_info: dict[str, Any] | None = Field(default=None, alias="patientInfo")


class ReportRequest(BaseModel):
    """Report request for one conversation."""

    model_config = ConfigDict(populate_by_name=True)

    conversation_id: str = Field(default="", alias="conversationId")


# --- Endpoints ---
@app.get("/health")
async def health_check(settings: Annotated[Settings, Depends(get_app_settings)]) -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
        "backend": settings.backend.backend.value,
    }


@app.get("/conversations")
async def list_conversations(service: ServiceDep) -> dict[str, Any]:
    """List conversations, most recently updated first."""
    summaries = await service.list_conversations()
    return {"conversations": [s.to_dict() for s in summaries]}


@app.post("/conversations", status_code=201)
async def create_conversation(
    request: CreateConversationRequest,
    service: ServiceDep,
) -> dict[str, Any]:
    """Create an empty conversation."""
    try:
        profile = PatientProfile.from_dict(request.patient_info)
        record = await service.start_conversation(title=request.title, profile=profile)
    except DomainError as e:
        raise _to_http_exception(e) from e
    return {"conversation": record.to_dict()}


@app.get("/conversations/{conversation_id}/messages")
async def list_messages(conversation_id: str, service: ServiceDep) -> dict[str, Any]:
    """Messages of a conversation in creation order."""
    try:
        messages = await service.get_messages(conversation_id)
    except DomainError as e:
        raise _to_http_exception(e) from e
    return {"messages": [m.to_dict() for m in messages]}


@app.post("/chat")
async def chat(request: ChatRequestBody, service: ServiceDep) -> dict[str, Any]:
    """Send a doctor message and receive the patient's reply."""
    try:
        profile = PatientProfile.from_dict(request.patient_info)
        exchange = await service.send_message(
            request.conversation_id,
            request.message,
            profile=profile,
        )
    except DomainError as e:
        raise _to_http_exception(e) from e
    return exchange.to_dict()


@app.post("/generate-report")
async def generate_report(request: ReportRequest, service: ServiceDep) -> dict[str, Any]:
    """Generate the session report for a conversation."""
    report = await _generate_report(request, service)
    return report.to_dict()


@app.post("/generate-report/text", response_class=PlainTextResponse)
async def generate_report_text(request: ReportRequest, service: ServiceDep) -> PlainTextResponse:
    """Generate the session report as a plain-text download."""
    report = await _generate_report(request, service)
    filename = report_filename(report, datetime.now(UTC).date())
    return PlainTextResponse(
        render_report_text(report),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# --- Helper Functions ---
async def _generate_report(request: ReportRequest, service: ConsultationService) -> SessionReport:
    if not request.conversation_id:
        raise HTTPException(status_code=400, detail="Conversation ID is required")
    try:
        return await service.generate_report(request.conversation_id)
    except DomainError as e:
        raise _to_http_exception(e) from e


def _to_http_exception(error: DomainError) -> HTTPException:
    """Map a domain error to the HTTP status the API reports."""
    if isinstance(error, ConversationNotFoundError):
        return HTTPException(status_code=404, detail="Conversation not found")
    if isinstance(error, ValidationError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, GenerationError):
        logger.error("Generation failed", operation=error.operation, error=str(error))
        return HTTPException(status_code=502, detail=f"Generation failed: {error}")
    logger.error("Unhandled domain error", error=str(error), error_type=type(error).__name__)
    return HTTPException(status_code=500, detail="Internal server error")


if __name__ == "__main__":
    import uvicorn

    api = get_settings().api
    uvicorn.run("server:app", host=api.host, port=api.port, reload=api.reload)
