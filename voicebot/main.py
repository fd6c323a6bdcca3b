"""
FastAPI server for the patient-intake voice bot.

This module initializes the FastAPI application that places outbound calls
through Azure Communication Services and receives their Call Automation
callbacks. Each call has a conversation session whose transcript is sent to
Azure OpenAI; the replies are spoken to the caller, who is then listened to
again.

Clients for the cloud services are created in the application lifespan from
the environment, so the server does not start when configuration is missing.
"""

import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from azure.core.exceptions import AzureError
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.datastructures import UploadFile

from voicebot.callback_manager import CallbackManager
from voicebot.config.logging_config import configure_logging
from voicebot.config.settings import load_settings
from voicebot.handlers.call_handlers import handle_call_request
from voicebot.handlers.prompt_handlers import handle_generate_prompt
from voicebot.models.conversation import SessionManager
from voicebot.models.schemas import CallbackSummary, CallRequest, CallResponse
from voicebot.services.call_automation import CallAutomationService
from voicebot.services.chat_client import ChatCompletionClient
from voicebot.services.document_client import DocumentTextExtractor

# Configure logging
logger = configure_logging()

PORT = int(os.getenv("PORT", "8000"))
HOST = os.getenv("HOST", "0.0.0.0")

STATIC_DIR = Path(__file__).parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load settings and create the cloud clients for the app's lifetime."""
    settings = load_settings()

    chat_client = ChatCompletionClient(
        endpoint=settings.openai_endpoint,
        api_key=settings.openai_key,
        deployment=settings.openai_deployment_name,
        api_version=settings.openai_api_version,
    )
    call_service = CallAutomationService(
        connection_string=settings.acs_connection_string,
        source_phone_number=settings.acs_phone_number,
        cognitive_services_endpoint=settings.cognitive_services_endpoint,
    )
    session_manager = SessionManager()

    app.state.settings = settings
    app.state.session_manager = session_manager
    app.state.document_extractor = DocumentTextExtractor(
        settings.cognitive_services_endpoint, settings.cognitive_services_key
    )
    app.state.chat_client = chat_client
    app.state.call_service = call_service
    app.state.callback_manager = CallbackManager(session_manager, chat_client, call_service)
    logger.info(f"Voice bot ready, callbacks go to {settings.host_name}")

    try:
        yield
    finally:
        await chat_client.close()
        await call_service.close()
        logger.info(f"Shut down with {len(session_manager)} active sessions")


# Create FastAPI application
app = FastAPI(
    title="Patient Intake Voice Bot",
    description="Phone-based intake assistant using Azure Communication Services and Azure OpenAI",
    version="1.0.0",
    lifespan=lifespan,
)


@app.post("/api/generate_prompt", response_class=PlainTextResponse)
async def generate_prompt(request: Request):
    """Read an uploaded intake form and return the suggested system prompt.

    The first file in the multipart body is used, whatever its field name.
    """
    form = await request.form()
    upload = next((value for value in form.values() if isinstance(value, UploadFile)), None)
    if upload is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    document = await upload.read()
    if not document:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    try:
        prompt = await handle_generate_prompt(document, request.app.state.document_extractor)
    except AzureError as e:
        logger.error(f"Document analysis failed: {e}", exc_info=True)
        raise HTTPException(status_code=502, detail="Document analysis failed") from e

    return PlainTextResponse(prompt)


@app.post("/api/call", response_model=CallResponse)
async def start_call(call_request: CallRequest, request: Request):
    """Place an outbound call that runs the conversation seeded with the prompt."""
    state = request.app.state
    try:
        return await handle_call_request(
            call_request,
            state.session_manager,
            state.call_service,
            state.settings.host_name,
        )
    except AzureError as e:
        logger.error(f"Failed to place call: {e}", exc_info=True)
        raise HTTPException(status_code=502, detail="Failed to place call") from e


@app.post("/api/callbacks/{session_id}", response_model=CallbackSummary)
async def call_callbacks(
    session_id: str,
    request: Request,
    callerId: Optional[str] = Query(None),
):
    """Receive a batch of Call Automation cloud events for a session."""
    try:
        body = await request.json()
    except ValueError as e:
        logger.warning(f"Unparseable callback body for session {session_id}: {e}")
        raise HTTPException(status_code=400, detail="Body must be a JSON array of cloud events") from e

    events = body if isinstance(body, list) else [body]
    return await request.app.state.callback_manager.handle_callback(session_id, events, callerId)


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring system status."""
    session_manager = getattr(app.state, "session_manager", None)
    return {
        "status": "healthy",
        "active_sessions": len(session_manager) if session_manager is not None else 0,
    }


# Front-end, mounted last so it does not shadow the API routes
app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on http://{HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT)
