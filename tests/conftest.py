import logging
import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from voicebot.callback_manager import CallbackManager
from voicebot.config.settings import Settings
from voicebot.models.conversation import SessionManager
from voicebot.services.call_automation import CallAutomationService
from voicebot.services.chat_client import ChatCompletionClient
from voicebot.services.document_client import DocumentTextExtractor

CALLER = "+12025550123"
CALL_CONNECTION_ID = "conn-1"


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before each test"""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    logging.basicConfig(level=logging.NOTSET)
    yield


def make_event(event_type, data):
    """Build a raw cloud event as Call Automation posts it."""
    return {
        "id": str(uuid.uuid4()),
        "source": f"calling/callConnections/{data.get('callConnectionId', 'none')}",
        "type": f"Microsoft.Communication.{event_type}",
        "specversion": "1.0",
        "datacontenttype": "application/json",
        "data": data,
    }


def connected_event(call_connection_id=CALL_CONNECTION_ID):
    return make_event("CallConnected", {"callConnectionId": call_connection_id})


def speech_event(speech, call_connection_id=CALL_CONNECTION_ID):
    return make_event(
        "RecognizeCompleted",
        {
            "callConnectionId": call_connection_id,
            "recognitionType": "speech",
            "speechResult": {"speech": speech},
        },
    )


@pytest.fixture
def settings():
    return Settings(
        cognitive_services_key="cog-key",
        cognitive_services_endpoint="https://cog.example.com/",
        acs_connection_string="endpoint=https://acs.example.com/;accesskey=abc",
        acs_phone_number="+18005550100",
        openai_endpoint="https://aoai.example.com/",
        openai_key="aoai-key",
        openai_deployment_name="gpt-35-turbo",
        host_name="https://bot.example.com",
    )


@pytest.fixture
def session_manager():
    return SessionManager()


@pytest.fixture
def chat_client():
    client = MagicMock(spec=ChatCompletionClient)
    client.get_reply = AsyncMock(return_value="Hello! What is your name?")
    return client


@pytest.fixture
def call_service():
    service = MagicMock(spec=CallAutomationService)
    service.place_call = AsyncMock(return_value=CALL_CONNECTION_ID)
    service.speak_and_listen = AsyncMock()
    return service


@pytest.fixture
def document_extractor():
    extractor = MagicMock(spec=DocumentTextExtractor)
    extractor.extract_text = AsyncMock(return_value="Name: ___")
    return extractor


@pytest.fixture
def callback_manager(session_manager, chat_client, call_service):
    return CallbackManager(session_manager, chat_client, call_service)


@pytest.fixture
def client(settings, session_manager, chat_client, call_service, document_extractor, callback_manager):
    """TestClient with mocked cloud clients on app.state (lifespan is not run)."""
    from voicebot.main import app

    app.state.settings = settings
    app.state.session_manager = session_manager
    app.state.chat_client = chat_client
    app.state.call_service = call_service
    app.state.document_extractor = document_extractor
    app.state.callback_manager = callback_manager
    return TestClient(app)
