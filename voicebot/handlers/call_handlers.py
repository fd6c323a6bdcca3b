"""
Starts an outbound call and the conversation session that goes with it.
"""

import logging
from urllib.parse import quote_plus

from voicebot.config.constants import CALLBACK_PATH, LOGGER_NAME
from voicebot.models.conversation import SessionManager
from voicebot.models.schemas import CallRequest, CallResponse
from voicebot.services.call_automation import CallAutomationService

logger = logging.getLogger(LOGGER_NAME)


def build_callback_url(host_name: str, session_id: str, phone_number: str) -> str:
    """Callback URL carrying the session ID in the path and the callee in the query."""
    path = CALLBACK_PATH.format(session_id=session_id)
    return f"{host_name.rstrip('/')}{path}?callerId={quote_plus(phone_number)}"


async def handle_call_request(
    call_request: CallRequest,
    session_manager: SessionManager,
    call_service: CallAutomationService,
    host_name: str,
) -> CallResponse:
    """
    Create a session seeded with the prompt and dial the phone number.

    Returns once ACS has accepted the call request. If placing the call fails
    the new session is discarded and the error is re-raised.

    Args:
        call_request: Phone number and system prompt
        session_manager: Registry the new session is added to
        call_service: ACS client used to place the call
        host_name: Public base URL of this server

    Returns:
        The session ID and the ACS call connection ID
    """
    session = session_manager.create_session(call_request.prompt, call_request.phoneNumber)
    callback_url = build_callback_url(host_name, session.session_id, call_request.phoneNumber)
    logger.info(f"Placing call for session {session.session_id}")

    try:
        call_connection_id = await call_service.place_call(call_request.phoneNumber, callback_url)
    except Exception:
        session_manager.remove_session(session.session_id)
        raise

    session.call_connection_id = call_connection_id
    return CallResponse(sessionId=session.session_id, callConnectionId=call_connection_id)
