"""
Handles Call Automation events for an active conversation.

Each handler receives the event's data payload, the session the callback URL
points at, and a CallbackContext with the clients it needs. The conversation
is a two-state loop: on CallConnected the bot speaks first, then every
RecognizeCompleted adds the caller's utterance and the bot's answer to the
transcript and speaks again. CallDisconnected ends the session.
"""

import logging
from typing import Any, Dict, Optional

from voicebot.config.constants import LOGGER_NAME
from voicebot.models.conversation import ConversationSession, SessionManager
from voicebot.models.schemas import (
    CallEventData,
    ChatRole,
    ChatTurn,
    RecognizeCompletedData,
)
from voicebot.services.call_automation import CallAutomationService
from voicebot.services.chat_client import ChatCompletionClient

logger = logging.getLogger(LOGGER_NAME)


class CallbackContext:
    """Clients and request details shared by the event handlers."""

    def __init__(
        self,
        session_manager: SessionManager,
        chat_client: ChatCompletionClient,
        call_service: CallAutomationService,
        caller_id: Optional[str] = None,
    ):
        self.session_manager = session_manager
        self.chat_client = chat_client
        self.call_service = call_service
        self.caller_id = caller_id

    def target_for(self, session: ConversationSession) -> str:
        """Phone number to speak to: the callback's callerId, else the session's."""
        target = self.caller_id or session.caller_id
        if not target:
            raise ValueError(f"No caller phone number for session {session.session_id}")
        return target


async def _reply_and_speak(
    event: CallEventData,
    session: ConversationSession,
    context: CallbackContext,
    user_text: Optional[str] = None,
) -> None:
    """
    Generate the bot's next turn, record it and play it to the caller.

    Must be called with ``session.lock`` held. The caller's utterance (if any)
    and the reply are appended together once the model has answered, so a
    failed completion leaves the transcript unchanged.
    """
    pending = session.history()
    if user_text is not None:
        pending.append(ChatTurn(role=ChatRole.USER, content=user_text))

    reply = await context.chat_client.get_reply(pending)
    if not reply:
        raise ValueError(f"Empty reply from the language model for session {session.session_id}")

    if user_text is not None:
        session.append(ChatRole.USER, user_text)
    session.append(ChatRole.ASSISTANT, reply)
    logger.info(f"Session {session.session_id} now has {len(session)} turns")

    await context.call_service.speak_and_listen(
        event.callConnectionId,
        context.target_for(session),
        reply,
        operation_context=session.session_id,
    )


async def handle_call_connected(
    data: Dict[str, Any],
    session: ConversationSession,
    context: CallbackContext,
) -> None:
    """
    Handle CallConnected: the bot opens the conversation.

    Args:
        data: The event's data payload
        session: Session the callback belongs to
        context: Clients and caller details
    """
    event = CallEventData(**data)
    logger.info(f"Call connected: {event.callConnectionId} for session {session.session_id}")

    async with session.lock:
        session.call_connection_id = event.callConnectionId
        await _reply_and_speak(event, session, context)


async def handle_recognize_completed(
    data: Dict[str, Any],
    session: ConversationSession,
    context: CallbackContext,
) -> None:
    """
    Handle RecognizeCompleted: answer what the caller just said.

    Results that are not speech (DTMF, choices) are ignored.

    Args:
        data: The event's data payload
        session: Session the callback belongs to
        context: Clients and caller details
    """
    event = RecognizeCompletedData(**data)
    speech = event.speech
    if speech is None:
        logger.info(
            f"Ignoring {event.recognitionType or 'unknown'} recognition result "
            f"for session {session.session_id}"
        )
        return

    logger.info(f"Recognized speech for session {session.session_id}: {speech}")
    async with session.lock:
        await _reply_and_speak(event, session, context, user_text=speech)


async def handle_call_disconnected(
    data: Dict[str, Any],
    session: ConversationSession,
    context: CallbackContext,
) -> None:
    """Handle CallDisconnected: drop the session."""
    event = CallEventData(**data)
    context.session_manager.remove_session(session.session_id)
    logger.info(
        f"Call {event.callConnectionId} disconnected, session {session.session_id} removed "
        f"after {len(session)} turns"
    )


async def handle_operation_failed(
    data: Dict[str, Any],
    session: ConversationSession,
    context: CallbackContext,
) -> None:
    """Log a failed call or media operation. The transcript is not touched."""
    event = CallEventData(**data)
    info = event.resultInformation
    reason = info.message if info and info.message else "no result information"
    code = f"{info.code}/{info.subCode}" if info else "-"
    logger.warning(
        f"Operation failed on call {event.callConnectionId} for session "
        f"{session.session_id}: [{code}] {reason}"
    )
