"""
Dispatcher for Call Automation callback batches.

Azure Communication Services posts cloud events to
``/api/callbacks/{session_id}?callerId=...`` in batches. The CallbackManager
parses each event, finds the session the URL names, and routes the event to
the handler registered for its type.

Events in a batch are processed one after another in array order. A failure
in one event (malformed envelope, unknown session, model or ACS error) is
logged and counted; the remaining events are still processed.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from azure.core.messaging import CloudEvent

from voicebot.config.constants import (
    EVENT_CALL_CONNECTED,
    EVENT_CALL_DISCONNECTED,
    EVENT_CREATE_CALL_FAILED,
    EVENT_PLAY_FAILED,
    EVENT_RECOGNIZE_COMPLETED,
    EVENT_RECOGNIZE_FAILED,
    LOGGER_NAME,
)
from voicebot.handlers.callback_handlers import (
    CallbackContext,
    handle_call_connected,
    handle_call_disconnected,
    handle_operation_failed,
    handle_recognize_completed,
)
from voicebot.models.conversation import ConversationSession, SessionManager
from voicebot.models.schemas import CallbackSummary
from voicebot.services.call_automation import CallAutomationService
from voicebot.services.chat_client import ChatCompletionClient

logger = logging.getLogger(LOGGER_NAME)

# Type hint for handler functions
HandlerFunc = Callable[
    [Dict[str, Any], ConversationSession, CallbackContext],
    Awaitable[None],
]


class CallbackManager:
    """Routes Call Automation events to handlers based on the event type.

    Event types without a registered handler are ignored.
    """

    def __init__(
        self,
        session_manager: SessionManager,
        chat_client: ChatCompletionClient,
        call_service: CallAutomationService,
    ):
        self.session_manager = session_manager
        self.chat_client = chat_client
        self.call_service = call_service

        self.handlers: Dict[str, HandlerFunc] = {
            EVENT_CALL_CONNECTED: handle_call_connected,
            EVENT_RECOGNIZE_COMPLETED: handle_recognize_completed,
            EVENT_CALL_DISCONNECTED: handle_call_disconnected,
            EVENT_RECOGNIZE_FAILED: handle_operation_failed,
            EVENT_PLAY_FAILED: handle_operation_failed,
            EVENT_CREATE_CALL_FAILED: handle_operation_failed,
        }

    async def handle_callback(
        self,
        session_id: str,
        events: List[Dict[str, Any]],
        caller_id: Optional[str] = None,
    ) -> CallbackSummary:
        """Process a batch of cloud events for one session.

        Args:
            session_id: Session ID from the callback URL path
            events: Raw cloud event dicts in delivery order
            caller_id: Phone number from the callback URL query

        Returns:
            How many events were processed and how many failed
        """
        context = CallbackContext(
            self.session_manager, self.chat_client, self.call_service, caller_id
        )
        summary = CallbackSummary()

        for raw_event in events:
            try:
                handled = await self.handle_event(raw_event, session_id, context)
            except Exception as e:
                logger.error(f"Error handling event for session {session_id}: {e}", exc_info=True)
                handled = False

            if handled:
                summary.processed += 1
            else:
                summary.failed += 1

        logger.info(
            f"Callback batch for session {session_id}: "
            f"{summary.processed} processed, {summary.failed} failed"
        )
        return summary

    async def handle_event(
        self,
        raw_event: Dict[str, Any],
        session_id: str,
        context: CallbackContext,
    ) -> bool:
        """Process one cloud event.

        Returns:
            True if the event was handled or deliberately ignored, False if it
            named a session that does not exist
        """
        if not isinstance(raw_event, dict):
            raise ValueError(f"Cloud event must be a JSON object, got {type(raw_event).__name__}")

        event = CloudEvent.from_dict(raw_event)
        logger.info(f"Received event type: {event.type} for session: {session_id}")

        handler = self.handlers.get(event.type)
        if handler is None:
            logger.debug(f"Ignoring event type: {event.type}")
            return True

        session = self.session_manager.get_session(session_id)
        if session is None:
            if event.type == EVENT_CALL_DISCONNECTED:
                logger.info(f"Session {session_id} already removed")
                return True
            logger.warning(f"Skipping {event.type}: unknown session {session_id}")
            return False

        data = event.data if isinstance(event.data, dict) else {}
        await handler(data, session, context)
        return True
