"""
Conversation state management for outbound voice calls.

This module provides the SessionManager class which keeps the chat transcript
of every call placed by the bot, keyed by a generated session ID. Sessions live
in memory for the lifetime of the process or until their call disconnects.

Each session carries its own asyncio.Lock. Code that reads the transcript,
awaits the language model and appends the reply must hold that lock so that
overlapping callbacks for the same call cannot lose or reorder turns.
"""

import asyncio
import uuid
from typing import Dict, List, Optional

from voicebot.models.schemas import ChatRole, ChatTurn


class ConversationSession:
    """
    Chat transcript of one phone call.

    The first turn is always the system prompt; later turns are only ever
    appended.
    """

    def __init__(self, session_id: str, system_prompt: str, caller_id: Optional[str] = None):
        """
        Initialize a session seeded with the system prompt.

        Args:
            session_id: Unique identifier of the session
            system_prompt: Instructions for the language model
            caller_id: Phone number the call was placed to
        """
        self.session_id = session_id
        self.caller_id = caller_id
        self.call_connection_id: Optional[str] = None
        self._turns: List[ChatTurn] = [ChatTurn(role=ChatRole.SYSTEM, content=system_prompt)]
        self._lock = asyncio.Lock()

    @property
    def lock(self) -> asyncio.Lock:
        """Lock serializing turn mutation for this session."""
        return self._lock

    def append(self, role: ChatRole, content: str) -> ChatTurn:
        """Append a turn to the transcript and return it."""
        turn = ChatTurn(role=role, content=content)
        self._turns.append(turn)
        return turn

    def history(self) -> List[ChatTurn]:
        """Return a copy of the transcript in conversational order."""
        return list(self._turns)

    def __len__(self) -> int:
        return len(self._turns)


class SessionManager:
    """
    Registry of active call sessions.

    Sessions are created when a call is placed, looked up by the callback
    endpoint and removed when the call disconnects.
    """

    def __init__(self):
        """Initialize an empty dictionary of active sessions."""
        self.active_sessions: Dict[str, ConversationSession] = {}

    def create_session(self, system_prompt: str, caller_id: Optional[str] = None) -> ConversationSession:
        """
        Create and register a session with a freshly generated ID.

        Args:
            system_prompt: Instructions that seed the transcript
            caller_id: Phone number the call is placed to

        Returns:
            The new session
        """
        session_id = str(uuid.uuid4())
        while session_id in self.active_sessions:
            session_id = str(uuid.uuid4())
        session = ConversationSession(session_id, system_prompt, caller_id)
        self.active_sessions[session_id] = session
        return session

    def get_session(self, session_id: str) -> Optional[ConversationSession]:
        """
        Get an active session by its ID.

        Returns:
            The session, or None if it does not exist
        """
        return self.active_sessions.get(session_id)

    def remove_session(self, session_id: str) -> bool:
        """
        Remove a session from the registry.

        Returns:
            True if a session was removed, False if it did not exist
        """
        return self.active_sessions.pop(session_id, None) is not None

    def get_all_sessions(self) -> Dict[str, ConversationSession]:
        """Get all active sessions."""
        return self.active_sessions

    def __len__(self) -> int:
        return len(self.active_sessions)
