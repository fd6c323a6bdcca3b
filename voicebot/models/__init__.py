"""
Models module for data structures and state management in the voice bot.

Key components:
- schemas: Pydantic models for chat turns, the /api/call request and response
  bodies, and the payloads of Azure Communication Services Call Automation
  events.
- conversation: In-memory session registry holding one ordered chat transcript
  per call, with a lock per session for turn mutation.

Usage examples:
```python
from voicebot.models.conversation import SessionManager
from voicebot.models.schemas import ChatRole

session_manager = SessionManager()
session = session_manager.create_session("You are a helpful receptionist.", "+12025550123")

async with session.lock:
    session.append(ChatRole.ASSISTANT, "Hello! What is your name?")
```
"""

from voicebot.models.conversation import ConversationSession, SessionManager
from voicebot.models.schemas import (
    CallbackSummary,
    CallEventData,
    CallRequest,
    CallResponse,
    ChatRole,
    ChatTurn,
    RecognizeCompletedData,
    ResultInformation,
    SpeechResult,
)
