"""
Pydantic models for the voice bot's HTTP API and Call Automation events.

This module defines the chat turn structure sent to the language model, the
request/response bodies of ``/api/call``, and the payloads carried inside the
cloud events that Azure Communication Services posts to the callback endpoint.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChatRole(str, Enum):
    """Role of a participant in a conversation."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatTurn(BaseModel):
    """One role-tagged message in a conversation."""
    model_config = ConfigDict(frozen=True)

    role: ChatRole
    content: str

    def to_message(self) -> Dict[str, str]:
        """Return the chat-completions message dict for this turn."""
        return {"role": self.role.value, "content": self.content}


# HTTP API
class CallRequest(BaseModel):
    """Body of POST /api/call."""

    phoneNumber: str = Field(..., description="Phone number to call, E.164 format")
    prompt: str = Field(..., description="System prompt that starts the conversation")

    @field_validator("phoneNumber", "prompt")
    def validate_not_blank(cls, v):
        """Validate that the field is not empty."""
        if not v.strip():
            raise ValueError("must not be empty")
        return v


class CallResponse(BaseModel):
    """Body returned by POST /api/call once the call is placed."""

    sessionId: str
    callConnectionId: Optional[str] = None


class CallbackSummary(BaseModel):
    """Body returned by the callback endpoint."""

    processed: int = 0
    failed: int = 0


# Call Automation event payloads
class ResultInformation(BaseModel):
    """Outcome details attached to Call Automation events."""
    model_config = ConfigDict(extra="allow")

    code: Optional[int] = None
    subCode: Optional[int] = None
    message: Optional[str] = None


class CallEventData(BaseModel):
    """Fields common to every Call Automation event."""
    model_config = ConfigDict(extra="allow")

    callConnectionId: str = Field(..., description="Call the event belongs to")
    serverCallId: Optional[str] = None
    correlationId: Optional[str] = None
    operationContext: Optional[str] = None
    resultInformation: Optional[ResultInformation] = None

    @field_validator("callConnectionId")
    def validate_call_connection_id(cls, v):
        """Validate that the call connection ID is not empty."""
        if not v.strip():
            raise ValueError("callConnectionId cannot be empty")
        return v


class SpeechResult(BaseModel):
    """Recognized utterance."""
    model_config = ConfigDict(extra="allow")

    speech: str
    confidence: Optional[float] = None


class RecognizeCompletedData(CallEventData):
    """Payload of a RecognizeCompleted event."""

    recognitionType: Optional[str] = None
    speechResult: Optional[SpeechResult] = None
    dtmfResult: Optional[Dict[str, Any]] = None
    choiceResult: Optional[Dict[str, Any]] = None

    @property
    def speech(self) -> Optional[str]:
        """The recognized text, or None when the result is not a speech result."""
        if self.speechResult is None:
            return None
        return self.speechResult.speech
