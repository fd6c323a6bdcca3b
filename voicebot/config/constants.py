"""
Constants and configuration values used throughout the application.

This module defines constants that are used across different parts of the application,
providing a centralized location for configuration values and making it easier to
maintain consistent naming throughout the codebase.
"""

# Logger name used throughout the application
LOGGER_NAME = "voicebot"

# Document Intelligence model used to read uploaded intake forms
DOCUMENT_MODEL_ID = "prebuilt-read"

# Azure OpenAI REST API version used when OPENAI_API_VERSION is not set
DEFAULT_OPENAI_API_VERSION = "2024-02-01"

# Speech settings for the bot's turns
VOICE_NAME = "en-US-JennyMultilingualV2Neural"
END_SILENCE_TIMEOUT_MS = 500

# Route templates
CALLBACK_PATH = "/api/callbacks/{session_id}"

# Call Automation event types
EVENT_CALL_CONNECTED = "Microsoft.Communication.CallConnected"
EVENT_CALL_DISCONNECTED = "Microsoft.Communication.CallDisconnected"
EVENT_RECOGNIZE_COMPLETED = "Microsoft.Communication.RecognizeCompleted"
EVENT_RECOGNIZE_FAILED = "Microsoft.Communication.RecognizeFailed"
EVENT_PLAY_FAILED = "Microsoft.Communication.PlayFailed"
EVENT_CREATE_CALL_FAILED = "Microsoft.Communication.CreateCallFailed"

# Preamble placed before the OCR text of an intake form
INTAKE_PROMPT_PREAMBLE = (
    "You are a receptionist at a health clinic whose primary goal is to help me, "
    "a patient, fill out their patient intake forms. You are friendly and concise. "
    "For each question in the form ask me a question to get the information, then wait "
    "for my answer. For example, start 'What is your name?', then I will respond "
    "'John Smith', then ask 'What is your date of birth?' and I will respond, "
    "'Jan 4, 1999'."
    "\n\nPATIENT INTAKE FORM:\n\n"
)
