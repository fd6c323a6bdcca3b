"""
Handlers module for the voice bot's HTTP endpoints and Call Automation events.

Key components:
- prompt_handlers: Turns an uploaded intake form into the bot's system prompt
  using OCR.
- call_handlers: Creates a conversation session and places the outbound call
  whose callbacks point back at it.
- callback_handlers: Per-event handlers for CallConnected, RecognizeCompleted,
  CallDisconnected and failure events, driving the speak-then-listen loop.

Usage examples:
```python
from voicebot.handlers.callback_handlers import CallbackContext, handle_call_connected

context = CallbackContext(session_manager, chat_client, call_service, caller_id="+12025550123")
session = session_manager.get_session(session_id)
if session is not None:
    await handle_call_connected(event.data, session, context)
```
"""
